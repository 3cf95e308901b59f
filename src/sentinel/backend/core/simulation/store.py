# sentinel/backend/core/simulation/store.py
"""In-memory RunRepository.

Duplicate ids on ``insert`` raise ``ConflictError`` (no silent upsert).
Runs are copied on the way in and out, so callers never share a writable
reference with the store: a change is only visible after ``update``.
"""
from __future__ import annotations

import copy
import logging
from typing import Iterable

from sentinel.backend.contracts.repository import RunRepository
from sentinel.backend.core.errors import ConflictError, NotFoundError
from sentinel.backend.core.simulation.filters import RunFilter
from sentinel.backend.core.simulation.run import SimulationRun

logger = logging.getLogger(__name__)

ENTITY = "SimulationRun"


class InMemoryRunRepository(RunRepository):
    def __init__(self) -> None:
        # dict keeps insertion order, which search relies on for ties
        self._runs: dict[str, SimulationRun] = {}

    async def insert(self, run: SimulationRun) -> None:
        if run.id in self._runs:
            raise ConflictError(ENTITY, run.id)
        self._runs[run.id] = copy.deepcopy(run)
        logger.debug("Stored run %s", run.id)

    async def update(self, run: SimulationRun) -> None:
        if run.id not in self._runs:
            raise NotFoundError(ENTITY, run.id)
        self._runs[run.id] = copy.deepcopy(run)

    async def find_by_id(self, run_id: str) -> SimulationRun | None:
        run = self._runs.get(run_id)
        return copy.deepcopy(run) if run is not None else None

    async def exists(self, run_id: str) -> bool:
        return run_id in self._runs

    async def delete(self, run_id: str) -> None:
        if run_id not in self._runs:
            raise NotFoundError(ENTITY, run_id)
        del self._runs[run_id]
        logger.debug("Deleted run %s", run_id)

    async def all_for_search(self, run_filter: RunFilter) -> list[SimulationRun]:
        return [copy.deepcopy(r) for r in self._runs.values()]

    # Test helpers

    def seed(self, runs: Iterable[SimulationRun]) -> None:
        for run in runs:
            self._runs[run.id] = copy.deepcopy(run)

    def clear(self) -> None:
        self._runs.clear()

    def __len__(self) -> int:
        return len(self._runs)
