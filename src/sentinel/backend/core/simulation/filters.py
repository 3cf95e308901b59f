# sentinel/backend/core/simulation/filters.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterator

from sentinel.backend.contracts.run import RunStatus
from sentinel.backend.core.search import Predicate, contains_text, equals, within
from sentinel.backend.core.simulation.run import SimulationRun
from sentinel.backend.core.utils import ensure_utc


@dataclass(frozen=True)
class RunFilter:
    """Optional constraints on a run search. ``None`` means unconstrained."""

    project_path: str | None = None
    status: RunStatus | None = None
    tool_version: str | None = None
    date_from: datetime | None = None
    date_to: datetime | None = None

    def predicates(self) -> Iterator[Predicate[SimulationRun]]:
        if self.project_path:
            yield contains_text(lambda r: r.project_path, self.project_path)
        if self.status is not None:
            yield equals(lambda r: r.status, self.status)
        if self.tool_version:
            yield equals(lambda r: r.tool_version, self.tool_version)
        if self.date_from is not None or self.date_to is not None:
            yield within(lambda r: r.recorded_at, self.date_from, self.date_to)

    def matches(self, run: SimulationRun) -> bool:
        return all(p(run) for p in self.predicates())


def run_sort_key(run: SimulationRun) -> datetime:
    return ensure_utc(run.recorded_at)
