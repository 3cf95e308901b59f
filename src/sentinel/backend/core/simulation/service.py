# sentinel/backend/core/simulation/service.py
"""Run use cases.

Each mutating use case loads the run, applies one named operation on the
aggregate, persists it with ``update`` and returns a ``RunChange`` carrying
the run and the event it produced. Nothing here broadcasts events.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sentinel.backend.contracts.events import RunEvent, RunEventType
from sentinel.backend.contracts.repository import RunRepository
from sentinel.backend.contracts.run import RunStatus
from sentinel.backend.core import search
from sentinel.backend.core.errors import NotFoundError, ValidationError
from sentinel.backend.core.simulation.filters import RunFilter, run_sort_key
from sentinel.backend.core.simulation.run import EMPTY_PAYLOAD, SimulationRun

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 20


@dataclass(frozen=True)
class RunChange:
    run: SimulationRun
    event: RunEvent


class RunService:
    def __init__(self, repository: RunRepository, default_per_page: int = DEFAULT_PER_PAGE) -> None:
        self._repository = repository
        self._default_per_page = default_per_page

    async def create_run(self, **fields: Any) -> RunChange:
        run = SimulationRun.create(**fields)
        await self._repository.insert(run)
        logger.info(
            "Simulation run created",
            extra={"run_id": run.id, "project_path": run.project_path, "status": run.status.value},
        )
        event = RunEvent(
            event_type=RunEventType.CREATED,
            run_id=run.id,
            to_status=run.status,
        )
        return RunChange(run=run, event=event)

    async def get_run(self, run_id: str) -> SimulationRun:
        run = await self._repository.find_by_id(run_id)
        if run is None:
            raise NotFoundError("SimulationRun", run_id)
        return run

    async def list_runs(
        self,
        *,
        project_path: str | None = None,
        status: RunStatus | str | None = None,
        tool_version: str | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
        page: int = 1,
        per_page: int | None = None,
    ) -> search.PageResult[SimulationRun]:
        """Search runs from raw, already-parsed parameters."""
        request = search.PageRequest(
            page=page,
            per_page=per_page if per_page is not None else self._default_per_page,
        )
        # Fail on bad paging before touching storage.
        request.validate()

        run_filter = RunFilter(
            project_path=project_path or None,
            status=_parse_status(status) if status else None,
            tool_version=tool_version or None,
            date_from=date_from,
            date_to=date_to,
        )
        candidates = await self._repository.all_for_search(run_filter)
        return search.search(candidates, run_filter, request, run_sort_key)

    async def update_status(
        self,
        run_id: str,
        status: RunStatus | str,
        result_payload: str | None = None,
    ) -> RunChange:
        target = _parse_status(status)
        run = await self.get_run(run_id)
        previous = run.status

        if target is RunStatus.RUNNING:
            run.mark_running()
        elif target is RunStatus.COMPLETED:
            run.mark_completed(result_payload if result_payload is not None else EMPTY_PAYLOAD)
        elif target is RunStatus.FAILED:
            run.mark_failed(result_payload)
        elif target is RunStatus.CANCELLED:
            run.cancel()
        else:
            raise ValidationError(f"Unsupported target status: {target.value}")

        return await self._persist_transition(run, previous)

    async def retry_run(self, run_id: str) -> RunChange:
        run = await self.get_run(run_id)
        previous = run.status
        run.retry()
        return await self._persist_transition(run, previous)

    async def attach_report(self, run_id: str, location: str) -> RunChange:
        run = await self.get_run(run_id)
        run.attach_report(location)
        await self._repository.update(run)
        logger.info("Report attached", extra={"run_id": run.id, "report_location": location})
        event = RunEvent(
            event_type=RunEventType.REPORT_ATTACHED,
            run_id=run.id,
            from_status=run.status,
            to_status=run.status,
            payload={"report_location": location},
        )
        return RunChange(run=run, event=event)

    async def update_result(self, run_id: str, result_payload: str) -> RunChange:
        run = await self.get_run(run_id)
        run.update_result_payload(result_payload)
        await self._repository.update(run)
        event = RunEvent(
            event_type=RunEventType.RESULT_UPDATED,
            run_id=run.id,
            from_status=run.status,
            to_status=run.status,
        )
        return RunChange(run=run, event=event)

    async def delete_run(self, run_id: str) -> RunEvent:
        if not await self._repository.exists(run_id):
            raise NotFoundError("SimulationRun", run_id)
        await self._repository.delete(run_id)
        logger.info("Simulation run deleted", extra={"run_id": run_id})
        return RunEvent(event_type=RunEventType.DELETED, run_id=run_id)

    async def _persist_transition(self, run: SimulationRun, previous: RunStatus) -> RunChange:
        await self._repository.update(run)
        logger.info(
            "Simulation run transitioned",
            extra={"run_id": run.id, "from": previous.value, "to": run.status.value},
        )
        event = RunEvent(
            event_type=RunEventType.STATUS_CHANGED,
            run_id=run.id,
            from_status=previous,
            to_status=run.status,
        )
        return RunChange(run=run, event=event)


def _parse_status(value: RunStatus | str) -> RunStatus:
    try:
        return RunStatus.parse(value)
    except ValueError as exc:
        raise ValidationError(str(exc)) from None
