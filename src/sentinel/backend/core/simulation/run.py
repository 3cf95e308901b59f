# sentinel/backend/core/simulation/run.py
"""SimulationRun aggregate.

A run is one recorded execution of a simulation. Descriptive fields and
telemetry are fixed at creation; status, result payload and report
attachment change only through the named operations below, each of which
either fully applies (fields + ``updated_at``) or raises before touching
anything.

Payloads (``config_payload``, ``result_payload``) are opaque serialized
blobs and are never parsed here.
"""
from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Any

from sentinel.backend.contracts.run import RunStatus, can_transition, is_terminal
from sentinel.backend.core.errors import StateTransitionError, ValidationError
from sentinel.backend.core.utils import ensure_utc, new_id, utc_now

logger = logging.getLogger(__name__)

EMPTY_PAYLOAD = "{}"


class SimulationRun:
    def __init__(
        self,
        *,
        run_id: str,
        project_path: str,
        project_name: str,
        tool_version: str,
        config_payload: str,
        duration_ms: float,
        unit_count: int,
        sub_unit_count: int,
        status: RunStatus | str,
        result_payload: str,
        has_attached_report: bool,
        report_location: str | None,
        recorded_at: datetime,
        created_at: datetime,
        updated_at: datetime,
    ) -> None:
        _validate(
            project_path=project_path,
            project_name=project_name,
            tool_version=tool_version,
            config_payload=config_payload,
            duration_ms=duration_ms,
            unit_count=unit_count,
            sub_unit_count=sub_unit_count,
            has_attached_report=has_attached_report,
            report_location=report_location,
        )
        if not run_id:
            raise ValidationError("Run id is required")
        try:
            parsed_status = RunStatus.parse(status)
        except ValueError as exc:
            raise ValidationError(str(exc)) from None

        self._id = run_id
        self._project_path = project_path
        self._project_name = project_name
        self._tool_version = tool_version
        self._config_payload = config_payload
        self._duration_ms = duration_ms
        self._unit_count = unit_count
        self._sub_unit_count = sub_unit_count
        self._status = parsed_status
        self._result_payload = result_payload
        self._has_attached_report = has_attached_report
        self._report_location = report_location
        self._recorded_at = ensure_utc(recorded_at)
        self._created_at = ensure_utc(created_at)
        self._updated_at = ensure_utc(updated_at)

    # -- Factories -------------------------------------------------------------

    @classmethod
    def create(
        cls,
        *,
        project_path: str,
        project_name: str,
        tool_version: str,
        config_payload: str,
        duration_ms: float,
        unit_count: int,
        sub_unit_count: int,
        status: RunStatus | str | None = None,
        result_payload: str | None = None,
        has_attached_report: bool = False,
        report_location: str | None = None,
        recorded_at: datetime | None = None,
        run_id: str | None = None,
    ) -> SimulationRun:
        """
        Create a new run.

        Status defaults to PENDING and the result payload to an empty JSON
        object. ``recorded_at`` is when the simulated event happened and
        defaults to the creation time.

        Raises:
            ValidationError: If any invariant is violated.
        """
        now = utc_now()
        try:
            initial = RunStatus.parse(status) if status is not None else RunStatus.PENDING
        except ValueError as exc:
            raise ValidationError(str(exc)) from None

        return cls(
            run_id=run_id or new_id(),
            project_path=project_path,
            project_name=project_name,
            tool_version=tool_version,
            config_payload=config_payload,
            duration_ms=duration_ms,
            unit_count=unit_count,
            sub_unit_count=sub_unit_count,
            status=initial,
            result_payload=result_payload if result_payload is not None else EMPTY_PAYLOAD,
            has_attached_report=has_attached_report,
            report_location=report_location,
            recorded_at=recorded_at or now,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def restore(cls, **fields: Any) -> SimulationRun:
        """Rebuild a run from persisted fields (invariants are re-checked)."""
        return cls(**fields)

    # -- Transitions -----------------------------------------------------------

    def can_transition_to(self, target: RunStatus) -> bool:
        return can_transition(self._status, target)

    def mark_running(self) -> None:
        self._transition_to(RunStatus.RUNNING)

    def mark_completed(self, result_payload: str) -> None:
        self._transition_to(RunStatus.COMPLETED, result_payload=result_payload)

    def mark_failed(self, result_payload: str | None = None) -> None:
        # Without a payload the previous result is kept as-is.
        self._transition_to(RunStatus.FAILED, result_payload=result_payload)

    def cancel(self) -> None:
        self._transition_to(RunStatus.CANCELLED)

    def retry(self) -> None:
        """Move a FAILED run back to RUNNING. Any other origin is rejected."""
        if self._status is not RunStatus.FAILED:
            raise StateTransitionError(
                self._status,
                RunStatus.RUNNING,
                f"Only failed simulations can be retried (current status: {self._status.value})",
            )
        self._transition_to(RunStatus.RUNNING)

    # -- Auxiliary mutators ----------------------------------------------------

    def update_result_payload(self, result_payload: str) -> None:
        self._result_payload = result_payload
        self._touch()

    def attach_report(self, location: str) -> None:
        """Attach a report; a second call replaces the previous location."""
        if not location or not location.strip():
            raise ValidationError("Report location cannot be empty")
        self._report_location = location
        self._has_attached_report = True
        self._touch()

    # -- Queries ---------------------------------------------------------------

    def is_pending(self) -> bool:
        return self._status is RunStatus.PENDING

    def is_running(self) -> bool:
        return self._status is RunStatus.RUNNING

    def is_completed(self) -> bool:
        return self._status is RunStatus.COMPLETED

    def is_failed(self) -> bool:
        return self._status is RunStatus.FAILED

    def is_cancelled(self) -> bool:
        return self._status is RunStatus.CANCELLED

    def is_terminal(self) -> bool:
        return is_terminal(self._status)

    # -- Read-only fields ------------------------------------------------------

    @property
    def id(self) -> str:
        return self._id

    @property
    def project_path(self) -> str:
        return self._project_path

    @property
    def project_name(self) -> str:
        return self._project_name

    @property
    def tool_version(self) -> str:
        return self._tool_version

    @property
    def config_payload(self) -> str:
        return self._config_payload

    @property
    def result_payload(self) -> str:
        return self._result_payload

    @property
    def status(self) -> RunStatus:
        return self._status

    @property
    def has_attached_report(self) -> bool:
        return self._has_attached_report

    @property
    def report_location(self) -> str | None:
        return self._report_location

    @property
    def duration_ms(self) -> float:
        return self._duration_ms

    @property
    def unit_count(self) -> int:
        return self._unit_count

    @property
    def sub_unit_count(self) -> int:
        return self._sub_unit_count

    @property
    def recorded_at(self) -> datetime:
        return self._recorded_at

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self._id,
            "project_path": self._project_path,
            "project_name": self._project_name,
            "tool_version": self._tool_version,
            "config_payload": self._config_payload,
            "result_payload": self._result_payload,
            "status": self._status,
            "has_attached_report": self._has_attached_report,
            "report_location": self._report_location,
            "duration_ms": self._duration_ms,
            "unit_count": self._unit_count,
            "sub_unit_count": self._sub_unit_count,
            "recorded_at": self._recorded_at,
            "created_at": self._created_at,
            "updated_at": self._updated_at,
        }

    def __repr__(self) -> str:
        return f"SimulationRun(id={self._id!r}, status={self._status.value})"

    # -- Internals -------------------------------------------------------------

    def _transition_to(self, target: RunStatus, *, result_payload: str | None = None) -> None:
        if not can_transition(self._status, target):
            logger.warning(
                "Rejected run transition",
                extra={"run_id": self._id, "from": self._status.value, "to": target.value},
            )
            raise StateTransitionError(self._status, target)

        self._status = target
        if result_payload is not None:
            self._result_payload = result_payload
        self._touch()

    def _touch(self) -> None:
        self._updated_at = utc_now()


def _validate(
    *,
    project_path: str,
    project_name: str,
    tool_version: str,
    config_payload: str,
    duration_ms: float,
    unit_count: int,
    sub_unit_count: int,
    has_attached_report: bool,
    report_location: str | None,
) -> None:
    if not project_path or not project_path.strip():
        raise ValidationError("Project path is required")
    if not project_name or not project_name.strip():
        raise ValidationError("Project name is required")
    if not tool_version or not tool_version.strip():
        raise ValidationError("Tool version is required")
    if not config_payload or not config_payload.strip():
        raise ValidationError("Config payload is required")
    if not _is_non_negative(duration_ms):
        raise ValidationError("Duration must be non-negative")
    if not _is_non_negative(unit_count):
        raise ValidationError("Unit count must be non-negative")
    if not _is_non_negative(sub_unit_count):
        raise ValidationError("Sub-unit count must be non-negative")
    if has_attached_report and not (report_location and report_location.strip()):
        raise ValidationError("Report location is required when a report is attached")


def _is_non_negative(value: Any) -> bool:
    # NaN, infinities, None and bools are not telemetry
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
        and value >= 0
    )
