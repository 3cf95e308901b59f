# sentinel/backend/contracts/run.py
"""Simulation run lifecycle contracts.

The transition table is the single source of truth for which status a run
may move to next:

- PENDING   -> RUNNING, CANCELLED
- RUNNING   -> COMPLETED, FAILED, CANCELLED
- COMPLETED -> (terminal)
- FAILED    -> RUNNING (retry)
- CANCELLED -> (terminal)
"""
from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class RunStatus(str, Enum):
    PENDING = "PENDING"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"

    @classmethod
    def parse(cls, value: str | RunStatus) -> RunStatus:
        """Parse a raw status string, raising ``ValueError`` if unknown."""
        if isinstance(value, RunStatus):
            return value
        try:
            return cls(value.upper())
        except (ValueError, AttributeError):
            raise ValueError(f"Invalid simulation status: {value!r}") from None


TRANSITIONS: Mapping[RunStatus, frozenset[RunStatus]] = MappingProxyType(
    {
        RunStatus.PENDING: frozenset({RunStatus.RUNNING, RunStatus.CANCELLED}),
        RunStatus.RUNNING: frozenset(
            {RunStatus.COMPLETED, RunStatus.FAILED, RunStatus.CANCELLED}
        ),
        RunStatus.COMPLETED: frozenset(),
        RunStatus.FAILED: frozenset({RunStatus.RUNNING}),
        RunStatus.CANCELLED: frozenset(),
    }
)

TERMINAL_STATUSES: frozenset[RunStatus] = frozenset(
    {RunStatus.COMPLETED, RunStatus.CANCELLED}
)


def can_transition(current: RunStatus, target: RunStatus) -> bool:
    return target in TRANSITIONS[current]


def is_terminal(status: RunStatus) -> bool:
    # FAILED is not terminal: it can be retried.
    return status in TERMINAL_STATUSES
