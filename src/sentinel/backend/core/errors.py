# sentinel/backend/core/errors.py
"""Error taxonomy shared by the domain, the storage adapters and the API.

None of these are retried or suppressed inside the core; they are raised to
the caller, which decides how to present them.
"""
from __future__ import annotations

from typing import Any


class SentinelError(Exception):
    pass


class ValidationError(SentinelError):
    """A well-formed request violates a field-level rule."""


class StateTransitionError(SentinelError):
    """A mutation is illegal given the run's current status."""

    def __init__(self, current: Any, attempted: Any, message: str | None = None) -> None:
        self.current = current
        self.attempted = attempted
        super().__init__(
            message
            or f"Cannot transition from {_label(current)} to {_label(attempted)}"
        )


class NotFoundError(SentinelError):
    def __init__(self, entity: str, entity_id: str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with id {entity_id} not found")


class ConflictError(SentinelError):
    def __init__(self, entity: str, entity_id: str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with id {entity_id} already exists")


class StorageError(SentinelError):
    """Opaque failure reported by a persistence adapter."""


def _label(status: Any) -> str:
    return getattr(status, "value", str(status))
