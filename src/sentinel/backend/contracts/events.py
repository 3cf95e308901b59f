# sentinel/backend/contracts/events.py
"""
Change events produced by run use cases.

Use cases return the event describing what they did; whether and where it is
broadcast is decided by the caller.
"""
from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, Field

from sentinel.backend.contracts.run import RunStatus


class RunEventType(str, Enum):
    CREATED = "run.created"
    STATUS_CHANGED = "run.status_changed"
    RESULT_UPDATED = "run.result_updated"
    REPORT_ATTACHED = "run.report_attached"
    DELETED = "run.deleted"


class RunEvent(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    event_type: RunEventType
    run_id: str
    from_status: RunStatus | None = None
    to_status: RunStatus | None = None
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
    payload: dict[str, Any] = Field(default_factory=dict)
