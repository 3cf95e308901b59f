# sentinel/backend/api/deps.py
from __future__ import annotations

import logging

from fastapi import Request

from sentinel.backend.contracts.events import RunEvent
from sentinel.backend.core.preferences.service import PreferencesService
from sentinel.backend.core.projects.service import RecentProjectService
from sentinel.backend.core.simulation.service import RunService

logger = logging.getLogger(__name__)


def get_run_service(request: Request) -> RunService:
    return request.app.state.run_service


def get_project_service(request: Request) -> RecentProjectService:
    return request.app.state.project_service


def get_preferences_service(request: Request) -> PreferencesService:
    return request.app.state.preferences_service


def publish_event(request: Request, event: RunEvent) -> None:
    """Log a run event and hand it to every subscriber registered on the app."""
    logger.info(
        "Run event %s",
        event.event_type.value,
        extra={"event_id": event.id, "run_id": event.run_id},
    )
    for subscriber in getattr(request.app.state, "event_subscribers", []):
        try:
            subscriber(event)
        except Exception:
            # the change is already persisted at this point
            logger.exception("Run event subscriber failed", extra={"event_id": event.id})
