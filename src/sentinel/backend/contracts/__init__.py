"""Public contracts for the Sentinel backend."""
from sentinel.backend.contracts.run import (
    TERMINAL_STATUSES,
    TRANSITIONS,
    RunStatus,
    can_transition,
    is_terminal,
)
from sentinel.backend.contracts.events import RunEvent, RunEventType
from sentinel.backend.contracts.preferences import LanguageCode, ThemeMode
from sentinel.backend.contracts.repository import (
    RecentProjectRepository,
    RunRepository,
    UserPreferencesRepository,
)

__all__ = [
    "RunStatus", "TRANSITIONS", "TERMINAL_STATUSES", "can_transition", "is_terminal",
    "RunEvent", "RunEventType",
    "RunRepository", "RecentProjectRepository", "UserPreferencesRepository",
    "ThemeMode", "LanguageCode",
]
