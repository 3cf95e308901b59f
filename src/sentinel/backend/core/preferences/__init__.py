from sentinel.backend.core.preferences.service import PreferencesService
from sentinel.backend.core.preferences.store import InMemoryUserPreferencesRepository
from sentinel.backend.core.preferences.user_preferences import (
    DEFAULT_USER_ID,
    UserPreferences,
)

__all__ = [
    "UserPreferences",
    "DEFAULT_USER_ID",
    "InMemoryUserPreferencesRepository",
    "PreferencesService",
]
