# sentinel/backend/core/preferences/store.py
from __future__ import annotations

import copy
import logging

from sentinel.backend.contracts.repository import UserPreferencesRepository
from sentinel.backend.core.errors import NotFoundError
from sentinel.backend.core.preferences.user_preferences import UserPreferences

logger = logging.getLogger(__name__)


class InMemoryUserPreferencesRepository(UserPreferencesRepository):
    """Keyed by user id; records are copied on the way in and out."""

    def __init__(self) -> None:
        self._records: dict[str, UserPreferences] = {}

    async def find_by_user_id(self, user_id: str) -> UserPreferences | None:
        record = self._records.get(user_id)
        return copy.deepcopy(record) if record is not None else None

    async def save(self, preferences: UserPreferences) -> None:
        self._records[preferences.user_id] = copy.deepcopy(preferences)

    async def delete(self, user_id: str) -> None:
        if user_id not in self._records:
            raise NotFoundError("UserPreferences", user_id)
        del self._records[user_id]
        logger.debug("Deleted preferences for %s", user_id)

    async def exists(self, user_id: str) -> bool:
        return user_id in self._records

    def __len__(self) -> int:
        return len(self._records)
