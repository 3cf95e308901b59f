# sentinel/backend/core/preferences/service.py
from __future__ import annotations

import logging
from typing import Any, Mapping

from sentinel.backend.contracts.repository import UserPreferencesRepository
from sentinel.backend.core.errors import ValidationError
from sentinel.backend.core.preferences.user_preferences import (
    DEFAULT_USER_ID,
    UserPreferences,
)

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset(
    {
        "theme",
        "language",
        "window_width",
        "window_height",
        "window_x",
        "window_y",
        "window_is_maximized",
        "auto_save_interval_ms",
        "max_history_entries",
        "last_project_path",
    }
)


class PreferencesService:
    def __init__(self, repository: UserPreferencesRepository) -> None:
        self._repository = repository

    async def get_preferences(self, user_id: str = DEFAULT_USER_ID) -> UserPreferences:
        """Return the user's preferences, storing defaults on first access."""
        preferences = await self._repository.find_by_user_id(user_id)
        if preferences is None:
            preferences = UserPreferences.create_defaults(user_id)
            await self._repository.save(preferences)
            logger.info("Default preferences created", extra={"user_id": user_id})
        return preferences

    async def update_preferences(
        self,
        user_id: str = DEFAULT_USER_ID,
        changes: Mapping[str, Any] | None = None,
    ) -> UserPreferences:
        """
        Apply a partial update.

        Only keys present in ``changes`` are applied. A window size or position
        given on one axis keeps the stored value for the other. Nothing is
        saved unless every change is valid.

        Raises:
            ValidationError: On an unknown key or a rule violation.
        """
        changes = dict(changes or {})
        unknown = sorted(set(changes) - UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown preference fields: {', '.join(unknown)}")

        preferences = await self._repository.find_by_user_id(user_id)
        if preferences is None:
            preferences = UserPreferences.create_defaults(user_id)

        if "theme" in changes:
            preferences.change_theme(changes["theme"])
        if "language" in changes:
            preferences.change_language(changes["language"])
        if "window_width" in changes or "window_height" in changes:
            preferences.update_window_dimensions(
                changes.get("window_width", preferences.window_width),
                changes.get("window_height", preferences.window_height),
            )
        if "window_x" in changes or "window_y" in changes:
            preferences.update_window_position(
                changes.get("window_x", preferences.window_x),
                changes.get("window_y", preferences.window_y),
            )
        if "window_is_maximized" in changes:
            preferences.set_window_maximized(changes["window_is_maximized"])
        if "auto_save_interval_ms" in changes:
            preferences.change_auto_save_interval(changes["auto_save_interval_ms"])
        if "max_history_entries" in changes:
            preferences.change_max_history_entries(changes["max_history_entries"])
        if "last_project_path" in changes:
            preferences.update_last_project_path(changes["last_project_path"])

        await self._repository.save(preferences)
        logger.info(
            "Preferences updated",
            extra={"user_id": user_id, "fields": sorted(changes)},
        )
        return preferences
