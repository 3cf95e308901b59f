# sentinel/backend/core/preferences/user_preferences.py
"""UserPreferences aggregate.

One record per user id holding the desktop tool's UI settings. Every change
goes through a named method that validates first and only then mutates
(fields + ``updated_at``).
"""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any

from sentinel.backend.contracts.preferences import LanguageCode, ThemeMode
from sentinel.backend.core.errors import ValidationError
from sentinel.backend.core.utils import ensure_utc, new_id, utc_now

DEFAULT_USER_ID = "default"

DEFAULT_WINDOW_WIDTH = 1280
DEFAULT_WINDOW_HEIGHT = 720
DEFAULT_AUTO_SAVE_INTERVAL_MS = 30_000
DEFAULT_MAX_HISTORY_ENTRIES = 100

MIN_AUTO_SAVE_INTERVAL_MS = 5_000
MAX_HISTORY_ENTRIES_LIMIT = 1_000


@dataclass
class UserPreferences:
    id: str
    user_id: str
    theme: ThemeMode
    language: LanguageCode
    window_width: int
    window_height: int
    window_x: int | None
    window_y: int | None
    window_is_maximized: bool
    auto_save_interval_ms: int
    max_history_entries: int
    last_project_path: str | None
    last_open_date: datetime | None
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        if not self.user_id or not self.user_id.strip():
            raise ValidationError("User id is required")
        self.theme = _parse_theme(self.theme)
        self.language = _parse_language(self.language)
        _check_dimensions(self.window_width, self.window_height)
        _check_auto_save_interval(self.auto_save_interval_ms)
        _check_max_history_entries(self.max_history_entries)
        self.created_at = ensure_utc(self.created_at)
        self.updated_at = ensure_utc(self.updated_at)
        if self.last_open_date is not None:
            self.last_open_date = ensure_utc(self.last_open_date)

    @classmethod
    def create_defaults(cls, user_id: str = DEFAULT_USER_ID) -> UserPreferences:
        now = utc_now()
        return cls(
            id=new_id(),
            user_id=user_id,
            theme=ThemeMode.SYSTEM,
            language=LanguageCode.PT_BR,
            window_width=DEFAULT_WINDOW_WIDTH,
            window_height=DEFAULT_WINDOW_HEIGHT,
            window_x=None,
            window_y=None,
            window_is_maximized=False,
            auto_save_interval_ms=DEFAULT_AUTO_SAVE_INTERVAL_MS,
            max_history_entries=DEFAULT_MAX_HISTORY_ENTRIES,
            last_project_path=None,
            last_open_date=None,
            created_at=now,
            updated_at=now,
        )

    def change_theme(self, theme: ThemeMode | str) -> None:
        self.theme = _parse_theme(theme)
        self._touch()

    def change_language(self, language: LanguageCode | str) -> None:
        self.language = _parse_language(language)
        self._touch()

    def update_window_dimensions(self, width: int, height: int) -> None:
        _check_dimensions(width, height)
        self.window_width = width
        self.window_height = height
        self._touch()

    def update_window_position(self, x: int | None, y: int | None) -> None:
        self.window_x = x
        self.window_y = y
        self._touch()

    def set_window_maximized(self, maximized: bool) -> None:
        if not isinstance(maximized, bool):
            raise ValidationError("Window maximized flag must be a boolean")
        self.window_is_maximized = maximized
        self._touch()

    def change_auto_save_interval(self, interval_ms: int) -> None:
        _check_auto_save_interval(interval_ms)
        self.auto_save_interval_ms = interval_ms
        self._touch()

    def change_max_history_entries(self, entries: int) -> None:
        _check_max_history_entries(entries)
        self.max_history_entries = entries
        self._touch()

    def update_last_project_path(self, path: str | None) -> None:
        """Clearing the path keeps the previous ``last_open_date``."""
        self.last_project_path = path or None
        if path:
            self.last_open_date = utc_now()
        self._touch()

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def _touch(self) -> None:
        self.updated_at = utc_now()


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _parse_theme(value: ThemeMode | str) -> ThemeMode:
    try:
        return ThemeMode.parse(value)
    except ValueError as exc:
        raise ValidationError(str(exc)) from None


def _parse_language(value: LanguageCode | str) -> LanguageCode:
    try:
        return LanguageCode.parse(value)
    except ValueError as exc:
        raise ValidationError(str(exc)) from None


def _check_dimensions(width: Any, height: Any) -> None:
    if not (_is_number(width) and _is_number(height) and width > 0 and height > 0):
        raise ValidationError("Window dimensions must be positive")


def _check_auto_save_interval(interval_ms: Any) -> None:
    if not (_is_number(interval_ms) and interval_ms >= MIN_AUTO_SAVE_INTERVAL_MS):
        raise ValidationError(
            f"Auto-save interval must be at least {MIN_AUTO_SAVE_INTERVAL_MS}ms"
        )


def _check_max_history_entries(entries: Any) -> None:
    if not (_is_number(entries) and 1 <= entries <= MAX_HISTORY_ENTRIES_LIMIT):
        raise ValidationError(
            f"Max history entries must be between 1 and {MAX_HISTORY_ENTRIES_LIMIT}"
        )
