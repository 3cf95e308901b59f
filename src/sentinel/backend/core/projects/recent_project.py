# sentinel/backend/core/projects/recent_project.py
"""RecentProject aggregate: a project the desktop tool opened recently.

Instances are immutable; every change returns a new instance. The path is
the natural key of the collection.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Any

from sentinel.backend.core.errors import ValidationError
from sentinel.backend.core.utils import ensure_utc, new_id, utc_now


@dataclass(frozen=True)
class RecentProject:
    id: str
    path: str
    name: str
    last_opened_at: datetime
    created_at: datetime
    updated_at: datetime
    game_version: str | None = None
    screenshot_path: str | None = None
    unit_count: int | None = None

    def __post_init__(self) -> None:
        if not self.path or not self.path.strip():
            raise ValidationError("Project path is required")
        if not self.name or not self.name.strip():
            raise ValidationError("Project name is required")
        if self.unit_count is not None and self.unit_count < 0:
            raise ValidationError("Unit count must be non-negative")
        for attr in ("last_opened_at", "created_at", "updated_at"):
            object.__setattr__(self, attr, ensure_utc(getattr(self, attr)))

    @classmethod
    def create(
        cls,
        *,
        path: str,
        name: str,
        game_version: str | None = None,
        screenshot_path: str | None = None,
        unit_count: int | None = None,
    ) -> RecentProject:
        now = utc_now()
        return cls(
            id=new_id(),
            path=path,
            name=name,
            game_version=game_version or None,
            screenshot_path=screenshot_path or None,
            unit_count=unit_count,
            last_opened_at=now,
            created_at=now,
            updated_at=now,
        )

    def reopen(self) -> RecentProject:
        now = utc_now()
        return replace(self, last_opened_at=now, updated_at=now)

    def update_metadata(
        self,
        *,
        name: str | None = None,
        game_version: str | None = None,
        screenshot_path: str | None = None,
        unit_count: int | None = None,
    ) -> RecentProject:
        """Return a copy with the supplied fields changed; ``None`` keeps the current value."""
        return replace(
            self,
            name=name if name is not None else self.name,
            game_version=game_version if game_version is not None else self.game_version,
            screenshot_path=(
                screenshot_path if screenshot_path is not None else self.screenshot_path
            ),
            unit_count=unit_count if unit_count is not None else self.unit_count,
            updated_at=utc_now(),
        )

    def update_unit_count(self, count: int) -> RecentProject:
        if count < 0:
            raise ValidationError("Unit count must be non-negative")
        return replace(self, unit_count=count, updated_at=utc_now())

    def was_opened_within_days(self, days: int) -> bool:
        return self.last_opened_at >= utc_now() - timedelta(days=days)

    def has_screenshot(self) -> bool:
        return bool(self.screenshot_path)

    def has_unit_data(self) -> bool:
        return self.unit_count is not None and self.unit_count > 0

    def is_newer_than(self, other: RecentProject) -> bool:
        return self.last_opened_at > other.last_opened_at

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "path": self.path,
            "name": self.name,
            "game_version": self.game_version,
            "screenshot_path": self.screenshot_path,
            "unit_count": self.unit_count,
            "last_opened_at": self.last_opened_at,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
