# sentinel/backend/core/projects/filters.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterator

from sentinel.backend.core.projects.recent_project import RecentProject
from sentinel.backend.core.search import Predicate, contains_text, equals


@dataclass(frozen=True)
class RecentProjectFilter:
    name: str | None = None
    game_version: str | None = None

    def predicates(self) -> Iterator[Predicate[RecentProject]]:
        if self.name:
            yield contains_text(lambda p: p.name, self.name)
        if self.game_version:
            yield equals(lambda p: p.game_version, self.game_version)

    def matches(self, project: RecentProject) -> bool:
        return all(p(project) for p in self.predicates())


def project_sort_key(project: RecentProject) -> datetime:
    return project.last_opened_at
