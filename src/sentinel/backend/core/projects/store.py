# sentinel/backend/core/projects/store.py
from __future__ import annotations

import logging
from typing import Iterable

from sentinel.backend.contracts.repository import RecentProjectRepository
from sentinel.backend.core.errors import ConflictError, NotFoundError
from sentinel.backend.core.projects.filters import RecentProjectFilter
from sentinel.backend.core.projects.recent_project import RecentProject

logger = logging.getLogger(__name__)

ENTITY = "RecentProject"


class InMemoryRecentProjectRepository(RecentProjectRepository):
    """Keyed by path. Projects are immutable, so no copying is needed."""

    def __init__(self) -> None:
        self._projects: dict[str, RecentProject] = {}

    async def insert(self, project: RecentProject) -> None:
        if project.path in self._projects:
            raise ConflictError(ENTITY, project.path)
        self._projects[project.path] = project

    async def update(self, project: RecentProject) -> None:
        if project.path not in self._projects:
            raise NotFoundError(ENTITY, project.path)
        self._projects[project.path] = project

    async def upsert(self, project: RecentProject) -> None:
        self._projects[project.path] = project

    async def find_by_path(self, path: str) -> RecentProject | None:
        return self._projects.get(path)

    async def find_by_id(self, project_id: str) -> RecentProject | None:
        return next((p for p in self._projects.values() if p.id == project_id), None)

    async def exists_by_path(self, path: str) -> bool:
        return path in self._projects

    async def count(self, project_filter: RecentProjectFilter | None = None) -> int:
        if project_filter is None:
            return len(self._projects)
        return sum(1 for p in self._projects.values() if project_filter.matches(p))

    async def delete(self, path: str) -> None:
        if path not in self._projects:
            raise NotFoundError(ENTITY, path)
        del self._projects[path]
        logger.debug("Deleted recent project %s", path)

    async def all_for_search(self, project_filter: RecentProjectFilter) -> list[RecentProject]:
        return list(self._projects.values())

    def seed(self, projects: Iterable[RecentProject]) -> None:
        for project in projects:
            self._projects[project.path] = project

    def clear(self) -> None:
        self._projects.clear()
