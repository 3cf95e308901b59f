# sentinel/backend/core/projects/service.py
from __future__ import annotations

import logging

from sentinel.backend.contracts.repository import RecentProjectRepository
from sentinel.backend.core import search
from sentinel.backend.core.errors import NotFoundError
from sentinel.backend.core.projects.filters import RecentProjectFilter, project_sort_key
from sentinel.backend.core.projects.recent_project import RecentProject

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 10


class RecentProjectService:
    def __init__(self, repository: RecentProjectRepository) -> None:
        self._repository = repository

    async def open_project(
        self,
        *,
        path: str,
        name: str,
        game_version: str | None = None,
        screenshot_path: str | None = None,
        unit_count: int | None = None,
    ) -> RecentProject:
        """
        Record that a project was opened.

        A known path is reopened and its metadata refreshed with whatever was
        supplied; an unknown path becomes a new entry.
        """
        existing = await self._repository.find_by_path(path)
        if existing is None:
            project = RecentProject.create(
                path=path,
                name=name,
                game_version=game_version,
                screenshot_path=screenshot_path,
                unit_count=unit_count,
            )
            logger.info("Recent project added", extra={"path": path})
        else:
            project = existing.reopen().update_metadata(
                name=name,
                game_version=game_version,
                screenshot_path=screenshot_path,
                unit_count=unit_count,
            )
            logger.info("Recent project reopened", extra={"path": path})

        await self._repository.upsert(project)
        return project

    async def list_projects(
        self,
        *,
        name_filter: str | None = None,
        game_version: str | None = None,
        page: int = 1,
        per_page: int = DEFAULT_PER_PAGE,
    ) -> search.PageResult[RecentProject]:
        request = search.PageRequest(page=page, per_page=per_page)
        request.validate()

        project_filter = RecentProjectFilter(
            name=name_filter or None,
            game_version=game_version or None,
        )
        candidates = await self._repository.all_for_search(project_filter)
        return search.search(candidates, project_filter, request, project_sort_key)

    async def remove_project(self, path: str) -> None:
        if not await self._repository.exists_by_path(path):
            raise NotFoundError("RecentProject", path)
        await self._repository.delete(path)
        logger.info("Recent project removed", extra={"path": path})
