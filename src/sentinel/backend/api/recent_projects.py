# sentinel/backend/api/recent_projects.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from sentinel.backend.api.deps import get_project_service
from sentinel.backend.api.schemas import (
    RecentProjectOpenRequest,
    RecentProjectPageResponse,
    RecentProjectResponse,
    SuccessResponse,
)
from sentinel.backend.core.projects.service import DEFAULT_PER_PAGE, RecentProjectService

router = APIRouter(prefix="/recent-projects", tags=["recent-projects"])


@router.post("", response_model=RecentProjectResponse)
async def open_project(
    req: RecentProjectOpenRequest,
    service: RecentProjectService = Depends(get_project_service),
) -> RecentProjectResponse:
    project = await service.open_project(**req.model_dump())
    return RecentProjectResponse.from_project(project)


@router.get("", response_model=RecentProjectPageResponse)
async def list_projects(
    name: str | None = None,
    game_version: str | None = None,
    page: int = 1,
    per_page: int = DEFAULT_PER_PAGE,
    service: RecentProjectService = Depends(get_project_service),
) -> RecentProjectPageResponse:
    result = await service.list_projects(
        name_filter=name,
        game_version=game_version,
        page=page,
        per_page=per_page,
    )
    return RecentProjectPageResponse.from_page(result)


@router.delete("", response_model=SuccessResponse)
async def remove_project(
    path: str,
    service: RecentProjectService = Depends(get_project_service),
) -> SuccessResponse:
    await service.remove_project(path)
    return SuccessResponse(message=f"Project {path} removed")
