# sentinel/backend/api/schemas.py
from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from sentinel.backend.contracts.preferences import LanguageCode, ThemeMode
from sentinel.backend.contracts.run import RunStatus
from sentinel.backend.core.preferences.user_preferences import UserPreferences
from sentinel.backend.core.projects.recent_project import RecentProject
from sentinel.backend.core.search import PageResult
from sentinel.backend.core.simulation.run import SimulationRun


class RunCreateRequest(BaseModel):
    project_path: str
    project_name: str
    tool_version: str
    config_payload: str
    duration_ms: float
    unit_count: int
    sub_unit_count: int
    status: RunStatus | None = None
    result_payload: str | None = None
    has_attached_report: bool = False
    report_location: str | None = None
    recorded_at: datetime | None = None


class RunStatusUpdateRequest(BaseModel):
    # Kept as a raw string; the service rejects unknown values with a 400.
    status: str
    result_payload: str | None = None


class ReportAttachRequest(BaseModel):
    location: str


class ResultUpdateRequest(BaseModel):
    result_payload: str


class RunResponse(BaseModel):
    id: str
    project_path: str
    project_name: str
    tool_version: str
    config_payload: str
    result_payload: str
    status: RunStatus
    has_attached_report: bool
    report_location: str | None = None
    duration_ms: float
    unit_count: int
    sub_unit_count: int
    recorded_at: datetime
    created_at: datetime
    updated_at: datetime
    allowed_transitions: list[RunStatus] = Field(default_factory=list)

    @classmethod
    def from_run(cls, run: SimulationRun) -> RunResponse:
        return cls(
            **run.to_dict(),
            allowed_transitions=[s for s in RunStatus if run.can_transition_to(s)],
        )


class RunPageResponse(BaseModel):
    items: list[RunResponse]
    total: int
    page: int
    per_page: int
    last_page: int

    @classmethod
    def from_page(cls, page: PageResult[SimulationRun]) -> RunPageResponse:
        mapped = page.map(RunResponse.from_run)
        return cls(
            items=mapped.items,
            total=mapped.total,
            page=mapped.page,
            per_page=mapped.per_page,
            last_page=mapped.last_page,
        )


class RecentProjectOpenRequest(BaseModel):
    path: str
    name: str
    game_version: str | None = None
    screenshot_path: str | None = None
    unit_count: int | None = None


class RecentProjectResponse(BaseModel):
    id: str
    path: str
    name: str
    game_version: str | None = None
    screenshot_path: str | None = None
    unit_count: int | None = None
    last_opened_at: datetime
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_project(cls, project: RecentProject) -> RecentProjectResponse:
        return cls(**project.to_dict())


class RecentProjectPageResponse(BaseModel):
    items: list[RecentProjectResponse]
    total: int
    page: int
    per_page: int
    last_page: int

    @classmethod
    def from_page(cls, page: PageResult[RecentProject]) -> RecentProjectPageResponse:
        mapped = page.map(RecentProjectResponse.from_project)
        return cls(
            items=mapped.items,
            total=mapped.total,
            page=mapped.page,
            per_page=mapped.per_page,
            last_page=mapped.last_page,
        )


class PreferencesUpdateRequest(BaseModel):
    # Raw strings; the aggregate validates theme and language with a 400.
    theme: str | None = None
    language: str | None = None
    window_width: int | None = None
    window_height: int | None = None
    window_x: int | None = None
    window_y: int | None = None
    window_is_maximized: bool | None = None
    auto_save_interval_ms: int | None = None
    max_history_entries: int | None = None
    last_project_path: str | None = None


class PreferencesResponse(BaseModel):
    id: str
    user_id: str
    theme: ThemeMode
    language: LanguageCode
    window_width: int
    window_height: int
    window_x: int | None = None
    window_y: int | None = None
    window_is_maximized: bool
    auto_save_interval_ms: int
    max_history_entries: int
    last_project_path: str | None = None
    last_open_date: datetime | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_preferences(cls, preferences: UserPreferences) -> PreferencesResponse:
        return cls(**preferences.to_dict())


class SuccessResponse(BaseModel):
    success: bool = True
    message: str | None = None


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime: float
    timestamp: datetime
    details: dict[str, Any] = Field(default_factory=dict)
