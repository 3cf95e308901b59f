# sentinel/backend/db/mappers.py
"""Row <-> aggregate conversion. Rows never leave the db package."""
from __future__ import annotations

from sentinel.backend.core.preferences.user_preferences import UserPreferences
from sentinel.backend.core.projects.recent_project import RecentProject
from sentinel.backend.core.simulation.run import SimulationRun
from sentinel.backend.db.models import RecentProjectRow, SimulationRunRow, UserPreferencesRow


def run_to_row(run: SimulationRun, row: SimulationRunRow | None = None) -> SimulationRunRow:
    row = row if row is not None else SimulationRunRow(id=run.id)
    row.project_path = run.project_path
    row.project_name = run.project_name
    row.tool_version = run.tool_version
    row.config_payload = run.config_payload
    row.result_payload = run.result_payload
    row.status = run.status.value
    row.has_attached_report = run.has_attached_report
    row.report_location = run.report_location
    row.duration_ms = run.duration_ms
    row.unit_count = run.unit_count
    row.sub_unit_count = run.sub_unit_count
    row.recorded_at = run.recorded_at
    row.created_at = run.created_at
    row.updated_at = run.updated_at
    return row


def row_to_run(row: SimulationRunRow) -> SimulationRun:
    return SimulationRun.restore(
        run_id=row.id,
        project_path=row.project_path,
        project_name=row.project_name,
        tool_version=row.tool_version,
        config_payload=row.config_payload,
        result_payload=row.result_payload,
        status=row.status,
        has_attached_report=row.has_attached_report,
        report_location=row.report_location,
        duration_ms=row.duration_ms,
        unit_count=row.unit_count,
        sub_unit_count=row.sub_unit_count,
        recorded_at=row.recorded_at,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def project_to_row(
    project: RecentProject, row: RecentProjectRow | None = None
) -> RecentProjectRow:
    row = row if row is not None else RecentProjectRow(path=project.path)
    row.id = project.id
    row.name = project.name
    row.game_version = project.game_version
    row.screenshot_path = project.screenshot_path
    row.unit_count = project.unit_count
    row.last_opened_at = project.last_opened_at
    row.created_at = project.created_at
    row.updated_at = project.updated_at
    return row


def row_to_project(row: RecentProjectRow) -> RecentProject:
    return RecentProject(
        id=row.id,
        path=row.path,
        name=row.name,
        game_version=row.game_version,
        screenshot_path=row.screenshot_path,
        unit_count=row.unit_count,
        last_opened_at=row.last_opened_at,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def preferences_to_row(
    preferences: UserPreferences, row: UserPreferencesRow | None = None
) -> UserPreferencesRow:
    row = row if row is not None else UserPreferencesRow(user_id=preferences.user_id)
    row.id = preferences.id
    row.theme = preferences.theme.value
    row.language = preferences.language.value
    row.window_width = preferences.window_width
    row.window_height = preferences.window_height
    row.window_x = preferences.window_x
    row.window_y = preferences.window_y
    row.window_is_maximized = preferences.window_is_maximized
    row.auto_save_interval_ms = preferences.auto_save_interval_ms
    row.max_history_entries = preferences.max_history_entries
    row.last_project_path = preferences.last_project_path
    row.last_open_date = preferences.last_open_date
    row.created_at = preferences.created_at
    row.updated_at = preferences.updated_at
    return row


def row_to_preferences(row: UserPreferencesRow) -> UserPreferences:
    return UserPreferences(
        id=row.id,
        user_id=row.user_id,
        theme=row.theme,
        language=row.language,
        window_width=row.window_width,
        window_height=row.window_height,
        window_x=row.window_x,
        window_y=row.window_y,
        window_is_maximized=row.window_is_maximized,
        auto_save_interval_ms=row.auto_save_interval_ms,
        max_history_entries=row.max_history_entries,
        last_project_path=row.last_project_path,
        last_open_date=row.last_open_date,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )
