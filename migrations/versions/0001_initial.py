"""simulation_run, recent_project and user_preferences tables

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from sentinel.backend.core.config import settings

revision: str = "0001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

schema = settings.database_schema or None


def upgrade() -> None:
    op.create_table(
        "simulation_run",
        sa.Column("seq", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("project_path", sa.String(), nullable=False),
        sa.Column("project_name", sa.String(), nullable=False),
        sa.Column("tool_version", sa.String(), nullable=False),
        sa.Column("config_payload", sa.Text(), nullable=False),
        sa.Column("result_payload", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("has_attached_report", sa.Boolean(), nullable=False),
        sa.Column("report_location", sa.String(), nullable=True),
        sa.Column("duration_ms", sa.Float(), nullable=False),
        sa.Column("unit_count", sa.Integer(), nullable=False),
        sa.Column("sub_unit_count", sa.Integer(), nullable=False),
        sa.Column("recorded_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("seq", name=op.f("pk_simulation_run")),
        sa.UniqueConstraint("id", name=op.f("uq_simulation_run_id")),
        schema=schema,
    )
    for column in ("project_path", "tool_version", "status", "recorded_at"):
        op.create_index(
            op.f(f"ix_simulation_run_{column}"),
            "simulation_run",
            [column],
            schema=schema,
        )

    op.create_table(
        "recent_project",
        sa.Column("seq", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("path", sa.String(), nullable=False),
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("game_version", sa.String(), nullable=True),
        sa.Column("screenshot_path", sa.String(), nullable=True),
        sa.Column("unit_count", sa.Integer(), nullable=True),
        sa.Column("last_opened_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("seq", name=op.f("pk_recent_project")),
        sa.UniqueConstraint("path", name=op.f("uq_recent_project_path")),
        sa.UniqueConstraint("id", name=op.f("uq_recent_project_id")),
        schema=schema,
    )
    for column in ("name", "game_version", "last_opened_at"):
        op.create_index(
            op.f(f"ix_recent_project_{column}"),
            "recent_project",
            [column],
            schema=schema,
        )


    op.create_table(
        "user_preferences",
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("theme", sa.String(length=16), nullable=False),
        sa.Column("language", sa.String(length=16), nullable=False),
        sa.Column("window_width", sa.Integer(), nullable=False),
        sa.Column("window_height", sa.Integer(), nullable=False),
        sa.Column("window_x", sa.Integer(), nullable=True),
        sa.Column("window_y", sa.Integer(), nullable=True),
        sa.Column("window_is_maximized", sa.Boolean(), nullable=False),
        sa.Column("auto_save_interval_ms", sa.Integer(), nullable=False),
        sa.Column("max_history_entries", sa.Integer(), nullable=False),
        sa.Column("last_project_path", sa.String(), nullable=True),
        sa.Column("last_open_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("user_id", name=op.f("pk_user_preferences")),
        sa.UniqueConstraint("id", name=op.f("uq_user_preferences_id")),
        schema=schema,
    )


def downgrade() -> None:
    op.drop_table("user_preferences", schema=schema)
    op.drop_table("recent_project", schema=schema)
    op.drop_table("simulation_run", schema=schema)
