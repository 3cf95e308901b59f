# sentinel/backend/db/models.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from sentinel.backend.core.db import Base
from sentinel.backend.core.utils import utc_now


class SimulationRunRow(Base):
    __tablename__ = "simulation_run"

    # Insertion sequence; breaks ties on recorded_at in store order.
    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    project_path: Mapped[str] = mapped_column(String, index=True, nullable=False)
    project_name: Mapped[str] = mapped_column(String, nullable=False)
    tool_version: Mapped[str] = mapped_column(String, index=True, nullable=False)
    config_payload: Mapped[str] = mapped_column(Text, nullable=False)
    result_payload: Mapped[str] = mapped_column(Text, nullable=False, default="{}")
    status: Mapped[str] = mapped_column(
        String(16), index=True, nullable=False, default="PENDING"
    )  # PENDING|RUNNING|COMPLETED|FAILED|CANCELLED

    has_attached_report: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    report_location: Mapped[str | None] = mapped_column(String, nullable=True)

    duration_ms: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    unit_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sub_unit_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    recorded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), index=True, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )


class RecentProjectRow(Base):
    __tablename__ = "recent_project"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    path: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String, index=True, nullable=False)
    game_version: Mapped[str | None] = mapped_column(String, index=True, nullable=True)
    screenshot_path: Mapped[str | None] = mapped_column(String, nullable=True)
    unit_count: Mapped[int | None] = mapped_column(Integer, nullable=True)

    last_opened_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), index=True, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )


class UserPreferencesRow(Base):
    __tablename__ = "user_preferences"

    user_id: Mapped[str] = mapped_column(String, primary_key=True)
    id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    theme: Mapped[str] = mapped_column(String(16), nullable=False, default="SYSTEM")
    language: Mapped[str] = mapped_column(String(16), nullable=False, default="pt-BR")

    window_width: Mapped[int] = mapped_column(Integer, nullable=False)
    window_height: Mapped[int] = mapped_column(Integer, nullable=False)
    window_x: Mapped[int | None] = mapped_column(Integer, nullable=True)
    window_y: Mapped[int | None] = mapped_column(Integer, nullable=True)
    window_is_maximized: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    auto_save_interval_ms: Mapped[int] = mapped_column(Integer, nullable=False)
    max_history_entries: Mapped[int] = mapped_column(Integer, nullable=False)
    last_project_path: Mapped[str | None] = mapped_column(String, nullable=True)
    last_open_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )
