# tests/conftest.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable

import pytest
import pytest_asyncio

from sentinel.backend.core.projects.recent_project import RecentProject
from sentinel.backend.core.simulation.run import SimulationRun

BASE_TIME = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


def _run_fields(**overrides: Any) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "project_path": "/projects/alpha.sentinel",
        "project_name": "Alpha",
        "tool_version": "1.4.0",
        "config_payload": '{"seed": 42}',
        "duration_ms": 1500,
        "unit_count": 12,
        "sub_unit_count": 3,
    }
    fields.update(overrides)
    return fields


@pytest.fixture
def run_fields() -> Callable[..., dict[str, Any]]:
    """Valid ``SimulationRun.create`` keyword arguments, overridable per test."""
    return _run_fields


@pytest.fixture
def make_run() -> Callable[..., SimulationRun]:
    def _make(**overrides: Any) -> SimulationRun:
        return SimulationRun.create(**_run_fields(**overrides))

    return _make


@pytest.fixture
def make_runs() -> Callable[..., list[SimulationRun]]:
    """Build ``count`` runs recorded one minute apart, oldest first."""

    def _make(count: int, **overrides: Any) -> list[SimulationRun]:
        return [
            SimulationRun.create(
                **_run_fields(recorded_at=BASE_TIME + timedelta(minutes=i), **overrides)
            )
            for i in range(count)
        ]

    return _make


@pytest.fixture
def make_project() -> Callable[..., RecentProject]:
    def _make(**overrides: Any) -> RecentProject:
        fields: dict[str, Any] = {
            "path": "/projects/alpha.sentinel",
            "name": "Alpha",
        }
        fields.update(overrides)
        return RecentProject.create(**fields)

    return _make


@pytest_asyncio.fixture
async def sessionmaker(tmp_path: Path):
    """File-backed SQLite database with all tables created."""
    from sentinel.backend.core.db import create_engine, init_db, make_sessionmaker

    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'sentinel.db'}")
    await init_db(engine)
    try:
        yield make_sessionmaker(engine)
    finally:
        await engine.dispose()
