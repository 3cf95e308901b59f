# sentinel/backend/main.py
"""
Sentinel backend application factory.

Wires storage adapters (in-memory or SQL) into the run, recent-project and
preferences services and exposes them through a thin FastAPI surface.
"""
from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from sentinel.backend.api.exceptions import register_exception_handlers
from sentinel.backend.api.health import router as health_router
from sentinel.backend.api.preferences import router as preferences_router
from sentinel.backend.api.recent_projects import router as recent_projects_router
from sentinel.backend.api.runs import router as runs_router
from sentinel.backend.contracts.repository import (
    RecentProjectRepository,
    RunRepository,
    UserPreferencesRepository,
)
from sentinel.backend.core.config import Settings, settings as default_settings
from sentinel.backend.core.db import create_engine, init_db, make_sessionmaker
from sentinel.backend.core.logging import configure_logging
from sentinel.backend.core.preferences.service import PreferencesService
from sentinel.backend.core.preferences.store import InMemoryUserPreferencesRepository
from sentinel.backend.core.projects.service import RecentProjectService
from sentinel.backend.core.projects.store import InMemoryRecentProjectRepository
from sentinel.backend.core.simulation.service import RunService
from sentinel.backend.core.simulation.store import InMemoryRunRepository

logger = logging.getLogger(__name__)


@dataclass
class Repositories:
    runs: RunRepository
    projects: RecentProjectRepository
    preferences: UserPreferencesRepository
    engine: AsyncEngine | None = None


def _build_repositories(cfg: Settings) -> Repositories:
    if cfg.storage_backend == "memory":
        return Repositories(
            runs=InMemoryRunRepository(),
            projects=InMemoryRecentProjectRepository(),
            preferences=InMemoryUserPreferencesRepository(),
        )

    if cfg.storage_backend == "sql":
        from sentinel.backend.db.repositories import (
            SqlRecentProjectRepository,
            SqlRunRepository,
            SqlUserPreferencesRepository,
        )

        engine = create_engine(cfg.database_url)
        sessionmaker = make_sessionmaker(engine)
        return Repositories(
            runs=SqlRunRepository(sessionmaker),
            projects=SqlRecentProjectRepository(sessionmaker),
            preferences=SqlUserPreferencesRepository(sessionmaker),
            engine=engine,
        )

    raise ValueError(f"storage backend {cfg.storage_backend!r} not supported")


def create_app(
    cfg: Settings | None = None,
    *,
    run_repository: RunRepository | None = None,
    project_repository: RecentProjectRepository | None = None,
    preferences_repository: UserPreferencesRepository | None = None,
) -> FastAPI:
    cfg = cfg or default_settings
    configure_logging(cfg.log_level, json_logs=cfg.log_json)

    repos = _build_repositories(cfg)
    if run_repository is not None:
        repos.runs = run_repository
    if project_repository is not None:
        repos.projects = project_repository
    if preferences_repository is not None:
        repos.preferences = preferences_repository
    engine = repos.engine

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if engine is not None:
            if cfg.app_env == "dev":
                await init_db(engine)
            logger.info("SQL storage ready", extra={"database_url": engine.url.render_as_string()})
        yield
        if engine is not None:
            await engine.dispose()

    app = FastAPI(
        title="Sentinel Backend",
        version=cfg.app_version,
        lifespan=lifespan,
    )

    # Explicit wiring
    app.state.settings = cfg
    app.state.started_at = time.monotonic()
    app.state.run_service = RunService(repos.runs, default_per_page=cfg.default_per_page)
    app.state.project_service = RecentProjectService(repos.projects)
    app.state.preferences_service = PreferencesService(repos.preferences)
    app.state.event_subscribers = []

    register_exception_handlers(app)
    app.include_router(health_router)
    app.include_router(runs_router)
    app.include_router(recent_projects_router)
    app.include_router(preferences_router)

    logger.info(
        "Sentinel backend created",
        extra={"app_env": cfg.app_env, "storage_backend": cfg.storage_backend},
    )
    return app
