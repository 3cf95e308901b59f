# sentinel/backend/db/repositories.py
"""SQLAlchemy adapters for the storage ports.

``all_for_search`` narrows the candidate set with a WHERE clause built only
from exact-match and range constraints, then returns rows in insertion
order. Substring constraints are left to the search engine: database case
folding (SQLite ``lower()``/``LIKE`` only fold ASCII) does not agree with
``str.lower()``, and a narrowed set must never drop a true match.

Driver failures surface as ``StorageError`` (chained); a constraint violation
on any write surfaces as ``ConflictError``.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from sentinel.backend.contracts.repository import (
    RecentProjectRepository,
    RunRepository,
    UserPreferencesRepository,
)
from sentinel.backend.core.db import session_scope
from sentinel.backend.core.errors import ConflictError, NotFoundError, StorageError
from sentinel.backend.core.preferences.user_preferences import UserPreferences
from sentinel.backend.core.projects.filters import RecentProjectFilter
from sentinel.backend.core.projects.recent_project import RecentProject
from sentinel.backend.core.simulation.filters import RunFilter
from sentinel.backend.core.simulation.run import SimulationRun
from sentinel.backend.core.utils import ensure_utc
from sentinel.backend.db.mappers import (
    preferences_to_row,
    project_to_row,
    row_to_preferences,
    row_to_project,
    row_to_run,
    run_to_row,
)
from sentinel.backend.db.models import RecentProjectRow, SimulationRunRow, UserPreferencesRow

logger = logging.getLogger(__name__)


@contextmanager
def _storage_errors(
    action: str, entity: str | None = None, entity_id: str | None = None
) -> Iterator[None]:
    try:
        yield
    except IntegrityError as exc:
        if entity is None:
            raise StorageError(f"Constraint violation during {action}") from exc
        raise ConflictError(entity, entity_id or "") from exc
    except SQLAlchemyError as exc:
        logger.error("Storage failure during %s: %s", action, exc)
        raise StorageError(f"Storage failure during {action}") from exc


class SqlRunRepository(RunRepository):
    ENTITY = "SimulationRun"

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]) -> None:
        self._sessionmaker = sessionmaker

    async def insert(self, run: SimulationRun) -> None:
        with _storage_errors("run insert", self.ENTITY, run.id):
            async with session_scope(self._sessionmaker) as session:
                session.add(run_to_row(run))

    async def update(self, run: SimulationRun) -> None:
        with _storage_errors("run update", self.ENTITY, run.id):
            async with session_scope(self._sessionmaker) as session:
                row = await _run_row(session, run.id)
                if row is not None:
                    run_to_row(run, row)
        if row is None:
            raise NotFoundError(self.ENTITY, run.id)

    async def find_by_id(self, run_id: str) -> SimulationRun | None:
        with _storage_errors("run lookup"):
            async with session_scope(self._sessionmaker) as session:
                row = await _run_row(session, run_id)
        return row_to_run(row) if row is not None else None

    async def exists(self, run_id: str) -> bool:
        with _storage_errors("run lookup"):
            async with session_scope(self._sessionmaker) as session:
                found = await session.scalar(
                    select(SimulationRunRow.seq).where(SimulationRunRow.id == run_id)
                )
        return found is not None

    async def delete(self, run_id: str) -> None:
        with _storage_errors("run delete", self.ENTITY, run_id):
            async with session_scope(self._sessionmaker) as session:
                row = await _run_row(session, run_id)
                if row is not None:
                    await session.delete(row)
        if row is None:
            raise NotFoundError(self.ENTITY, run_id)

    async def all_for_search(self, run_filter: RunFilter) -> list[SimulationRun]:
        stmt = _run_query(run_filter)
        with _storage_errors("run search"):
            async with session_scope(self._sessionmaker) as session:
                rows = (await session.execute(stmt)).scalars().all()
        return [row_to_run(row) for row in rows]


async def _run_row(session: AsyncSession, run_id: str) -> SimulationRunRow | None:
    return await session.scalar(select(SimulationRunRow).where(SimulationRunRow.id == run_id))


def _run_query(run_filter: RunFilter) -> Select[tuple[SimulationRunRow]]:
    stmt = select(SimulationRunRow)
    if run_filter.status is not None:
        stmt = stmt.where(SimulationRunRow.status == run_filter.status.value)
    if run_filter.tool_version:
        stmt = stmt.where(SimulationRunRow.tool_version == run_filter.tool_version)
    if run_filter.date_from is not None:
        stmt = stmt.where(SimulationRunRow.recorded_at >= ensure_utc(run_filter.date_from))
    if run_filter.date_to is not None:
        stmt = stmt.where(SimulationRunRow.recorded_at <= ensure_utc(run_filter.date_to))
    return stmt.order_by(SimulationRunRow.seq)


class SqlRecentProjectRepository(RecentProjectRepository):
    ENTITY = "RecentProject"

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]) -> None:
        self._sessionmaker = sessionmaker

    async def insert(self, project: RecentProject) -> None:
        with _storage_errors("project insert", self.ENTITY, project.path):
            async with session_scope(self._sessionmaker) as session:
                session.add(project_to_row(project))

    async def update(self, project: RecentProject) -> None:
        with _storage_errors("project update", self.ENTITY, project.path):
            async with session_scope(self._sessionmaker) as session:
                row = await _project_row(session, project.path)
                if row is not None:
                    project_to_row(project, row)
        if row is None:
            raise NotFoundError(self.ENTITY, project.path)

    async def upsert(self, project: RecentProject) -> None:
        with _storage_errors("project upsert", self.ENTITY, project.path):
            async with session_scope(self._sessionmaker) as session:
                row = await _project_row(session, project.path)
                if row is None:
                    session.add(project_to_row(project))
                else:
                    project_to_row(project, row)

    async def find_by_path(self, path: str) -> RecentProject | None:
        with _storage_errors("project lookup"):
            async with session_scope(self._sessionmaker) as session:
                row = await _project_row(session, path)
        return row_to_project(row) if row is not None else None

    async def find_by_id(self, project_id: str) -> RecentProject | None:
        with _storage_errors("project lookup"):
            async with session_scope(self._sessionmaker) as session:
                row = await session.scalar(
                    select(RecentProjectRow).where(RecentProjectRow.id == project_id)
                )
        return row_to_project(row) if row is not None else None

    async def exists_by_path(self, path: str) -> bool:
        return await self.find_by_path(path) is not None

    async def count(self, project_filter: RecentProjectFilter | None = None) -> int:
        # Name matching happens in Python, so count the way search does.
        candidates = await self.all_for_search(project_filter or RecentProjectFilter())
        if project_filter is None:
            return len(candidates)
        return sum(1 for p in candidates if project_filter.matches(p))

    async def delete(self, path: str) -> None:
        with _storage_errors("project delete", self.ENTITY, path):
            async with session_scope(self._sessionmaker) as session:
                row = await _project_row(session, path)
                if row is not None:
                    await session.delete(row)
        if row is None:
            raise NotFoundError(self.ENTITY, path)

    async def all_for_search(self, project_filter: RecentProjectFilter) -> list[RecentProject]:
        stmt = _project_query(project_filter)
        with _storage_errors("project search"):
            async with session_scope(self._sessionmaker) as session:
                rows = (await session.execute(stmt)).scalars().all()
        return [row_to_project(row) for row in rows]


async def _project_row(session: AsyncSession, path: str) -> RecentProjectRow | None:
    return await session.scalar(select(RecentProjectRow).where(RecentProjectRow.path == path))


def _project_query(project_filter: RecentProjectFilter) -> Select[tuple[RecentProjectRow]]:
    stmt = select(RecentProjectRow)
    if project_filter.game_version:
        stmt = stmt.where(RecentProjectRow.game_version == project_filter.game_version)
    return stmt.order_by(RecentProjectRow.seq)


class SqlUserPreferencesRepository(UserPreferencesRepository):
    ENTITY = "UserPreferences"

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]) -> None:
        self._sessionmaker = sessionmaker

    async def find_by_user_id(self, user_id: str) -> UserPreferences | None:
        with _storage_errors("preferences lookup"):
            async with session_scope(self._sessionmaker) as session:
                row = await session.get(UserPreferencesRow, user_id)
        return row_to_preferences(row) if row is not None else None

    async def save(self, preferences: UserPreferences) -> None:
        with _storage_errors("preferences save", self.ENTITY, preferences.user_id):
            async with session_scope(self._sessionmaker) as session:
                row = await session.get(UserPreferencesRow, preferences.user_id)
                if row is None:
                    session.add(preferences_to_row(preferences))
                else:
                    preferences_to_row(preferences, row)

    async def delete(self, user_id: str) -> None:
        with _storage_errors("preferences delete", self.ENTITY, user_id):
            async with session_scope(self._sessionmaker) as session:
                row = await session.get(UserPreferencesRow, user_id)
                if row is not None:
                    await session.delete(row)
        if row is None:
            raise NotFoundError(self.ENTITY, user_id)

    async def exists(self, user_id: str) -> bool:
        return await self.find_by_user_id(user_id) is not None
