# sentinel/backend/core/db.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import MetaData
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from sentinel.backend.core.config import settings

# Deterministic constraint names for Alembic autogenerate
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

logger = logging.getLogger(__name__)


def create_engine(url: str) -> AsyncEngine:
    """Build an async engine; pool sizing only applies to server databases."""
    if url.startswith("sqlite"):
        return create_async_engine(url, future=True)
    return create_async_engine(
        url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_pre_ping=True,
        future=True,
    )


def make_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


@asynccontextmanager
async def session_scope(
    sessionmaker: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """
    Async context manager for DB sessions: commit on success, rollback and
    re-raise on any error.

    Constraint violations are expected (duplicate keys) and are logged
    without a traceback; the caller maps them.
    """
    async with sessionmaker() as session:
        try:
            yield session
            await session.commit()
        except IntegrityError as exc:
            await session.rollback()
            logger.warning("DB transaction rolled back: %s", exc.orig)
            raise
        except Exception:
            await session.rollback()
            logger.exception("DB transaction rolled back")
            raise


async def init_db(engine: AsyncEngine) -> None:
    """Create tables (dev only). In production prefer Alembic migrations."""
    # Import models to register them in metadata
    import sentinel.backend.db.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("DB initialized (create_all)")


class Base(DeclarativeBase):
    """
    Shared SQLAlchemy Declarative Base.

    - Uses a single metadata instance
    - Tables go into ``settings.database_schema`` when one is configured
    """

    metadata = MetaData(
        schema=settings.database_schema or None,
        naming_convention=NAMING_CONVENTION,
    )
