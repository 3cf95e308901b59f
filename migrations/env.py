# migrations/env.py
from __future__ import annotations

import asyncio
import os
from logging.config import fileConfig

from alembic import context
from dotenv import load_dotenv
from sqlalchemy import pool, text
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

# .env must be loaded before the settings module is imported
load_dotenv(os.path.join(os.path.dirname(__file__), "..", ".env"))

from sentinel.backend.core.config import settings  # noqa: E402
from sentinel.backend.core.db import Base  # noqa: E402
import sentinel.backend.db.models  # noqa: E402,F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

SCHEMA = settings.database_schema or None
IS_SQLITE = settings.database_url.startswith("sqlite")


def include_name(name, type_, parent_names) -> bool:
    # Only look at our own schema when one is configured
    if SCHEMA is not None and type_ == "schema":
        return name == SCHEMA
    return True


def _context_options() -> dict:
    return {
        "target_metadata": Base.metadata,
        "include_name": include_name,
        "include_schemas": SCHEMA is not None,
        "version_table_schema": SCHEMA,
        "compare_type": True,
        "render_as_batch": IS_SQLITE,
    }


def run_offline() -> None:
    context.configure(
        url=settings.database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_context_options(),
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate(connection: Connection) -> None:
    context.configure(connection=connection, **_context_options())
    with context.begin_transaction():
        context.run_migrations()


async def run_online() -> None:
    engine = create_async_engine(settings.database_url, poolclass=pool.NullPool)
    async with engine.begin() as conn:
        if SCHEMA is not None and not IS_SQLITE:
            await conn.execute(text(f'CREATE SCHEMA IF NOT EXISTS "{SCHEMA}"'))
        await conn.run_sync(_migrate)
    await engine.dispose()


if context.is_offline_mode():
    run_offline()
else:
    asyncio.run(run_online())
