# sentinel/backend/core/config.py
"""
Central configuration for the Sentinel backend.

Environment variables (or a ``.env`` file) override defaults.
"""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven settings with sensible defaults."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    app_version: str = "1.0.0"
    log_level: str = "INFO"
    log_json: bool = Field(default=False, description="Emit JSON log lines")

    # memory | sql
    storage_backend: str = Field(default="memory")

    database_url: str = Field(
        default="sqlite+aiosqlite:///./sentinel.db",
        description="Async SQLAlchemy database URL",
    )
    database_schema: str | None = Field(
        default=None,
        description="Database schema for all tables (empty = driver default)",
    )
    database_pool_size: int = Field(default=10)
    database_max_overflow: int = Field(default=20)

    default_per_page: int = Field(default=20, ge=1, le=100)


settings = Settings()
