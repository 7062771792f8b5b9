"""Configuration management using Pydantic Settings."""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from `PG_UTIL_*` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PG_UTIL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # None lets the driver fall back to its own defaults (PGHOST, PGUSER, ...)
    database_url: Optional[str] = None

    # None disables run()/first()
    sql_path: Optional[Path] = None

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["console", "json"] = "console"


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
