"""
Application settings using pydantic-settings for type-safe configuration.

Process-level knobs (log level, default matching mode, config overrides file)
are read from MATCHMAKING_* environment variables or a .env file. Matching
weights themselves live in ``matchmaking.config``.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Settings loaded from environment variables.

    All settings have sensible defaults for local runs.
    """

    model_config = SettingsConfigDict(
        env_prefix="MATCHMAKING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    log_level: str = Field(
        default="INFO",
        description="Log level: TRACE, DEBUG, INFO, WARNING or ERROR",
    )
    debug_trace: bool = Field(
        default=False,
        description="Mirror matcher trace events to the debug log",
    )
    relaxed_mode: bool = Field(
        default=False,
        description="Default matching mode when the caller does not choose one",
    )
    config_file: Path | None = Field(
        default=None,
        description="JSON file of matching config overrides (see matchmaking.config.schema)",
    )

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        level = v.strip().upper()
        allowed = {"TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if level not in allowed:
            raise ValueError(f"log_level must be one of {sorted(allowed)}, got {v!r}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
