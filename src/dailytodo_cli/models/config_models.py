"""Configuration models.

The whole configuration is a single pydantic model persisted as
``config.json`` by :class:`dailytodo_cli.services.config_service.ConfigService`.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class SchedulerConfig(BaseModel):
    """Today-set scheduler configuration."""

    interval_seconds: int = Field(default=60, ge=1)
    force_on_start: bool = Field(default=True)


class OutputConfig(BaseModel):
    """Output configuration."""

    format: Literal["pretty", "json", "yaml"] = Field(default="pretty")
    color: bool = Field(default=True)


class AppConfig(BaseModel):
    """Main DailyTodo configuration."""

    database_path: str | None = Field(
        default=None, description="SQLite vault path (None = platform data dir)"
    )
    log_level: str = Field(default="INFO")
    scheduler: SchedulerConfig = Field(default_factory=SchedulerConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"invalid log level: {v}")
        return level
