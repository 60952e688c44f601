"""Configuration models for the Homeboard CLI."""

from __future__ import annotations

import getpass
from typing import Literal

from pydantic import BaseModel, Field


def _default_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "admin"


class DatabaseConfig(BaseModel):
    """Local database configuration."""

    path: str | None = Field(
        default=None, description="SQLite file; defaults to the user data dir"
    )


class ScheduleConfig(BaseModel):
    """Repeating task configuration."""

    horizon_days: int = Field(
        default=90,
        ge=1,
        le=3660,
        description="Days ahead to generate repeating tasks when no end date is given",
    )


class OutputConfig(BaseModel):
    """Output configuration."""

    format: Literal["pretty", "table", "json", "yaml", "quiet"] = Field(default="pretty")
    color: bool = Field(default=True)


class AppConfig(BaseModel):
    """Main configuration."""

    model_config = {"validate_assignment": True}

    user: str = Field(default_factory=_default_user, min_length=1)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    schedule: ScheduleConfig = Field(default_factory=ScheduleConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
