"""Pipeline settings read from environment variables.

Only behaviour that an operator may tune per deployment lives here. Stage
envelopes and the hardware profile are values handed to ``MissionService``.

Usage:
    from mission_pipeline.config import get_settings

    settings = get_settings()
    print(settings.action_overhead_seconds)
"""

import re
from enum import StrEnum
from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mission_pipeline.logging.config import LogLevel

SCHEMA_VERSION_PATTERN = re.compile(r"^\d+\.\d+$")


class Environment(StrEnum):
    """Deployment environments."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Pipeline settings.

    Attributes:
        service_name: Name reported in logs and error reports.
        environment: Deployment environment.
        log_level: Level name, case-insensitive in the environment.
        action_overhead_seconds: Time budgeted per waypoint for its actions,
            used by flight time estimates.
        default_author: Author written into exported documents.
        schema_version: ``major.minor`` document version written on export.
        include_export_statistics: Append a statistics block on export.
    """

    model_config = SettingsConfigDict(
        env_file=None,
        case_sensitive=False,
        extra="ignore",
        str_strip_whitespace=True,
    )

    service_name: str = Field(default="mission-pipeline", min_length=1)
    environment: Environment = Field(default=Environment.DEVELOPMENT)
    log_level: LogLevel = Field(default=LogLevel.INFO)

    action_overhead_seconds: float = Field(default=10.0, ge=0, le=300)
    default_author: str = Field(default="DroneAuto", min_length=1)
    schema_version: str = Field(default="1.0")
    include_export_statistics: bool = Field(default=True)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @field_validator("schema_version")
    @classmethod
    def validate_schema_version(cls, value: str) -> str:
        if not SCHEMA_VERSION_PATTERN.match(value):
            raise ValueError(f"schema_version must look like '1.0', got '{value}'")
        return value

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """Return the settings, read from the environment once per process."""
    return Settings()
