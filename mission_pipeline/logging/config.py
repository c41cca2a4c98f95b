"""Logging settings read from the environment."""

from enum import StrEnum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(StrEnum):
    """Accepted level names."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(StrEnum):
    """Output formats: one JSON object per line, or aligned text."""

    JSON = "json"
    HUMAN = "human"


class LoggingConfig(BaseSettings):
    """Logging configuration loaded from environment variables.

    Attributes:
        log_level: Minimum level of the root logger.
        pipeline_log_level: Level of the pipeline loggers, e.g. DEBUG to see
            every lowered action while other libraries stay at log_level.
        log_format: json for log aggregation, human for a terminal.
        service_name: Service identifier attached to every JSON record.
        include_timestamp: Whether to include timestamp.
        include_location: Whether to include module/function/line info.
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: LogLevel = Field(default=LogLevel.INFO)
    pipeline_log_level: LogLevel | None = Field(default=None)
    log_format: LogFormat = Field(default=LogFormat.HUMAN)
    service_name: str = Field(default="mission-pipeline")
    include_timestamp: bool = Field(default=True)
    include_location: bool = Field(default=False)


@lru_cache
def get_logging_config() -> LoggingConfig:
    """Return the logging settings, read once per process."""
    return LoggingConfig()
