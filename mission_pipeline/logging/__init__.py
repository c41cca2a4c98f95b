"""Structured logging for the mission pipeline.

Usage:
    from mission_pipeline.logging import get_logger, mission_scope, setup_logging

    setup_logging()
    logger = get_logger(__name__)
    with mission_scope(mission="Grid Survey Mission"):
        logger.info("Lowering flight plan", extra={"waypoints": 9})
"""

from mission_pipeline.logging.config import LogFormat, LoggingConfig, LogLevel
from mission_pipeline.logging.context import (
    clear_context,
    generate_run_id,
    get_mission_context,
    get_run_id,
    mission_scope,
    set_mission_context,
    set_run_id,
)
from mission_pipeline.logging.formatters import HumanFormatter, JSONFormatter
from mission_pipeline.logging.logger import get_logger, reset_logging, setup_logging

__all__ = [
    "HumanFormatter",
    "JSONFormatter",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "clear_context",
    "generate_run_id",
    "get_logger",
    "get_mission_context",
    "get_run_id",
    "mission_scope",
    "reset_logging",
    "set_mission_context",
    "set_run_id",
    "setup_logging",
]
