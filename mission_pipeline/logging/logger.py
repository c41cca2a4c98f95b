"""Handler installation for applications embedding the pipeline.

The pipeline itself only creates module loggers. ``setup_logging`` is for the
application (CLI, UI, tests) and installs one named handler on the root
logger. Handlers owned by anyone else are left in place.
"""

import logging
import sys
from dataclasses import dataclass, field
from typing import TextIO

from mission_pipeline.logging.config import LogFormat, LoggingConfig, get_logging_config
from mission_pipeline.logging.formatters import HumanFormatter, JSONFormatter

PIPELINE_LOGGER = "mission_pipeline"
HANDLER_NAME = "mission_pipeline.handler"


@dataclass
class LoggingState:
    """What ``setup_logging`` installed, so it can be undone."""

    configured: bool = field(default=False)
    previous_root_level: int | None = None


_state = LoggingState()


def _pipeline_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [handler for handler in logger.handlers if handler.get_name() == HANDLER_NAME]


def _build_formatter(config: LoggingConfig, stream: TextIO | None) -> logging.Formatter:
    if config.log_format == LogFormat.JSON:
        return JSONFormatter(
            service_name=config.service_name,
            include_timestamp=config.include_timestamp,
            include_location=config.include_location,
        )
    return HumanFormatter(use_colors=stream is None and sys.stderr.isatty())


def setup_logging(
    config: LoggingConfig | None = None,
    stream: TextIO | None = None,
    *,
    force: bool = False,
) -> None:
    """Install the pipeline handler on the root logger.

    Args:
        config: Logging settings. Loaded from the environment if omitted.
        stream: Output stream. Defaults to ``sys.stderr``.
        force: Replace an existing pipeline handler.
    """
    if _state.configured and not force:
        return

    config = config or get_logging_config()
    root_logger = logging.getLogger()
    for handler in _pipeline_handlers(root_logger):
        root_logger.removeHandler(handler)

    if _state.previous_root_level is None:
        _state.previous_root_level = root_logger.level
    root_logger.setLevel(config.log_level.value)

    pipeline_level = config.pipeline_log_level or config.log_level
    logging.getLogger(PIPELINE_LOGGER).setLevel(pipeline_level.value)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(_build_formatter(config, stream))
    root_logger.addHandler(handler)

    _state.configured = True


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name``, usually the caller's ``__name__``."""
    return logging.getLogger(name)


def reset_logging() -> None:
    """Remove the pipeline handler and restore the previous levels."""
    root_logger = logging.getLogger()
    for handler in _pipeline_handlers(root_logger):
        root_logger.removeHandler(handler)

    if _state.previous_root_level is not None:
        root_logger.setLevel(_state.previous_root_level)
    logging.getLogger(PIPELINE_LOGGER).setLevel(logging.NOTSET)

    _state.configured = False
    _state.previous_root_level = None
    get_logging_config.cache_clear()
