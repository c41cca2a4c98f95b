"""Log formatters for JSON and terminal output."""

import json
import logging
import traceback
from datetime import UTC, datetime
from typing import Any, ClassVar

from mission_pipeline.logging.context import get_mission_context, get_run_id

# Attributes every LogRecord carries; anything else came in through ``extra``.
_STANDARD_LOG_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}

_MAX_LOGGER_NAME_LENGTH = 28


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_LOG_ATTRS and not key.startswith("_")
    }


class JSONFormatter(logging.Formatter):
    """Format log records as one JSON object per line."""

    def __init__(
        self,
        *,
        service_name: str = "mission-pipeline",
        include_timestamp: bool = True,
        include_location: bool = False,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._include_timestamp = include_timestamp
        self._include_location = include_location

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {}

        if self._include_timestamp:
            created = datetime.fromtimestamp(record.created, tz=UTC)
            entry["timestamp"] = created.isoformat(timespec="milliseconds")

        entry["level"] = record.levelname
        entry["logger"] = record.name
        entry["message"] = record.getMessage()
        entry["service"] = self._service_name

        current_run = get_run_id()
        if current_run:
            entry["run_id"] = current_run

        if self._include_location:
            entry["module"] = record.module
            entry["function"] = record.funcName
            entry["line"] = record.lineno

        entry.update(get_mission_context())
        entry.update(_extra_fields(record))

        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(entry, default=str)


class HumanFormatter(logging.Formatter):
    """Format log records as aligned, optionally colored terminal lines."""

    COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET: ClassVar[str] = "\033[0m"

    def __init__(self, *, use_colors: bool = True) -> None:
        super().__init__()
        self._use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")

        level = f"{record.levelname:<8}"
        if self._use_colors:
            level = f"{self.COLORS.get(record.levelname, '')}{level}{self.RESET}"

        logger_name = record.name
        if len(logger_name) > _MAX_LOGGER_NAME_LENGTH:
            logger_name = "..." + logger_name[-(_MAX_LOGGER_NAME_LENGTH - 3) :]

        fields: dict[str, Any] = {}
        current_run = get_run_id()
        if current_run:
            fields["run_id"] = current_run
        fields.update(get_mission_context())
        fields.update(_extra_fields(record))

        line = f"{timestamp} {level} {logger_name:<{_MAX_LOGGER_NAME_LENGTH}} | {record.getMessage()}"
        if fields:
            line += " | " + " ".join(f"{key}={value}" for key, value in fields.items())

        if record.exc_info:
            line += "\n" + "".join(traceback.format_exception(*record.exc_info))

        return line
