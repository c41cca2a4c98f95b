"""Exception rendering and logging utilities.

Error reports follow the RFC 7807 problem-details layout so that a UI or file
layer can show them without knowing the concrete exception type.
"""

import logging
from collections.abc import Callable
from functools import wraps
from typing import Any, ParamSpec, TypeVar

from mission_pipeline.exceptions.base import MissionPipelineError

ErrorReport = dict[str, Any]

P = ParamSpec("P")
T = TypeVar("T")


def create_error_report(
    exception: MissionPipelineError,
    *,
    include_context: bool = True,
) -> ErrorReport:
    """Create a problem-details report from a pipeline exception.

    Args:
        exception: The MissionPipelineError to convert.
        include_context: Whether to include structured context in the report.

    Returns:
        JSON-serializable report dictionary.
    """
    report: ErrorReport = {
        "type": f"mission-pipeline:error:{exception.error_code}",
        "title": _format_error_title(exception.error_code),
        "detail": describe_error(exception),
    }

    if include_context and exception.context:
        report["context"] = exception.context

    return report


def describe_error(exception: MissionPipelineError) -> str:
    """Render a user-facing message from the structured error fields.

    Indices are shown one-based, matching how waypoints are numbered on screen.

    Args:
        exception: The error to describe.

    Returns:
        A message such as ``"Waypoint 3, Action 1: pitch out of [-90,30]"``.
    """
    if exception.location is None:
        return exception.reason
    return f"{exception.location}: {exception.reason}"


def log_pipeline_errors(
    logger: logging.Logger,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Decorator factory that logs pipeline errors before re-raising them.

    Args:
        logger: Logger that receives one warning per failed call.

    Returns:
        Decorator for pipeline entry points.
    """

    def decorate(func: Callable[P, T]) -> Callable[P, T]:
        @wraps(func)
        def handle_call(*args: P.args, **kwargs: P.kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except MissionPipelineError as error:
                logger.warning(
                    "%s rejected: %s",
                    func.__name__,
                    describe_error(error),
                    extra={"error": error.to_log_dict()},
                )
                raise

        return handle_call

    return decorate


def _format_error_title(error_code: str) -> str:
    """Format error code as human-readable title."""
    return error_code.replace("_", " ").title()
