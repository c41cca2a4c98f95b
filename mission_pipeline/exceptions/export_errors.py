"""Errors raised while exporting a flight plan to a mission document."""

from typing import Any, ClassVar

from mission_pipeline.exceptions.base import MissionPipelineError


class MissionExportError(MissionPipelineError):
    """Base class for all export failures."""

    error_code: ClassVar[str] = "EXPORT_ERROR"


class ExportInvalidFlightPlanError(MissionExportError):
    """The flight plan handed to export did not pass validation."""

    error_code: ClassVar[str] = "EXPORT_INVALID_FLIGHT_PLAN"

    def __init__(self, reason: str, *, context: dict[str, Any] | None = None) -> None:
        super().__init__(f"Invalid flight plan: {reason}", context=context)
        self.reason = reason
