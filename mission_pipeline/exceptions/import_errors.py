"""Errors raised while importing and validating a mission document."""

from enum import StrEnum
from typing import Any, ClassVar

from mission_pipeline.exceptions.base import MissionPipelineError


class ValidationStage(StrEnum):
    """Check group that produced a validation failure, in check order."""

    METADATA = "metadata"
    WAYPOINT_COUNT = "waypoint_count"
    WAYPOINT = "waypoint"
    ACTION = "action"
    SETTINGS = "settings"
    SAFETY_LIMITS = "safety_limits"
    FLIGHT_PLAN = "flight_plan"


class MissionImportError(MissionPipelineError):
    """Base class for all import failures."""

    error_code: ClassVar[str] = "IMPORT_ERROR"


class MalformedInputError(MissionImportError):
    """Input is not a structurally valid mission document.

    Raised for invalid JSON, wrong value types or missing required keys.
    """

    error_code: ClassVar[str] = "MALFORMED_INPUT"


class ValidationFailedError(MissionImportError):
    """A mission document or flight plan violated a validation rule.

    Attributes:
        stage: Check group that failed.
        reason: Short description of the violated rule.
        field: Wire name of the offending field, if any.
        waypoint_index: Zero-based index of the offending waypoint, if any.
        action_index: Zero-based index of the offending action, if any.
    """

    error_code: ClassVar[str] = "VALIDATION_FAILED"

    def __init__(
        self,
        stage: ValidationStage,
        reason: str,
        *,
        field: str | None = None,
        waypoint_index: int | None = None,
        action_index: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        context_dict = context or {}
        context_dict["stage"] = str(stage)
        if field is not None:
            context_dict["field"] = field
        if waypoint_index is not None:
            context_dict["waypoint_index"] = waypoint_index
        if action_index is not None:
            context_dict["action_index"] = action_index
        super().__init__(f"Mission validation failed: {reason}", context=context_dict)
        self.stage = stage
        self.reason = reason
        self.field = field
        self.waypoint_index = waypoint_index
        self.action_index = action_index
