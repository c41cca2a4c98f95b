"""Errors raised while lowering a mission to the vendor waypoint format."""

from typing import Any, ClassVar

from mission_pipeline.exceptions.base import MissionPipelineError


class TranslationError(MissionPipelineError):
    """Base class for all translation failures."""

    error_code: ClassVar[str] = "TRANSLATION_ERROR"


class InvalidFlightPlanError(TranslationError):
    """The flight plan handed to the translator did not pass validation."""

    error_code: ClassVar[str] = "INVALID_FLIGHT_PLAN"

    def __init__(self, reason: str, *, context: dict[str, Any] | None = None) -> None:
        super().__init__(f"Invalid flight plan: {reason}", context=context)
        self.reason = reason


class InvalidWaypointError(TranslationError):
    """A lowered waypoint falls outside the vendor envelope."""

    error_code: ClassVar[str] = "INVALID_WAYPOINT"

    def __init__(
        self,
        index: int,
        reason: str,
        *,
        field: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        context_dict = context or {}
        context_dict["waypoint_index"] = index
        if field is not None:
            context_dict["field"] = field
        super().__init__(f"Invalid waypoint: {reason}", context=context_dict)
        self.index = index
        self.reason = reason
        self.field = field


class InvalidActionError(TranslationError):
    """A declared or synthesized action cannot be lowered."""

    error_code: ClassVar[str] = "INVALID_ACTION"

    def __init__(
        self,
        waypoint_index: int,
        action_index: int,
        reason: str,
        *,
        context: dict[str, Any] | None = None,
    ) -> None:
        context_dict = context or {}
        context_dict["waypoint_index"] = waypoint_index
        context_dict["action_index"] = action_index
        super().__init__(f"Invalid action: {reason}", context=context_dict)
        self.waypoint_index = waypoint_index
        self.action_index = action_index
        self.reason = reason


class InvalidVendorMissionError(TranslationError):
    """Mission-level vendor settings fall outside the vendor envelope."""

    error_code: ClassVar[str] = "INVALID_VENDOR_MISSION"

    def __init__(
        self,
        reason: str,
        *,
        field: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        context_dict = context or {}
        if field is not None:
            context_dict["field"] = field
        super().__init__(f"Invalid vendor mission: {reason}", context=context_dict)
        self.reason = reason
        self.field = field
