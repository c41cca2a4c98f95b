"""Typed waypoint actions and their conversion from and to the wire form."""

import math
from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict

from mission_pipeline.document.models import WaypointAction


class ActionType(StrEnum):
    """Known action tags."""

    TAKE_PHOTO = "takePhoto"
    START_RECORDING = "startRecording"
    STOP_RECORDING = "stopRecording"
    ROTATE_GIMBAL = "rotateGimbal"
    ROTATE_AIRCRAFT = "rotateAircraft"


class _Action(BaseModel):
    model_config = ConfigDict(frozen=True)


class TakePhoto(_Action):
    kind: Literal[ActionType.TAKE_PHOTO] = ActionType.TAKE_PHOTO


class StartRecording(_Action):
    kind: Literal[ActionType.START_RECORDING] = ActionType.START_RECORDING
    duration_seconds: float | None = None


class StopRecording(_Action):
    kind: Literal[ActionType.STOP_RECORDING] = ActionType.STOP_RECORDING


class RotateGimbal(_Action):
    kind: Literal[ActionType.ROTATE_GIMBAL] = ActionType.ROTATE_GIMBAL
    pitch: float


class RotateAircraft(_Action):
    kind: Literal[ActionType.ROTATE_AIRCRAFT] = ActionType.ROTATE_AIRCRAFT
    heading: float


Action = TakePhoto | StartRecording | StopRecording | RotateGimbal | RotateAircraft


class ActionResolutionError(ValueError):
    """A wire action cannot be turned into a typed action."""

    def __init__(self, reason: str, *, field: str) -> None:
        super().__init__(reason)
        self.reason = reason
        self.field = field


def _numeric_parameter(action: WaypointAction, name: str, *, required: bool) -> float | None:
    raw = (action.parameters or {}).get(name)
    if raw is None:
        if required:
            raise ActionResolutionError(
                f"{action.type} requires '{name}' parameter", field=name
            )
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ActionResolutionError(
            f"'{name}' parameter must be numeric, got '{raw}'", field=name
        ) from None
    if not math.isfinite(value):
        raise ActionResolutionError(
            f"'{name}' parameter must be finite, got '{raw}'", field=name
        )
    return value


def resolve_action(action: WaypointAction) -> Action:
    """Turn a wire action into its typed variant.

    Parameter ranges are not checked here.

    Raises:
        ActionResolutionError: On an unknown tag, a missing required parameter
            or a parameter that is not a finite number.
    """
    match action.type:
        case ActionType.TAKE_PHOTO:
            return TakePhoto()
        case ActionType.START_RECORDING:
            duration = _numeric_parameter(action, "duration", required=False)
            return StartRecording(duration_seconds=duration)
        case ActionType.STOP_RECORDING:
            return StopRecording()
        case ActionType.ROTATE_GIMBAL:
            pitch = _numeric_parameter(action, "pitch", required=True)
            return RotateGimbal(pitch=pitch)
        case ActionType.ROTATE_AIRCRAFT:
            heading = _numeric_parameter(action, "heading", required=True)
            return RotateAircraft(heading=heading)
        case _:
            raise ActionResolutionError(f"unknown action type '{action.type}'", field="type")


def to_wire(action: Action) -> WaypointAction:
    """Convert a typed action to the wire form written into documents."""
    match action:
        case StartRecording(duration_seconds=duration) if duration is not None:
            return WaypointAction(type=action.kind, parameters={"duration": repr(duration)})
        case RotateGimbal(pitch=pitch):
            return WaypointAction(type=action.kind, parameters={"pitch": repr(pitch)})
        case RotateAircraft(heading=heading):
            return WaypointAction(type=action.kind, parameters={"heading": repr(heading)})
        case _:
            return WaypointAction(type=action.kind)
