"""Mission document models: the portable JSON mission format.

The models describe structure only. Value ranges are checked by the document
validator so that violations are reported in a fixed order with waypoint and
action indices.

Wire names are the camelCase names of the persisted files; the short names
of older drafts (``maxSpeed``, ``createdAt``...) are still read.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from mission_pipeline.geometry import Coordinate
from mission_pipeline.tags import FinishedAction, GotoFirstWaypointMode, HeadingMode, TurnMode


def _wire(name: str, *accepted: str, **kwargs: Any) -> Any:
    """Field written as ``name`` and read from ``name`` or any ``accepted`` alias."""
    return Field(
        validation_alias=AliasChoices(name, *accepted),
        serialization_alias=name,
        **kwargs,
    )


class _WireModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class MissionMetadata(_WireModel):
    """Descriptive mission metadata."""

    name: str
    description: str | None = None
    author: str = "DroneAuto"
    tags: tuple[str, ...] = ()
    created_at: datetime = _wire(
        "createdDate", "createdAt", default_factory=lambda: datetime.now(UTC)
    )
    modified_at: datetime = _wire(
        "modifiedDate", "modifiedAt", default_factory=lambda: datetime.now(UTC)
    )
    schema_version: str = _wire("version", "schemaVersion", default="1.0")


class MissionSettings(_WireModel):
    """Mission-wide flight settings."""

    max_flight_speed: float = _wire("maxFlightSpeed", "maxSpeed", default=15.0)
    auto_flight_speed: float = _wire("autoFlightSpeed", "autoSpeed", default=10.0)
    finished_action: str = FinishedAction.GO_HOME.value
    heading_mode: str = HeadingMode.AUTO.value
    goto_first_waypoint_mode: str = GotoFirstWaypointMode.SAFELY.value
    exit_mission_on_rc_signal_lost: bool = _wire(
        "exitMissionOnRCSignalLost", "exitOnSignalLost", default=True
    )
    repeat_times: int = 1


class WaypointAction(_WireModel):
    """A declared action as written in the document.

    ``type`` is kept as a raw tag so that an unknown tag is reported by the
    validator with its waypoint and action index.
    """

    type: str
    parameters: dict[str, str | float] | None = None


class DocumentWaypoint(_WireModel):
    """A single waypoint of a mission document."""

    coordinate: Coordinate
    altitude: float
    heading: float | None = None
    corner_radius_in_meters: float = _wire("cornerRadiusInMeters", "cornerRadius", default=0.2)
    turn_mode: str = TurnMode.CLOCKWISE.value
    gimbal_pitch: float | None = None
    speed: float | None = None
    action_timeout_in_seconds: float = _wire(
        "actionTimeoutInSeconds", "actionTimeoutSeconds", default=60.0
    )
    action_repeat_times: int = 1
    actions: tuple[WaypointAction, ...] = ()


class SafetyLimits(_WireModel):
    """Operator-declared safety limits."""

    max_altitude: float = 120.0
    max_distance_from_home: float = 500.0
    min_battery_level: int = _wire("minBatteryLevel", "minBatteryPercent", default=20)
    min_gps_signal_level: int = _wire("minGPSSignalLevel", "minGPSLevel", default=3)
    geofence_center: Coordinate | None = None
    geofence_radius: float | None = None


class MissionDocument(_WireModel):
    """Complete mission document with its four top-level sections."""

    metadata: MissionMetadata
    settings: MissionSettings = Field(default_factory=MissionSettings)
    waypoints: tuple[DocumentWaypoint, ...] = ()
    safety_limits: SafetyLimits = Field(default_factory=SafetyLimits)

    def to_json_dict(self) -> dict[str, Any]:
        """Convert to the persisted JSON shape (wire names, ISO-8601 dates)."""
        return self.model_dump(mode="json", by_alias=True)
