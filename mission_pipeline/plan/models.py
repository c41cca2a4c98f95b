"""Canonical flight plan models."""

from pydantic import BaseModel, ConfigDict, Field

from mission_pipeline import geometry
from mission_pipeline.tags import FinishedAction, HeadingMode


class PlanWaypoint(BaseModel):
    """A flight plan waypoint: position, altitude and orientation hints."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float
    altitude: float
    heading: float | None = None
    gimbal_pitch: float | None = None


class FlightPlan(BaseModel):
    """Validated, canonical in-memory mission.

    A plan can also be built directly by callers, so construction applies no
    range checks; ``validate_flight_plan`` does.
    """

    model_config = ConfigDict(frozen=True)

    waypoints: tuple[PlanWaypoint, ...]
    max_flight_speed: float = 15.0
    auto_flight_speed: float = 10.0
    finished_action: FinishedAction = Field(default=FinishedAction.GO_HOME)
    heading_mode: HeadingMode = Field(default=HeadingMode.AUTO)

    @property
    def total_distance(self) -> float:
        """Path length through all waypoints in meters."""
        return geometry.path_length(self.waypoints)

    @property
    def estimated_flight_time(self) -> float:
        """Estimated duration in seconds with the default per-waypoint overhead."""
        return self.flight_time_with_overhead(geometry.DEFAULT_ACTION_OVERHEAD_SECONDS)

    def flight_time_with_overhead(self, action_overhead_seconds: float) -> float:
        """Estimated duration in seconds for a given per-waypoint overhead."""
        return geometry.estimated_flight_time(
            self.waypoints, self.auto_flight_speed, action_overhead_seconds
        )
