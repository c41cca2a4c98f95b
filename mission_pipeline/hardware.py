"""Hardware profile of the development setup and the personal setup check.

The profile is an immutable value handed to ``MissionService``; nothing here
reads global state.
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field

from mission_pipeline.geometry import DEFAULT_ACTION_OVERHEAD_SECONDS, Coordinate
from mission_pipeline.plan.models import FlightPlan

logger = logging.getLogger(__name__)

HOME_BASE = "Home Base"

TEST_LOCATIONS: Mapping[str, Coordinate] = MappingProxyType({
    HOME_BASE: Coordinate(latitude=10.32352, longitude=-84.430511),
    "Test Field A": Coordinate(latitude=10.324, longitude=-84.431),
    "Test Field B": Coordinate(latitude=10.325, longitude=-84.432),
    "Open Area": Coordinate(latitude=10.326, longitude=-84.433),
})

# Share of the rated flight time an estimate may use before it is flagged.
FLIGHT_TIME_MARGIN = 0.8


class _Profile(BaseModel):
    model_config = ConfigDict(frozen=True)


class DroneProfile(_Profile):
    """Capabilities of the target aircraft."""

    model: str = "DJI Mavic 2 Classic"
    max_flight_time_minutes: int = Field(default=31, gt=0)
    max_range_meters: int = Field(default=8000, gt=0)


class LocalRegulations(_Profile):
    """Regulatory limits at the flying site."""

    country: str = "Costa Rica"
    max_legal_altitude_meters: float = Field(default=122.0, gt=0)


class DevelopmentDefaults(_Profile):
    """Conservative values used while testing."""

    test_altitude_meters: float = 50.0
    flight_speed: float = 8.0
    battery_warning_level: int = Field(default=30, ge=0, le=100)
    gps_minimum_level: int = Field(default=4, ge=0, le=5)


class HardwareProfile(_Profile):
    """Aircraft, regulations and development defaults in one value."""

    drone: DroneProfile = Field(default_factory=DroneProfile)
    regulations: LocalRegulations = Field(default_factory=LocalRegulations)
    defaults: DevelopmentDefaults = Field(default_factory=DevelopmentDefaults)
    test_locations: Mapping[str, Coordinate] = TEST_LOCATIONS


DEFAULT_HARDWARE_PROFILE = HardwareProfile()


class SetupReport(_Profile):
    """Outcome of checking a plan against the hardware profile."""

    is_valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def summary(self) -> str:
        """Render the report as a short multi-line text."""
        lines = ["Mission Valid" if self.is_valid else "Mission Invalid"]
        for title, items in (("Errors", self.errors), ("Warnings", self.warnings)):
            if items:
                lines.extend(["", f"{title}:"])
                lines.extend(f"- {item}" for item in items)
        return "\n".join(lines)


def check_personal_setup(
    plan: FlightPlan,
    profile: HardwareProfile = DEFAULT_HARDWARE_PROFILE,
    action_overhead_seconds: float = DEFAULT_ACTION_OVERHEAD_SECONDS,
) -> SetupReport:
    """Check a flight plan against the aircraft and local regulations.

    Unlike the pipeline validators this never raises; it accumulates every
    finding so the operator sees them together.

    Args:
        plan: The plan to check.
        profile: Aircraft, regulation and development limits.
        action_overhead_seconds: Per-waypoint time used for the estimate.

    Returns:
        A report that is valid when no errors were found. Warnings do not
        affect validity.
    """
    errors: list[str] = []
    warnings: list[str] = []

    legal_altitude = profile.regulations.max_legal_altitude_meters
    for index, waypoint in enumerate(plan.waypoints):
        if waypoint.altitude > legal_altitude:
            errors.append(
                f"Waypoint {index + 1} altitude ({waypoint.altitude:g}m) exceeds "
                f"{profile.regulations.country} limit ({legal_altitude:g}m)"
            )

    max_range = profile.drone.max_range_meters
    if plan.total_distance > max_range:
        errors.append(
            f"Total mission distance ({plan.total_distance:.0f}m) exceeds "
            f"{profile.drone.model} range ({max_range}m)"
        )

    max_minutes = profile.drone.max_flight_time_minutes
    estimated_minutes = plan.flight_time_with_overhead(action_overhead_seconds) / 60
    if estimated_minutes > max_minutes * FLIGHT_TIME_MARGIN:
        warnings.append(
            f"Estimated flight time ({estimated_minutes:.0f} min) is close to "
            f"{profile.drone.model} limit ({max_minutes} min)"
        )

    if len(plan.waypoints) < 2:
        errors.append("Mission needs at least 2 waypoints for testing")

    report = SetupReport(is_valid=not errors, errors=tuple(errors), warnings=tuple(warnings))
    logger.info(
        "Personal setup check finished",
        extra={"is_valid": report.is_valid, "errors": len(errors), "warnings": len(warnings)},
    )
    return report
