"""Advisory flight safety checks.

These return human-readable findings instead of raising. They complement the
pipeline validators for pre-flight checklists.
"""

from mission_pipeline.envelopes import LATITUDE, LONGITUDE
from mission_pipeline.plan.models import FlightPlan

MIN_SAFE_ALTITUDE = 5.0
MAX_SAFE_ALTITUDE = 500.0
MAX_SAFE_SPEED = 15.0
MAX_TOTAL_DISTANCE = 10_000.0
MAX_FLIGHT_TIME_SECONDS = 1800.0

CRITICAL_BATTERY_LEVEL = 20
LOW_BATTERY_LEVEL = 30
MIN_GPS_LEVEL = 3
GOOD_GPS_LEVEL = 4


def flight_safety_issues(plan: FlightPlan) -> list[str]:
    """List every safety concern found in ``plan``, in check order."""
    issues: list[str] = []

    if len(plan.waypoints) < 2:
        issues.append("Flight plan must have at least 2 waypoints")

    for index, waypoint in enumerate(plan.waypoints):
        if not (LATITUDE.contains(waypoint.latitude) and LONGITUDE.contains(waypoint.longitude)):
            issues.append(f"Waypoint {index + 1} has invalid coordinates")

    for index, waypoint in enumerate(plan.waypoints):
        if waypoint.altitude < MIN_SAFE_ALTITUDE:
            issues.append(f"Waypoint {index + 1} altitude too low (minimum {MIN_SAFE_ALTITUDE:g}m)")
        elif waypoint.altitude > MAX_SAFE_ALTITUDE:
            issues.append(
                f"Waypoint {index + 1} altitude too high (maximum {MAX_SAFE_ALTITUDE:g}m)"
            )

    if plan.max_flight_speed > MAX_SAFE_SPEED:
        issues.append(f"Maximum flight speed exceeds safety limit ({MAX_SAFE_SPEED:g} m/s)")
    if plan.auto_flight_speed > plan.max_flight_speed:
        issues.append("Auto flight speed cannot exceed maximum flight speed")

    if plan.total_distance > MAX_TOTAL_DISTANCE:
        issues.append(
            f"Total flight distance exceeds safety limit ({MAX_TOTAL_DISTANCE / 1000:g}km)"
        )
    if plan.estimated_flight_time > MAX_FLIGHT_TIME_SECONDS:
        issues.append(
            f"Estimated flight time exceeds safety limit "
            f"({MAX_FLIGHT_TIME_SECONDS / 60:g} minutes)"
        )

    return issues


def battery_warnings(level: int, low_level: int = LOW_BATTERY_LEVEL) -> list[str]:
    """Warnings for a battery percentage.

    ``low_level`` is the percentage below which a low-battery warning is
    given. Below ``CRITICAL_BATTERY_LEVEL`` the warning is critical.
    """
    if level < CRITICAL_BATTERY_LEVEL:
        return [f"Battery level critically low ({level}%)"]
    if level < low_level:
        return [f"Battery level low ({level}%)"]
    return []


def gps_warnings(level: int, good_level: int = GOOD_GPS_LEVEL) -> list[str]:
    """Warnings for a GPS signal level (0-5), marginal below ``good_level``."""
    if level < MIN_GPS_LEVEL:
        return [f"GPS signal too weak for autonomous flight (Level {level})"]
    if level < good_level:
        return [f"GPS signal marginal (Level {level})"]
    return []
