"""Independent validation of canonical flight plans.

Flight plans are also built directly by template builders and programmatic
callers, so this layer re-checks everything it depends on instead of trusting
the document validator.
"""

import logging
from collections.abc import Iterator

from mission_pipeline import geometry
from mission_pipeline.envelopes import DEFAULT_ENVELOPES, FlightPlanEnvelope, NumericRange
from mission_pipeline.exceptions.import_errors import ValidationFailedError, ValidationStage
from mission_pipeline.plan.models import FlightPlan, PlanWaypoint

logger = logging.getLogger(__name__)


def _range_violation(
    field: str,
    value: float,
    allowed: NumericRange,
    waypoint_index: int | None = None,
) -> ValidationFailedError | None:
    if allowed.contains(value):
        return None
    return ValidationFailedError(
        ValidationStage.FLIGHT_PLAN,
        f"{field} out of {allowed}",
        field=field,
        waypoint_index=waypoint_index,
        context={"value": value},
    )


def _waypoint_violations(
    waypoint: PlanWaypoint,
    index: int,
    envelope: FlightPlanEnvelope,
) -> Iterator[ValidationFailedError | None]:
    yield _range_violation("latitude", waypoint.latitude, envelope.latitude, index)
    yield _range_violation("longitude", waypoint.longitude, envelope.longitude, index)
    yield _range_violation("altitude", waypoint.altitude, envelope.altitude, index)
    if waypoint.heading is not None:
        yield _range_violation("heading", waypoint.heading, envelope.heading, index)
    if waypoint.gimbal_pitch is not None:
        yield _range_violation("gimbalPitch", waypoint.gimbal_pitch, envelope.gimbal_pitch, index)


def _segment_violations(
    plan: FlightPlan,
    envelope: FlightPlanEnvelope,
) -> Iterator[ValidationFailedError]:
    for index, leg in enumerate(geometry.segment_distances(plan.waypoints)):
        if leg > envelope.max_segment_distance:
            yield ValidationFailedError(
                ValidationStage.FLIGHT_PLAN,
                f"distance between waypoints {index + 1} and {index + 2} ({leg:.0f}m) "
                f"exceeds {envelope.max_segment_distance:g}m",
                field="waypoints",
                waypoint_index=index,
                context={"next_waypoint_index": index + 1, "distance_meters": leg},
            )


def _iter_violations(
    plan: FlightPlan,
    envelope: FlightPlanEnvelope,
) -> Iterator[ValidationFailedError | None]:
    yield _range_violation("waypoints", len(plan.waypoints), envelope.waypoint_count)
    for index, waypoint in enumerate(plan.waypoints):
        yield from _waypoint_violations(waypoint, index, envelope)
    yield from _segment_violations(plan, envelope)
    yield _range_violation("maxFlightSpeed", plan.max_flight_speed, envelope.max_flight_speed)
    yield _range_violation(
        "autoFlightSpeed",
        plan.auto_flight_speed,
        envelope.auto_flight_speed.with_maximum(plan.max_flight_speed),
    )


def validate_flight_plan(
    plan: FlightPlan,
    envelope: FlightPlanEnvelope = DEFAULT_ENVELOPES.flight_plan,
) -> None:
    """Validate a flight plan, stopping at the first violation.

    Order: waypoint count, each waypoint (coordinate, altitude, heading,
    gimbal pitch), each segment length, max speed, auto speed.

    Raises:
        ValidationFailedError: The first violation, with stage ``flight_plan``.
            Segment errors carry both waypoint indices.
    """
    for violation in _iter_violations(plan, envelope):
        if violation is not None:
            raise violation
    logger.debug(
        "Flight plan passed validation (%d waypoints, %.0fm)",
        len(plan.waypoints),
        plan.total_distance,
    )
