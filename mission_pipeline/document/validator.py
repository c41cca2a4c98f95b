"""Layered validation of mission documents.

Checks run in a fixed order: metadata, waypoint count, each waypoint in index
order (coordinate, altitude, gimbal pitch, heading, speed, turn mode, then
each action), settings, and finally safety limits. ``validate_document`` is
fail-fast and raises the first violation; ``collect_document_violations``
walks the same sequence to the end for a full diagnostic report.
"""

import logging
from collections.abc import Iterator

from mission_pipeline import geometry
from mission_pipeline.document.actions import (
    ActionResolutionError,
    RotateAircraft,
    RotateGimbal,
    StartRecording,
    resolve_action,
)
from mission_pipeline.document.models import (
    DocumentWaypoint,
    MissionDocument,
    MissionMetadata,
    MissionSettings,
    SafetyLimits,
    WaypointAction,
)
from mission_pipeline.envelopes import (
    DEFAULT_ENVELOPES,
    DocumentEnvelope,
    NumericRange,
    SafetyLimitEnvelope,
    StageEnvelopes,
)
from mission_pipeline.exceptions.import_errors import ValidationFailedError, ValidationStage
from mission_pipeline.tags import (
    FINISHED_ACTION_TAGS,
    GOTO_FIRST_WAYPOINT_MODE_TAGS,
    HEADING_MODE_TAGS,
    TURN_MODE_TAGS,
    UnknownTagError,
    resolve_tag,
)

logger = logging.getLogger(__name__)

Violations = Iterator[ValidationFailedError]


def _out_of_range(
    stage: ValidationStage,
    field: str,
    value: float,
    allowed: NumericRange,
    *,
    waypoint_index: int | None = None,
    action_index: int | None = None,
) -> Violations:
    if not allowed.contains(value):
        yield ValidationFailedError(
            stage,
            f"{field} out of {allowed}",
            field=field,
            waypoint_index=waypoint_index,
            action_index=action_index,
            context={"value": value},
        )


def _metadata_violations(metadata: MissionMetadata) -> Violations:
    if not metadata.name.strip():
        yield ValidationFailedError(
            ValidationStage.METADATA, "mission name cannot be empty", field="name"
        )


def _action_violations(
    action: WaypointAction,
    waypoint_index: int,
    action_index: int,
    envelope: DocumentEnvelope,
) -> Violations:
    stage = ValidationStage.ACTION
    try:
        resolved = resolve_action(action)
    except ActionResolutionError as error:
        yield ValidationFailedError(
            stage,
            error.reason,
            field=error.field,
            waypoint_index=waypoint_index,
            action_index=action_index,
        )
        return

    location = {"waypoint_index": waypoint_index, "action_index": action_index}
    match resolved:
        case RotateGimbal(pitch=pitch):
            yield from _out_of_range(stage, "pitch", pitch, envelope.gimbal_pitch, **location)
        case RotateAircraft(heading=heading):
            yield from _out_of_range(stage, "heading", heading, envelope.heading, **location)
        case StartRecording(duration_seconds=duration) if duration is not None and not duration > 0:
            yield ValidationFailedError(
                stage, "duration must be positive", field="duration", **location
            )


def _waypoint_violations(
    waypoint: DocumentWaypoint,
    index: int,
    envelope: DocumentEnvelope,
) -> Violations:
    stage = ValidationStage.WAYPOINT
    coordinate = waypoint.coordinate
    yield from _out_of_range(
        stage, "latitude", coordinate.latitude, envelope.latitude, waypoint_index=index
    )
    yield from _out_of_range(
        stage, "longitude", coordinate.longitude, envelope.longitude, waypoint_index=index
    )
    yield from _out_of_range(
        stage, "altitude", waypoint.altitude, envelope.altitude, waypoint_index=index
    )
    if waypoint.gimbal_pitch is not None:
        yield from _out_of_range(
            stage, "gimbalPitch", waypoint.gimbal_pitch, envelope.gimbal_pitch, waypoint_index=index
        )
    if waypoint.heading is not None:
        yield from _out_of_range(
            stage, "heading", waypoint.heading, envelope.heading, waypoint_index=index
        )
    if waypoint.speed is not None:
        yield from _out_of_range(
            stage, "speed", waypoint.speed, envelope.waypoint_speed, waypoint_index=index
        )
    try:
        resolve_tag(TURN_MODE_TAGS, waypoint.turn_mode, "turnMode")
    except UnknownTagError as error:
        yield ValidationFailedError(stage, str(error), field="turnMode", waypoint_index=index)

    for action_index, action in enumerate(waypoint.actions):
        yield from _action_violations(action, index, action_index, envelope)


def _settings_violations(settings: MissionSettings, envelope: DocumentEnvelope) -> Violations:
    stage = ValidationStage.SETTINGS
    yield from _out_of_range(
        stage, "maxFlightSpeed", settings.max_flight_speed, envelope.max_flight_speed
    )
    yield from _out_of_range(
        stage,
        "autoFlightSpeed",
        settings.auto_flight_speed,
        envelope.auto_flight_speed.with_maximum(settings.max_flight_speed),
    )
    yield from _out_of_range(stage, "repeatTimes", settings.repeat_times, envelope.repeat_times)

    tag_checks = (
        (FINISHED_ACTION_TAGS, settings.finished_action, "finishedAction"),
        (HEADING_MODE_TAGS, settings.heading_mode, "headingMode"),
        (GOTO_FIRST_WAYPOINT_MODE_TAGS, settings.goto_first_waypoint_mode, "gotoFirstWaypointMode"),
    )
    for table, value, field in tag_checks:
        try:
            resolve_tag(table, value, field)
        except UnknownTagError as error:
            yield ValidationFailedError(stage, str(error), field=field)


def _safety_violations(
    limits: SafetyLimits,
    waypoints: tuple[DocumentWaypoint, ...],
    envelope: SafetyLimitEnvelope,
    document_envelope: DocumentEnvelope,
) -> Violations:
    stage = ValidationStage.SAFETY_LIMITS
    yield from _out_of_range(stage, "maxAltitude", limits.max_altitude, envelope.max_altitude)
    yield from _out_of_range(
        stage,
        "maxDistanceFromHome",
        limits.max_distance_from_home,
        envelope.max_distance_from_home,
    )
    yield from _out_of_range(
        stage, "minBatteryLevel", limits.min_battery_level, envelope.min_battery_level
    )
    yield from _out_of_range(
        stage, "minGPSSignalLevel", limits.min_gps_signal_level, envelope.min_gps_signal_level
    )

    if limits.geofence_center is not None:
        yield from _out_of_range(
            stage,
            "geofenceCenter.latitude",
            limits.geofence_center.latitude,
            document_envelope.latitude,
        )
        yield from _out_of_range(
            stage,
            "geofenceCenter.longitude",
            limits.geofence_center.longitude,
            document_envelope.longitude,
        )
    if limits.geofence_radius is not None:
        yield from _out_of_range(
            stage, "geofenceRadius", limits.geofence_radius, envelope.geofence_radius
        )

    coordinates = [waypoint.coordinate for waypoint in waypoints]
    for index, leg in enumerate(geometry.segment_distances(coordinates)):
        if leg > limits.max_distance_from_home:
            yield ValidationFailedError(
                stage,
                f"distance between waypoints {index + 1} and {index + 2} ({leg:.0f}m) "
                f"exceeds maxDistanceFromHome ({limits.max_distance_from_home:g}m)",
                field="maxDistanceFromHome",
                waypoint_index=index,
                context={"next_waypoint_index": index + 1, "distance_meters": leg},
            )


def iter_document_violations(
    document: MissionDocument,
    envelopes: StageEnvelopes = DEFAULT_ENVELOPES,
) -> Violations:
    """Yield every violation of ``document`` in check order.

    The iterator is lazy, so taking only the first item skips all later checks.
    """
    envelope = envelopes.document
    yield from _metadata_violations(document.metadata)
    yield from _out_of_range(
        ValidationStage.WAYPOINT_COUNT,
        "waypoints",
        len(document.waypoints),
        envelope.waypoint_count,
    )
    for index, waypoint in enumerate(document.waypoints):
        yield from _waypoint_violations(waypoint, index, envelope)
    yield from _settings_violations(document.settings, envelope)
    yield from _safety_violations(
        document.safety_limits, document.waypoints, envelopes.safety_limits, envelope
    )


def validate_document(
    document: MissionDocument,
    envelopes: StageEnvelopes = DEFAULT_ENVELOPES,
) -> None:
    """Validate a mission document, stopping at the first violation.

    Args:
        document: The document to check. It is never modified.
        envelopes: Stage envelopes to check against.

    Raises:
        ValidationFailedError: The first violation in check order.
    """
    violation = next(iter_document_violations(document, envelopes), None)
    if violation is not None:
        raise violation
    logger.debug(
        "Document '%s' passed validation (%d waypoints)",
        document.metadata.name,
        len(document.waypoints),
    )


def collect_document_violations(
    document: MissionDocument,
    envelopes: StageEnvelopes = DEFAULT_ENVELOPES,
) -> list[ValidationFailedError]:
    """Return all violations of ``document`` in check order."""
    return list(iter_document_violations(document, envelopes))
