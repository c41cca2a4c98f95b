"""Conversion between mission documents and canonical flight plans."""

import logging
from collections.abc import Sequence
from datetime import UTC, datetime

from mission_pipeline.document.models import (
    DocumentWaypoint,
    MissionDocument,
    MissionMetadata,
    MissionSettings,
    SafetyLimits,
)
from mission_pipeline.exceptions.import_errors import ValidationFailedError, ValidationStage
from mission_pipeline.geometry import Coordinate
from mission_pipeline.plan.models import FlightPlan, PlanWaypoint
from mission_pipeline.tags import (
    FINISHED_ACTION_TAGS,
    HEADING_MODE_TAGS,
    UnknownTagError,
    resolve_tag,
)

logger = logging.getLogger(__name__)


def canonicalize(document: MissionDocument) -> FlightPlan:
    """Reduce a validated mission document to its flight plan.

    Per-waypoint speed, turn metadata and actions are dropped; the enhanced
    translator reads them from the document instead.

    Raises:
        ValidationFailedError: If a settings tag has no table entry. This
            cannot happen for a document that passed ``validate_document``.
    """
    settings = document.settings
    try:
        finished_action = resolve_tag(
            FINISHED_ACTION_TAGS, settings.finished_action, "finishedAction"
        )
        heading_mode = resolve_tag(HEADING_MODE_TAGS, settings.heading_mode, "headingMode")
    except UnknownTagError as error:
        raise ValidationFailedError(
            ValidationStage.SETTINGS, str(error), field=error.field
        ) from error

    plan = FlightPlan(
        waypoints=tuple(
            PlanWaypoint(
                latitude=waypoint.coordinate.latitude,
                longitude=waypoint.coordinate.longitude,
                altitude=waypoint.altitude,
                heading=waypoint.heading,
                gimbal_pitch=waypoint.gimbal_pitch,
            )
            for waypoint in document.waypoints
        ),
        max_flight_speed=settings.max_flight_speed,
        auto_flight_speed=settings.auto_flight_speed,
        finished_action=finished_action,
        heading_mode=heading_mode,
    )
    logger.debug(
        "Canonicalized '%s' into a %d-waypoint plan",
        document.metadata.name,
        len(plan.waypoints),
    )
    return plan


def to_document(
    plan: FlightPlan,
    name: str,
    *,
    description: str | None = None,
    tags: Sequence[str] = (),
    author: str = "DroneAuto",
    schema_version: str = "1.0",
    safety_limits: SafetyLimits | None = None,
) -> MissionDocument:
    """Rebuild a serializable document from a flight plan.

    Lossy: fields the plan does not carry (per-waypoint actions, speeds, turn
    metadata, mission-level goto mode and repeat count) take their template
    defaults. Creation and modification dates are set to now.
    """
    now = datetime.now(UTC)
    return MissionDocument(
        metadata=MissionMetadata(
            name=name,
            description=description,
            author=author,
            tags=tuple(tags),
            created_at=now,
            modified_at=now,
            schema_version=schema_version,
        ),
        settings=MissionSettings(
            max_flight_speed=plan.max_flight_speed,
            auto_flight_speed=plan.auto_flight_speed,
            finished_action=plan.finished_action.value,
            heading_mode=plan.heading_mode.value,
        ),
        waypoints=tuple(
            DocumentWaypoint(
                coordinate=Coordinate(latitude=waypoint.latitude, longitude=waypoint.longitude),
                altitude=waypoint.altitude,
                heading=waypoint.heading,
                gimbal_pitch=waypoint.gimbal_pitch,
            )
            for waypoint in plan.waypoints
        ),
        safety_limits=safety_limits or SafetyLimits(),
    )
