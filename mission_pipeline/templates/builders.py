"""Deterministic mission template builders.

Each builder turns a small parameter model into a complete mission document.
``build_template`` validates the result and can hand back the canonical
flight plan instead.
"""

import logging
from collections.abc import Callable, Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, model_validator

from mission_pipeline import geometry
from mission_pipeline.document.actions import StartRecording, TakePhoto, to_wire
from mission_pipeline.document.models import (
    DocumentWaypoint,
    MissionDocument,
    MissionMetadata,
    MissionSettings,
    SafetyLimits,
    WaypointAction,
)
from mission_pipeline.document.validator import validate_document
from mission_pipeline.envelopes import DEFAULT_ENVELOPES, StageEnvelopes
from mission_pipeline.geometry import Coordinate
from mission_pipeline.hardware import DEFAULT_HARDWARE_PROFILE, HOME_BASE, HardwareProfile
from mission_pipeline.plan.canonicalizer import canonicalize
from mission_pipeline.plan.models import FlightPlan
from mission_pipeline.tags import FinishedAction, HeadingMode

logger = logging.getLogger(__name__)

MAX_GRID_WAYPOINTS = 99
GRID_RECORDING_SECONDS = 5.0
PERIMETER_RECORDING_SECONDS = 10.0
PERIMETER_GEOFENCE_BUFFER_METERS = 150.0
PERIMETER_HOME_BUFFER_METERS = 100.0
BASIC_AUTO_SPEED_RATIO = 0.8


class TemplateKind(StrEnum):
    """Available mission templates."""

    BASIC_TEST = "basicTest"
    GRID_SURVEY = "gridSurvey"
    PERIMETER = "perimeter"


class _Params(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


def _profile(info: ValidationInfo) -> HardwareProfile:
    return (info.context or {}).get("hardware_profile", DEFAULT_HARDWARE_PROFILE)


def _test_location(profile: HardwareProfile, name: str) -> Coordinate:
    try:
        return profile.test_locations[name]
    except KeyError:
        known = ", ".join(sorted(profile.test_locations))
        raise ValueError(f"unknown test location '{name}' (known: {known})") from None


class BasicTestParams(_Params):
    """Parameters of the square test pattern.

    Omitted values come from the hardware profile passed as validation
    context: ``base`` from its test location named by ``location``,
    ``altitude`` and ``flight_speed`` from its development defaults.
    """

    base: Coordinate
    location: str = HOME_BASE
    delta_degrees: float = Field(default=0.001, gt=0)
    altitude: float
    flight_speed: float = Field(gt=0)
    gimbal_pitch: float | None = None

    @model_validator(mode="before")
    @classmethod
    def fill_from_profile(cls, data: Any, info: ValidationInfo) -> Any:
        if not isinstance(data, Mapping):
            return data
        profile = _profile(info)
        filled = dict(data)
        if filled.get("base") is None:
            filled["base"] = _test_location(profile, filled.get("location", HOME_BASE))
        filled.setdefault("altitude", profile.defaults.test_altitude_meters)
        filled.setdefault("flight_speed", profile.defaults.flight_speed)
        return filled


class GridSurveyParams(_Params):
    """Parameters of the boustrophedon grid survey.

    ``center`` defaults to the profile's home base.
    """

    center: Coordinate
    grid_size: float = Field(default=0.002, gt=0)
    altitude: float = 80.0
    rows: int = Field(default=3, ge=2)
    columns: int = Field(default=3, ge=2)

    @model_validator(mode="before")
    @classmethod
    def center_defaults_to_home_base(cls, data: Any, info: ValidationInfo) -> Any:
        if isinstance(data, Mapping) and data.get("center") is None:
            return {**data, "center": _test_location(_profile(info), HOME_BASE)}
        return data

    @model_validator(mode="after")
    def grid_fits_waypoint_limit(self) -> "GridSurveyParams":
        if self.rows * self.columns > MAX_GRID_WAYPOINTS:
            raise ValueError(
                f"{self.rows}x{self.columns} grid exceeds {MAX_GRID_WAYPOINTS} waypoints"
            )
        return self


class PerimeterParams(_Params):
    """Parameters of the perimeter inspection."""

    corners: tuple[Coordinate, ...] = Field(min_length=2)
    altitude: float = 60.0


TemplateParams = BasicTestParams | GridSurveyParams | PerimeterParams


def _offset(origin: Coordinate, delta_latitude: float, delta_longitude: float) -> Coordinate:
    return Coordinate(
        latitude=origin.latitude + delta_latitude,
        longitude=origin.longitude + delta_longitude,
    )


def build_basic_test_document(params: BasicTestParams | None = None) -> MissionDocument:
    """Four-waypoint square starting at the base, one photo per corner."""
    params = params or BasicTestParams()
    base = params.base
    delta = params.delta_degrees
    square = (
        base,
        _offset(base, delta, 0),
        _offset(base, delta, delta),
        _offset(base, 0, delta),
    )

    return MissionDocument(
        metadata=MissionMetadata(
            name="Basic Test Mission",
            description="4-waypoint square pattern for system validation and testing",
            tags=("test", "development", "basic", "validation"),
        ),
        settings=MissionSettings(
            max_flight_speed=params.flight_speed,
            auto_flight_speed=params.flight_speed * BASIC_AUTO_SPEED_RATIO,
            finished_action=FinishedAction.GO_HOME.value,
            heading_mode=HeadingMode.AUTO.value,
        ),
        waypoints=tuple(
            DocumentWaypoint(
                coordinate=corner,
                altitude=params.altitude,
                gimbal_pitch=params.gimbal_pitch,
                actions=(to_wire(TakePhoto()),),
            )
            for corner in square
        ),
        safety_limits=SafetyLimits(
            max_altitude=120.0,
            max_distance_from_home=200.0,
            geofence_center=base,
            geofence_radius=300.0,
        ),
    )


def grid_cells(rows: int, columns: int) -> list[tuple[int, int]]:
    """Grid cells in boustrophedon order.

    Even rows run left to right, odd rows right to left.
    """
    cells: list[tuple[int, int]] = []
    for row in range(rows):
        columns_in_order = range(columns) if row % 2 == 0 else reversed(range(columns))
        cells.extend((row, column) for column in columns_in_order)
    return cells


def build_grid_survey_document(params: GridSurveyParams | None = None) -> MissionDocument:
    """Survey grid centred on ``params.center`` with recordings at the corners."""
    params = params or GridSurveyParams()
    half = params.grid_size / 2
    start = _offset(params.center, -half, -half)
    step_latitude = params.grid_size / (params.rows - 1)
    step_longitude = params.grid_size / (params.columns - 1)
    corner_rows = {0, params.rows - 1}
    corner_columns = {0, params.columns - 1}

    waypoints: list[DocumentWaypoint] = []
    for row, column in grid_cells(params.rows, params.columns):
        actions: list[WaypointAction] = [to_wire(TakePhoto())]
        if row in corner_rows and column in corner_columns:
            actions.append(to_wire(StartRecording(duration_seconds=GRID_RECORDING_SECONDS)))
        waypoints.append(
            DocumentWaypoint(
                coordinate=_offset(start, row * step_latitude, column * step_longitude),
                altitude=params.altitude,
                gimbal_pitch=-90.0,
                speed=8.0,
                actions=tuple(actions),
            )
        )

    return MissionDocument(
        metadata=MissionMetadata(
            name="Grid Survey Mission",
            description=(
                f"Systematic {params.rows}x{params.columns} grid pattern "
                "for area mapping and photography"
            ),
            tags=("survey", "mapping", "grid", "photography", "systematic"),
        ),
        settings=MissionSettings(
            max_flight_speed=12.0,
            auto_flight_speed=8.0,
            finished_action=FinishedAction.GO_HOME.value,
            heading_mode=HeadingMode.AUTO.value,
        ),
        waypoints=tuple(waypoints),
        safety_limits=SafetyLimits(
            max_altitude=120.0,
            max_distance_from_home=500.0,
            geofence_center=params.center,
            geofence_radius=600.0,
        ),
    )


def build_perimeter_document(params: PerimeterParams) -> MissionDocument:
    """One inspection stop per corner, geofenced around the centroid.

    The geofence radius is the farthest corner from the centroid plus a
    150 m buffer. The declared max distance from home also covers the
    longest leg, capped at the safety-limit ceiling.
    """
    corners = params.corners
    center = geometry.centroid(corners)
    farthest = max(geometry.distance(center, corner) for corner in corners)
    longest_leg = max(geometry.segment_distances(corners))
    ceiling = DEFAULT_ENVELOPES.safety_limits.max_distance_from_home.maximum
    max_distance_from_home = min(
        max(farthest + PERIMETER_HOME_BUFFER_METERS, longest_leg), ceiling
    )

    actions = (
        to_wire(TakePhoto()),
        to_wire(StartRecording(duration_seconds=PERIMETER_RECORDING_SECONDS)),
    )
    return MissionDocument(
        metadata=MissionMetadata(
            name="Perimeter Inspection",
            description=f"Property boundary inspection with {len(corners)} waypoints",
            tags=("inspection", "perimeter", "boundary", "security", "patrol"),
        ),
        settings=MissionSettings(
            max_flight_speed=10.0,
            auto_flight_speed=6.0,
            finished_action=FinishedAction.GO_HOME.value,
            heading_mode=HeadingMode.USING_WAYPOINT_HEADING.value,
        ),
        waypoints=tuple(
            DocumentWaypoint(
                coordinate=corner,
                altitude=params.altitude,
                gimbal_pitch=-45.0,
                speed=6.0,
                actions=actions,
            )
            for corner in corners
        ),
        safety_limits=SafetyLimits(
            max_altitude=120.0,
            max_distance_from_home=max_distance_from_home,
            geofence_center=center,
            geofence_radius=farthest + PERIMETER_GEOFENCE_BUFFER_METERS,
        ),
    )


_BUILDERS: Mapping[TemplateKind, tuple[type[_Params], Callable[[Any], MissionDocument]]] = {
    TemplateKind.BASIC_TEST: (BasicTestParams, build_basic_test_document),
    TemplateKind.GRID_SURVEY: (GridSurveyParams, build_grid_survey_document),
    TemplateKind.PERIMETER: (PerimeterParams, build_perimeter_document),
}


def build_template(
    kind: TemplateKind | str,
    params: TemplateParams | Mapping[str, Any] | None = None,
    *,
    as_flight_plan: bool = False,
    envelopes: StageEnvelopes = DEFAULT_ENVELOPES,
    hardware_profile: HardwareProfile = DEFAULT_HARDWARE_PROFILE,
) -> MissionDocument | FlightPlan:
    """Build and validate a template mission.

    Args:
        kind: Template to build.
        params: Parameter model, or a mapping validated into one. ``None``
            uses the defaults where the template has them.
        as_flight_plan: Return the canonical flight plan instead of the document.
        envelopes: Envelopes the built document is validated against.
        hardware_profile: Source of test locations and development defaults
            for parameters given as a mapping.

    Returns:
        The mission document, or its flight plan.

    Raises:
        ValueError: If ``kind`` is not a template name.
        pydantic.ValidationError: If ``params`` does not fit the template.
        ValidationFailedError: If the parameters produce an invalid document.
    """
    kind = TemplateKind(kind)
    params_model, builder = _BUILDERS[kind]
    if not isinstance(params, params_model):
        params = params_model.model_validate(
            params or {}, context={"hardware_profile": hardware_profile}
        )

    document = builder(params)
    validate_document(document, envelopes)
    logger.info(
        "Built %s template with %d waypoints",
        kind,
        len(document.waypoints),
        extra={"template": str(kind)},
    )
    if as_flight_plan:
        return canonicalize(document)
    return document
