"""Numeric envelopes enforced at each validation stage.

A document may climb to 500 m and declare a ceiling of up to 150 m, while
the vendor hardware accepts only 2-120 m. Each stage owns its own envelope.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class NumericRange:
    """A closed, half-open or open interval of allowed values."""

    minimum: float
    maximum: float
    include_minimum: bool = True
    include_maximum: bool = True

    def contains(self, value: float) -> bool:
        """Check whether ``value`` lies inside the interval (NaN never does)."""
        above = value >= self.minimum if self.include_minimum else value > self.minimum
        below = value <= self.maximum if self.include_maximum else value < self.maximum
        return above and below

    def with_maximum(self, maximum: float) -> "NumericRange":
        """Return a copy bounded above by ``maximum`` (inclusive)."""
        return NumericRange(self.minimum, maximum, self.include_minimum, include_maximum=True)

    def __str__(self) -> str:
        opening = "[" if self.include_minimum else "("
        closing = "]" if self.include_maximum else ")"
        return f"{opening}{self.minimum:g},{self.maximum:g}{closing}"


LATITUDE = NumericRange(-90, 90)
LONGITUDE = NumericRange(-180, 180)
HEADING = NumericRange(0, 360, include_maximum=False)
GIMBAL_PITCH = NumericRange(-90, 30)


@dataclass(frozen=True)
class DocumentEnvelope:
    """Sanity bounds for an authored mission document."""

    waypoint_count: NumericRange = NumericRange(1, 99)
    latitude: NumericRange = LATITUDE
    longitude: NumericRange = LONGITUDE
    altitude: NumericRange = NumericRange(0, 500)
    gimbal_pitch: NumericRange = GIMBAL_PITCH
    heading: NumericRange = HEADING
    waypoint_speed: NumericRange = NumericRange(0.1, 20)
    max_flight_speed: NumericRange = NumericRange(1, 25)
    # autoFlightSpeed runs from this floor up to the document's maxFlightSpeed.
    auto_flight_speed: NumericRange = NumericRange(0.5, 25)
    repeat_times: NumericRange = NumericRange(1, 10)


@dataclass(frozen=True)
class SafetyLimitEnvelope:
    """Regulatory bounds on the safety limits a document declares."""

    max_altitude: NumericRange = NumericRange(10, 150)
    max_distance_from_home: NumericRange = NumericRange(50, 2000)
    min_battery_level: NumericRange = NumericRange(10, 50)
    min_gps_signal_level: NumericRange = NumericRange(3, 5)
    geofence_radius: NumericRange = NumericRange(0, 100_000, include_minimum=False)


@dataclass(frozen=True)
class FlightPlanEnvelope:
    """Bounds a canonical flight plan must satisfy however it was built."""

    waypoint_count: NumericRange = NumericRange(2, 99)
    latitude: NumericRange = LATITUDE
    longitude: NumericRange = LONGITUDE
    altitude: NumericRange = NumericRange(0, 500)
    heading: NumericRange = HEADING
    gimbal_pitch: NumericRange = GIMBAL_PITCH
    max_flight_speed: NumericRange = NumericRange(0, 15, include_minimum=False)
    auto_flight_speed: NumericRange = NumericRange(0, 15, include_minimum=False)
    max_segment_distance: float = 1000.0


@dataclass(frozen=True)
class VendorEnvelope:
    """Hardware bounds of the target flight-control stack."""

    waypoint_count: NumericRange = NumericRange(1, 99)
    latitude: NumericRange = LATITUDE
    longitude: NumericRange = LONGITUDE
    altitude: NumericRange = NumericRange(2, 120)
    heading: NumericRange = HEADING
    gimbal_pitch: NumericRange = GIMBAL_PITCH
    max_flight_speed: NumericRange = NumericRange(1, 15)
    auto_flight_speed: NumericRange = NumericRange(0.5, 15)
    waypoint_speed: NumericRange = NumericRange(0, 15)
    repeat_times: NumericRange = NumericRange(1, 255)
    corner_radius: NumericRange = NumericRange(0.2, 1000)
    action_timeout: NumericRange = NumericRange(0, 999)
    action_repeat_times: NumericRange = NumericRange(1, 15)
    actions_per_waypoint: NumericRange = NumericRange(0, 15)
    stay_milliseconds: NumericRange = NumericRange(0, 32767)


@dataclass(frozen=True)
class StageEnvelopes:
    """The full set of stage envelopes handed to the pipeline."""

    document: DocumentEnvelope = field(default_factory=DocumentEnvelope)
    safety_limits: SafetyLimitEnvelope = field(default_factory=SafetyLimitEnvelope)
    flight_plan: FlightPlanEnvelope = field(default_factory=FlightPlanEnvelope)
    vendor: VendorEnvelope = field(default_factory=VendorEnvelope)


DEFAULT_ENVELOPES = StageEnvelopes()
