"""Great-circle geometry for mission planning.

Pure functions over anything exposing ``latitude``/``longitude`` in decimal
degrees. Distances are in meters, times in seconds.
"""

import math
from collections.abc import Sequence
from itertools import pairwise
from typing import Protocol

from pydantic import BaseModel, ConfigDict

EARTH_RADIUS_METERS: float = 6_371_000.0
DEFAULT_ACTION_OVERHEAD_SECONDS: float = 10.0


class GeoPoint(Protocol):
    """Anything located by latitude and longitude."""

    @property
    def latitude(self) -> float: ...

    @property
    def longitude(self) -> float: ...


class Coordinate(BaseModel):
    """Geographic coordinate in decimal degrees.

    Ranges are not enforced here; each validation stage applies its own.
    """

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


def distance(first: GeoPoint, second: GeoPoint) -> float:
    """Haversine distance between two points in meters."""
    first_lat = math.radians(first.latitude)
    second_lat = math.radians(second.latitude)
    delta_lat = second_lat - first_lat
    delta_lon = math.radians(second.longitude - first.longitude)

    haversine = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(first_lat) * math.cos(second_lat) * math.sin(delta_lon / 2) ** 2
    )
    return 2 * EARTH_RADIUS_METERS * math.asin(min(1.0, math.sqrt(haversine)))


def segment_distances(points: Sequence[GeoPoint]) -> list[float]:
    """Distances of each consecutive leg; empty for fewer than two points."""
    return [distance(start, end) for start, end in pairwise(points)]


def path_length(points: Sequence[GeoPoint]) -> float:
    """Total length of the polyline through ``points`` in meters."""
    return sum(segment_distances(points))


def estimated_flight_time(
    points: Sequence[GeoPoint],
    auto_flight_speed: float,
    action_overhead_seconds: float = DEFAULT_ACTION_OVERHEAD_SECONDS,
) -> float:
    """Estimate mission duration in seconds.

    Travel time at the cruise speed plus a fixed per-waypoint allowance for the
    actions performed at each stop.

    Args:
        points: Waypoints in flight order.
        auto_flight_speed: Cruise speed in m/s.
        action_overhead_seconds: Time budgeted per waypoint.

    Returns:
        Estimated seconds; infinite when the path is non-empty but the speed
        is not positive.
    """
    length = path_length(points)
    if length == 0:
        travel_time = 0.0
    elif auto_flight_speed <= 0:
        travel_time = math.inf
    else:
        travel_time = length / auto_flight_speed
    return travel_time + len(points) * action_overhead_seconds


def centroid(points: Sequence[GeoPoint]) -> Coordinate:
    """Arithmetic mean of latitudes and longitudes.

    Raises:
        ValueError: If ``points`` is empty.
    """
    if not points:
        raise ValueError("centroid of an empty point set is undefined")
    count = len(points)
    return Coordinate(
        latitude=sum(point.latitude for point in points) / count,
        longitude=sum(point.longitude for point in points) / count,
    )


def is_within_radius(point: GeoPoint, center: GeoPoint, radius_meters: float) -> bool:
    """Check whether ``point`` lies within ``radius_meters`` of ``center``."""
    return distance(point, center) <= radius_meters


def format_coordinate(point: GeoPoint) -> str:
    """Format a point as ``"lat, lon"`` with six decimals."""
    return f"{point.latitude:.6f}, {point.longitude:.6f}"
