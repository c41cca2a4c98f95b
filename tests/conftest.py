"""Shared test fixtures."""

import pytest

from mission_pipeline.config import get_settings


@pytest.fixture(autouse=True)
def _clear_environment(monkeypatch):
    """Clear environment variables that affect settings."""
    env_vars_to_clear = [
        "SERVICE_NAME",
        "ENVIRONMENT",
        "LOG_LEVEL",
        "LOG_FORMAT",
        "INCLUDE_TIMESTAMP",
        "INCLUDE_LOCATION",
        "PIPELINE_LOG_LEVEL",
        "ACTION_OVERHEAD_SECONDS",
        "DEFAULT_AUTHOR",
        "SCHEMA_VERSION",
        "INCLUDE_EXPORT_STATISTICS",
    ]
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()


def _waypoint_data(latitude: float, longitude: float, **overrides):
    waypoint = {
        "coordinate": {"latitude": latitude, "longitude": longitude},
        "altitude": 50.0,
        "gimbalPitch": -45.0,
        "actions": [{"type": "takePhoto"}],
    }
    waypoint.update(overrides)
    return waypoint


@pytest.fixture
def document_data():
    """A valid three-waypoint mission document as parsed JSON.

    Waypoints are about 111 m apart near Home Base.
    """
    return {
        "metadata": {
            "name": "Field Check",
            "description": "Three waypoints along the runway",
            "author": "Tester",
            "tags": ["test"],
            "createdDate": "2024-05-01T10:00:00Z",
            "modifiedDate": "2024-05-01T10:00:00Z",
            "version": "1.0",
        },
        "settings": {
            "maxFlightSpeed": 12.0,
            "autoFlightSpeed": 8.0,
            "finishedAction": "goHome",
            "headingMode": "auto",
            "gotoFirstWaypointMode": "safely",
            "exitMissionOnRCSignalLost": True,
            "repeatTimes": 1,
        },
        "waypoints": [
            _waypoint_data(10.32352, -84.430511),
            _waypoint_data(10.32452, -84.430511),
            _waypoint_data(10.32552, -84.430511),
        ],
        "safetyLimits": {
            "maxAltitude": 120.0,
            "maxDistanceFromHome": 500.0,
            "minBatteryLevel": 20,
            "minGPSSignalLevel": 3,
            "geofenceCenter": {"latitude": 10.32352, "longitude": -84.430511},
            "geofenceRadius": 600.0,
        },
    }
