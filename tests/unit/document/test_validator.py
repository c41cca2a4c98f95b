"""Tests for the layered document validator."""

import pytest

from mission_pipeline.document.models import MissionDocument
from mission_pipeline.document.validator import (
    collect_document_violations,
    iter_document_violations,
    validate_document,
)
from mission_pipeline.exceptions.import_errors import ValidationFailedError, ValidationStage


def _validate(data):
    validate_document(MissionDocument.model_validate(data))


def _failure(data) -> ValidationFailedError:
    with pytest.raises(ValidationFailedError) as exc_info:
        _validate(data)
    return exc_info.value


class TestValidDocument:
    def test_passes(self, document_data):
        _validate(document_data)

    def test_no_violations_collected(self, document_data):
        assert collect_document_violations(MissionDocument.model_validate(document_data)) == []

    def test_document_not_modified(self, document_data):
        document = MissionDocument.model_validate(document_data)
        before = document.model_copy(deep=True)
        validate_document(document)
        assert document == before

    def test_altitude_above_vendor_range_passes(self, document_data):
        document_data["waypoints"][1]["altitude"] = 140
        _validate(document_data)


class TestMetadataChecks:
    def test_blank_name(self, document_data):
        document_data["metadata"]["name"] = "   "
        error = _failure(document_data)
        assert error.stage == ValidationStage.METADATA
        assert error.reason == "mission name cannot be empty"


class TestWaypointCountChecks:
    def test_no_waypoints(self, document_data):
        document_data["waypoints"] = []
        error = _failure(document_data)
        assert error.stage == ValidationStage.WAYPOINT_COUNT
        assert error.reason == "waypoints out of [1,99]"

    def test_too_many_waypoints(self, document_data):
        document_data["waypoints"] = [document_data["waypoints"][0]] * 100
        assert _failure(document_data).reason == "waypoints out of [1,99]"


class TestWaypointChecks:
    @pytest.mark.parametrize(
        ("field", "value", "reason"),
        [
            ("altitude", 501, "altitude out of [0,500]"),
            ("altitude", -1, "altitude out of [0,500]"),
            ("gimbalPitch", 45, "gimbalPitch out of [-90,30]"),
            ("heading", 360, "heading out of [0,360)"),
            ("speed", 25, "speed out of [0.1,20]"),
        ],
    )
    def test_out_of_range(self, document_data, field, value, reason):
        document_data["waypoints"][1][field] = value
        error = _failure(document_data)
        assert error.stage == ValidationStage.WAYPOINT
        assert error.reason == reason
        assert error.field == field
        assert error.waypoint_index == 1

    def test_invalid_latitude(self, document_data):
        document_data["waypoints"][2]["coordinate"]["latitude"] = 91
        error = _failure(document_data)
        assert error.reason == "latitude out of [-90,90]"
        assert error.waypoint_index == 2

    def test_unknown_turn_mode(self, document_data):
        document_data["waypoints"][0]["turnMode"] = "sideways"
        error = _failure(document_data)
        assert error.field == "turnMode"
        assert error.reason.startswith("unknown turnMode 'sideways'")


class TestActionChecks:
    def test_unknown_action(self, document_data):
        document_data["waypoints"][1]["actions"].append({"type": "hover"})
        error = _failure(document_data)
        assert error.stage == ValidationStage.ACTION
        assert error.reason == "unknown action type 'hover'"
        assert error.waypoint_index == 1
        assert error.action_index == 1

    def test_gimbal_pitch_out_of_range(self, document_data):
        document_data["waypoints"][0]["actions"] = [
            {"type": "rotateGimbal", "parameters": {"pitch": "45"}}
        ]
        error = _failure(document_data)
        assert error.reason == "pitch out of [-90,30]"
        assert error.action_index == 0

    def test_aircraft_heading_out_of_range(self, document_data):
        document_data["waypoints"][0]["actions"] = [
            {"type": "rotateAircraft", "parameters": {"heading": "-10"}}
        ]
        assert _failure(document_data).reason == "heading out of [0,360)"

    def test_missing_parameter(self, document_data):
        document_data["waypoints"][0]["actions"] = [{"type": "rotateAircraft"}]
        error = _failure(document_data)
        assert error.reason == "rotateAircraft requires 'heading' parameter"
        assert error.field == "heading"

    def test_non_positive_duration(self, document_data):
        document_data["waypoints"][0]["actions"] = [
            {"type": "startRecording", "parameters": {"duration": "0"}}
        ]
        assert _failure(document_data).reason == "duration must be positive"

    @pytest.mark.parametrize(
        ("action", "field"),
        [
            ({"type": "startRecording", "parameters": {"duration": "inf"}}, "duration"),
            ({"type": "rotateGimbal", "parameters": {"pitch": "nan"}}, "pitch"),
            ({"type": "rotateAircraft", "parameters": {"heading": "inf"}}, "heading"),
        ],
    )
    def test_non_finite_parameter(self, document_data, action, field):
        document_data["waypoints"][2]["actions"] = [action]
        error = _failure(document_data)
        assert error.stage == ValidationStage.ACTION
        assert error.field == field
        assert error.waypoint_index == 2
        assert error.reason.startswith(f"'{field}' parameter must be finite")


class TestSettingsChecks:
    def test_max_speed_out_of_range(self, document_data):
        document_data["settings"]["maxFlightSpeed"] = 30
        error = _failure(document_data)
        assert error.stage == ValidationStage.SETTINGS
        assert error.reason == "maxFlightSpeed out of [1,25]"

    def test_auto_speed_above_max(self, document_data):
        document_data["settings"]["autoFlightSpeed"] = 13
        assert _failure(document_data).reason == "autoFlightSpeed out of [0.5,12]"

    def test_auto_speed_below_floor(self, document_data):
        document_data["settings"]["autoFlightSpeed"] = 0.2
        assert _failure(document_data).reason == "autoFlightSpeed out of [0.5,12]"

    def test_repeat_times(self, document_data):
        document_data["settings"]["repeatTimes"] = 11
        assert _failure(document_data).reason == "repeatTimes out of [1,10]"

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("finishedAction", "hover"),
            ("headingMode", "usingCompass"),
            ("gotoFirstWaypointMode", "fast"),
        ],
    )
    def test_unknown_tags_rejected(self, document_data, field, value):
        document_data["settings"][field] = value
        error = _failure(document_data)
        assert error.stage == ValidationStage.SETTINGS
        assert error.field == field


class TestSafetyLimitChecks:
    @pytest.mark.parametrize(
        ("field", "value", "reason"),
        [
            ("maxAltitude", 160, "maxAltitude out of [10,150]"),
            ("maxDistanceFromHome", 40, "maxDistanceFromHome out of [50,2000]"),
            ("minBatteryLevel", 5, "minBatteryLevel out of [10,50]"),
            ("minGPSSignalLevel", 6, "minGPSSignalLevel out of [3,5]"),
            ("geofenceRadius", 0, "geofenceRadius out of (0,100000]"),
        ],
    )
    def test_out_of_range(self, document_data, field, value, reason):
        document_data["safetyLimits"][field] = value
        error = _failure(document_data)
        assert error.stage == ValidationStage.SAFETY_LIMITS
        assert error.reason == reason

    def test_invalid_geofence_center(self, document_data):
        document_data["safetyLimits"]["geofenceCenter"]["longitude"] = 200
        assert _failure(document_data).field == "geofenceCenter.longitude"

    def test_leg_longer_than_max_distance_from_home(self, document_data):
        document_data["safetyLimits"]["maxDistanceFromHome"] = 100
        error = _failure(document_data)
        assert error.field == "maxDistanceFromHome"
        assert error.waypoint_index == 0
        assert error.context["next_waypoint_index"] == 1
        assert error.reason.startswith("distance between waypoints 1 and 2")


class TestCheckOrder:
    def test_waypoint_before_settings(self, document_data):
        document_data["settings"]["maxFlightSpeed"] = 30
        document_data["waypoints"][2]["altitude"] = 600
        error = _failure(document_data)
        assert error.stage == ValidationStage.WAYPOINT
        assert error.waypoint_index == 2

    def test_earlier_waypoint_first(self, document_data):
        document_data["waypoints"][2]["altitude"] = 600
        document_data["waypoints"][1]["gimbalPitch"] = 80
        assert _failure(document_data).waypoint_index == 1

    def test_settings_before_safety_limits(self, document_data):
        document_data["settings"]["repeatTimes"] = 0
        document_data["safetyLimits"]["maxAltitude"] = 5
        assert _failure(document_data).stage == ValidationStage.SETTINGS

    def test_collect_all_keeps_order(self, document_data):
        document_data["waypoints"][0]["altitude"] = 600
        document_data["settings"]["maxFlightSpeed"] = 30
        document_data["safetyLimits"]["minBatteryLevel"] = 90
        document = MissionDocument.model_validate(document_data)
        stages = [error.stage for error in collect_document_violations(document)]
        assert stages[0] == ValidationStage.WAYPOINT
        assert ValidationStage.SETTINGS in stages
        assert stages[-1] == ValidationStage.SAFETY_LIMITS

    def test_first_violation_matches_fail_fast(self, document_data):
        document_data["waypoints"][1]["speed"] = 50
        document_data["metadata"]["name"] = ""
        document = MissionDocument.model_validate(document_data)
        first = next(iter_document_violations(document))
        assert first.stage == ValidationStage.METADATA
        with pytest.raises(ValidationFailedError) as exc_info:
            validate_document(document)
        assert exc_info.value.reason == first.reason
