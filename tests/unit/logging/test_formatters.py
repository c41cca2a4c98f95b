"""Tests for log formatters."""

import json
import logging
import sys

from mission_pipeline.logging.context import clear_context, set_mission_context, set_run_id
from mission_pipeline.logging.formatters import HumanFormatter, JSONFormatter


def _make_record(message="test message", level=logging.INFO, **extra):
    """Create a test log record."""
    record = logging.LogRecord(
        name="test.logger",
        level=level,
        pathname="test.py",
        lineno=42,
        msg=message,
        args=(),
        exc_info=None,
    )
    record.__dict__.update(extra)
    return record


class TestJSONFormatter:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_outputs_valid_json(self):
        parsed = json.loads(JSONFormatter().format(_make_record()))
        assert isinstance(parsed, dict)

    def test_includes_message_and_level(self):
        parsed = json.loads(JSONFormatter().format(_make_record("hello", level=logging.ERROR)))
        assert parsed["message"] == "hello"
        assert parsed["level"] == "ERROR"
        assert parsed["logger"] == "test.logger"

    def test_timestamp_toggle(self):
        assert "timestamp" in json.loads(JSONFormatter().format(_make_record()))
        without = JSONFormatter(include_timestamp=False).format(_make_record())
        assert "timestamp" not in json.loads(without)

    def test_includes_service_name(self):
        parsed = json.loads(JSONFormatter(service_name="planner").format(_make_record()))
        assert parsed["service"] == "planner"

    def test_location_only_when_enabled(self):
        assert "line" not in json.loads(JSONFormatter().format(_make_record()))
        parsed = json.loads(JSONFormatter(include_location=True).format(_make_record()))
        assert parsed["line"] == 42

    def test_includes_run_id_and_mission_context(self):
        set_run_id("run-1")
        set_mission_context(mission="Perimeter Inspection")
        parsed = json.loads(JSONFormatter().format(_make_record()))
        assert parsed["run_id"] == "run-1"
        assert parsed["mission"] == "Perimeter Inspection"

    def test_includes_extra_fields(self):
        record = _make_record(waypoints=4, finished_action="goHome")
        parsed = json.loads(JSONFormatter().format(record))
        assert parsed["waypoints"] == 4
        assert parsed["finished_action"] == "goHome"

    def test_non_serializable_extra_uses_str(self):
        record = _make_record(values=object())
        parsed = json.loads(JSONFormatter().format(record))
        assert parsed["values"].startswith("<object")

    def test_includes_exception(self):
        try:
            raise ValueError("bad value")
        except ValueError:
            record = _make_record()
            record.exc_info = sys.exc_info()
        parsed = json.loads(JSONFormatter().format(record))
        assert parsed["exception"]["type"] == "ValueError"
        assert parsed["exception"]["message"] == "bad value"


class TestHumanFormatter:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_contains_message(self):
        output = HumanFormatter(use_colors=False).format(_make_record("hello world"))
        assert "| hello world" in output
        assert "INFO" in output

    def test_colors_when_enabled(self):
        output = HumanFormatter(use_colors=True).format(_make_record())
        assert "\033[32m" in output

    def test_no_colors_when_disabled(self):
        output = HumanFormatter(use_colors=False).format(_make_record())
        assert "\033[" not in output

    def test_appends_context_fields(self):
        set_mission_context(mission="m1")
        output = HumanFormatter(use_colors=False).format(_make_record(waypoints=3))
        assert output.endswith("| mission=m1 waypoints=3")

    def test_truncates_long_logger_names(self):
        record = _make_record()
        record.name = "mission_pipeline.vendor.translator.with.a.long.suffix"
        output = HumanFormatter(use_colors=False).format(record)
        assert "...slator.with.a.long.suffix" in output
