"""Tests for logging setup and logger factory."""

import io
import json
import logging

from mission_pipeline.logging.config import LogFormat, LoggingConfig, LogLevel
from mission_pipeline.logging.context import mission_scope
from mission_pipeline.logging.logger import (
    HANDLER_NAME,
    PIPELINE_LOGGER,
    get_logger,
    reset_logging,
    setup_logging,
)


def _pipeline_handlers() -> list[logging.Handler]:
    return [h for h in logging.getLogger().handlers if h.get_name() == HANDLER_NAME]


class TestSetupLogging:
    def setup_method(self):
        reset_logging()

    def teardown_method(self):
        reset_logging()

    def test_installs_one_handler(self):
        setup_logging()
        assert len(_pipeline_handlers()) == 1

    def test_keeps_foreign_handlers(self):
        foreign = logging.NullHandler()
        root = logging.getLogger()
        root.addHandler(foreign)
        try:
            setup_logging()
            reset_logging()
            assert foreign in root.handlers
        finally:
            root.removeHandler(foreign)

    def test_human_format_by_default(self):
        stream = io.StringIO()
        setup_logging(stream=stream)
        get_logger("mission_pipeline.test").info("test message")
        assert "| test message" in stream.getvalue()

    def test_json_format(self):
        config = LoggingConfig(log_format=LogFormat.JSON)
        stream = io.StringIO()
        setup_logging(config=config, stream=stream)
        get_logger("mission_pipeline.test").info("test message")
        parsed = json.loads(stream.getvalue())
        assert parsed["message"] == "test message"

    def test_json_lines_carry_mission_scope(self):
        config = LoggingConfig(log_format=LogFormat.JSON, include_timestamp=False)
        stream = io.StringIO()
        setup_logging(config=config, stream=stream)
        with mission_scope(mission="Grid Survey Mission") as scope_run_id:
            get_logger("mission_pipeline.vendor").info("Lowered", extra={"waypoints": 9})
        parsed = json.loads(stream.getvalue())
        assert parsed["mission"] == "Grid Survey Mission"
        assert parsed["run_id"] == scope_run_id
        assert parsed["waypoints"] == 9

    def test_idempotent_without_force(self):
        setup_logging()
        setup_logging()
        assert len(_pipeline_handlers()) == 1

    def test_force_reconfigures(self):
        setup_logging()
        setup_logging(force=True)
        assert len(_pipeline_handlers()) == 1

    def test_respects_log_level(self):
        setup_logging(config=LoggingConfig(log_level=LogLevel.ERROR))
        assert logging.getLogger().level == logging.ERROR
        assert logging.getLogger(PIPELINE_LOGGER).level == logging.ERROR

    def test_pipeline_level_overrides(self):
        config = LoggingConfig(log_level=LogLevel.WARNING, pipeline_log_level=LogLevel.DEBUG)
        stream = io.StringIO()
        setup_logging(config=config, stream=stream)
        get_logger("mission_pipeline.vendor.translator").debug("Added takePhoto action")
        get_logger("other.library").info("noise")
        output = stream.getvalue()
        assert "Added takePhoto action" in output
        assert "noise" not in output


class TestGetLogger:
    def test_returns_logger(self):
        logger = get_logger("mission_pipeline.service")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "mission_pipeline.service"


class TestResetLogging:
    def test_removes_handler(self):
        setup_logging()
        reset_logging()
        assert _pipeline_handlers() == []

    def test_restores_root_level(self):
        root = logging.getLogger()
        before = root.level
        setup_logging(config=LoggingConfig(log_level=LogLevel.CRITICAL))
        reset_logging()
        assert root.level == before
