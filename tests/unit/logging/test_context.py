"""Tests for logging context management."""

from mission_pipeline.logging.context import (
    clear_context,
    generate_run_id,
    get_mission_context,
    get_run_id,
    mission_scope,
    set_mission_context,
    set_run_id,
)


class TestRunId:
    def test_default_empty(self):
        clear_context()
        assert get_run_id() == ""

    def test_set_and_get(self):
        set_run_id("run-123")
        assert get_run_id() == "run-123"
        clear_context()

    def test_generate_sets_id(self):
        result = generate_run_id()
        assert len(result) == 12
        assert get_run_id() == result
        clear_context()


class TestMissionContext:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_default_empty(self):
        assert get_mission_context() == {}

    def test_set_and_get(self):
        set_mission_context(mission="Basic Test Mission")
        assert get_mission_context()["mission"] == "Basic Test Mission"

    def test_values_accumulate(self):
        set_mission_context(mission="Perimeter Inspection")
        set_mission_context(operation="import")
        assert get_mission_context() == {"mission": "Perimeter Inspection", "operation": "import"}

    def test_returns_copy(self):
        set_mission_context(mission="m")
        get_mission_context()["mission"] = "changed"
        assert get_mission_context()["mission"] == "m"

    def test_clear_removes_everything(self):
        set_run_id("abc")
        set_mission_context(mission="m")
        clear_context()
        assert get_run_id() == ""
        assert get_mission_context() == {}


class TestMissionScope:
    def setup_method(self):
        clear_context()

    def test_sets_run_id_and_fields(self):
        with mission_scope(mission="Grid Survey Mission") as scope_run_id:
            assert get_run_id() == scope_run_id
            assert get_mission_context() == {"mission": "Grid Survey Mission"}

    def test_restores_previous_context(self):
        set_run_id("outer")
        set_mission_context(operation="import")
        with mission_scope(mission="inner"):
            set_mission_context(stage="settings")
        assert get_run_id() == "outer"
        assert get_mission_context() == {"operation": "import"}
        clear_context()

    def test_nested_scopes_merge_fields(self):
        with mission_scope(operation="import"):
            with mission_scope(mission="nested"):
                assert get_mission_context() == {"operation": "import", "mission": "nested"}
            assert get_mission_context() == {"operation": "import"}

    def test_restores_on_exception(self):
        try:
            with mission_scope(mission="failing"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert get_mission_context() == {}
        assert get_run_id() == ""
