"""
Tests for chart.state

Test Coverage:
- DashboardState.ingest(): add, merge, palette cycling
- remove_student() / toggle_student(): selection bookkeeping
- set_metric() / set_zoom() / with_display_options()
- compose() / hit_test() delegate with the snapshot's selection
"""
import pytest

from scc_toolkit.chart.config import STUDENT_PALETTE, ChartConfig
from scc_toolkit.chart.state import DashboardState


class TestIngest:
    """Tests for roster ingestion."""

    def test_ingest_when_new_student_then_added_selected_and_colored(self, make_student):
        state = DashboardState().ingest(make_student("a", color="#000000"))

        assert [s.id for s in state.students] == ["a"]
        assert state.active_student_ids == ("a",)
        assert state.students[0].color == STUDENT_PALETTE[0]

    def test_ingest_when_many_students_then_palette_cycles(self, make_student):
        state = DashboardState()
        for i in range(len(STUDENT_PALETTE) + 1):
            state = state.ingest(make_student(f"s{i}"))

        colors = [s.color for s in state.students]

        assert colors[:len(STUDENT_PALETTE)] == list(STUDENT_PALETTE)
        assert colors[-1] == STUDENT_PALETTE[0]

    def test_ingest_when_known_id_then_data_replaced_color_and_selection_kept(
        self, make_student, make_assessment
    ):
        # Arrange
        state = DashboardState().ingest(make_student("a")).ingest(make_student("b"))
        state = state.toggle_student("a")

        # Act
        merged = state.ingest(make_student("a", "Alice", [make_assessment(1, 2.0)], color="#ffffff"))

        # Assert
        alice = merged.get_student("a")
        assert [s.id for s in merged.students] == ["a", "b"]
        assert alice.name == "Alice"
        assert alice.assessment_count == 1
        assert alice.color == STUDENT_PALETTE[0]
        assert merged.active_student_ids == ("b",)

    def test_ingest_when_called_then_original_state_unchanged(self, make_student):
        state = DashboardState()

        state.ingest(make_student())

        assert state.students == ()


class TestSelection:
    """Tests for roster removal and selection toggles."""

    @pytest.fixture
    def state(self, make_student):
        return DashboardState().ingest(make_student("a")).ingest(make_student("b"))

    def test_remove_when_selected_then_dropped_from_selection(self, state):
        removed = state.remove_student("a")

        assert [s.id for s in removed.students] == ["b"]
        assert removed.active_student_ids == ("b",)

    def test_remove_when_unknown_then_unchanged(self, state):
        assert state.remove_student("zzz") == state

    def test_toggle_when_active_then_deselected(self, state):
        assert state.toggle_student("a").active_student_ids == ("b",)

    def test_toggle_when_reselected_then_appended_to_selection(self, state):
        toggled = state.toggle_student("a").toggle_student("a")

        assert toggled.active_student_ids == ("b", "a")
        assert [s.id for s in toggled.active_students] == ["b", "a"]

    def test_toggle_when_unknown_id_then_ignored(self, state):
        assert state.toggle_student("ghost") is state


class TestViewSettings:
    """Tests for metric, zoom and option changes."""

    def test_set_metric_when_enabled_then_appended_once(self):
        state = DashboardState().set_metric("wpm", True).set_metric("wpm", True)

        assert state.active_metrics == ("correctPerMinute", "errorsPerMinute", "wpm")

    def test_set_metric_when_disabled_then_removed(self):
        state = DashboardState().set_metric("errorsPerMinute", False)

        assert state.active_metrics == ("correctPerMinute",)

    def test_set_zoom_when_unknown_span_then_full_window(self):
        state = DashboardState().set_zoom(45)

        assert state.zoom_days == 45
        assert state.zoom.days == 140

    def test_with_display_options_when_named_then_only_that_option_changes(self):
        state = DashboardState().with_display_options(show_record_floor=True)

        options = state.display_options
        assert options.show_record_floor
        assert options.show_celeration_lines
        assert options.show_data_points
        assert options.connect_points

    def test_with_display_options_when_unknown_name_then_raises(self):
        with pytest.raises(TypeError):
            DashboardState().with_display_options(show_everything=True)


class TestPipeline:
    """Tests for compose / hit_test delegation."""

    def test_compose_when_student_active_then_series_drawn(self, doubling_student):
        state = DashboardState().ingest(doubling_student).set_zoom(30)

        plan = state.compose()

        assert plan.series_count == 2
        assert len(plan.markers) == 6

    def test_compose_when_student_deselected_then_no_series(self, doubling_student):
        state = DashboardState().ingest(doubling_student).toggle_student("ana")

        assert state.compose().series_count == 0

    def test_hit_test_when_on_marker_then_found(self, doubling_student):
        config = ChartConfig()
        state = DashboardState().ingest(doubling_student).set_zoom(30)
        marker = state.compose(config).markers[0]

        hit = state.hit_test(marker.x, marker.y, config)

        assert hit is not None
        assert hit.student.id == "ana"
        assert hit.point.day == 10
