"""
Tests for chart.hit_test

Test Coverage:
- nearest_point(): exact hits, pick radius, plot bounds, tie-breaking
"""
import pytest

from scc_toolkit.chart.config import ChartConfig
from scc_toolkit.chart.hit_test import PICK_RADIUS_PX, nearest_point
from scc_toolkit.chart.layout import compose_chart
from scc_toolkit.chart.scale import PlotArea

CORRECT = "correctPerMinute"
ERRORS = "errorsPerMinute"


@pytest.fixture
def config():
    return ChartConfig()


def _marker_positions(roster, active_ids, metrics, zoom, config):
    plan = compose_chart(roster, active_ids, metrics, zoom, config=config)
    return [(m.x, m.y) for m in plan.markers]


class TestNearestPoint:
    """Tests for nearest_point."""

    def test_hit_when_pointer_on_marker_then_distance_zero(self, doubling_student, config):
        # Arrange
        x, y = _marker_positions([doubling_student], ["ana"], [CORRECT], 30, config)[1]

        # Act
        hit = nearest_point(x, y, [doubling_student], ["ana"], [CORRECT], 30, config)

        # Assert
        assert hit is not None
        assert hit.distance == 0
        assert hit.point.day == 17
        assert hit.metric == CORRECT
        assert hit.student.id == "ana"
        assert (hit.x, hit.y) == (x, y)

    def test_hit_when_pointer_25px_away_then_none(self, make_student, make_assessment, config):
        student = make_student(assessments=[make_assessment(0, 1.0), make_assessment(7, 1.0)])
        (x, y), _ = _marker_positions([student], ["s1"], [CORRECT], 7, config)

        hit = nearest_point(x + 25, y, [student], ["s1"], [CORRECT], 7, config)

        assert hit is None

    def test_hit_when_pointer_within_radius_then_reports_distance(self, make_student, make_assessment, config):
        student = make_student(assessments=[make_assessment(0, 1.0), make_assessment(7, 1.0)])
        (x, y), _ = _marker_positions([student], ["s1"], [CORRECT], 7, config)

        hit = nearest_point(x + 6, y + 8, [student], ["s1"], [CORRECT], 7, config)

        assert hit.distance == pytest.approx(10.0)

    def test_hit_when_exactly_at_radius_then_none(self, make_student, make_assessment, config):
        student = make_student(assessments=[make_assessment(0, 1.0), make_assessment(7, 1.0)])
        (x, y), _ = _marker_positions([student], ["s1"], [CORRECT], 7, config)

        hit = nearest_point(x + PICK_RADIUS_PX, y, [student], ["s1"], [CORRECT], 7, config)

        assert hit is None

    def test_hit_when_pointer_outside_plot_then_none(self, doubling_student, config):
        assert nearest_point(5, 5, [doubling_student], ["ana"], [CORRECT], 30, config) is None

    def test_hit_when_value_zero_then_not_a_candidate(self, make_student, make_assessment, config):
        student = make_student(assessments=[make_assessment(0, 0.0), make_assessment(7, 1.0)])
        (x, y), _ = _marker_positions([student], ["s1"], [CORRECT], 7, config)

        assert nearest_point(x, y, [student], ["s1"], [CORRECT], 7, config) is None

    def test_hit_when_point_beyond_zoom_then_not_a_candidate(self, make_student, make_assessment, config):
        student = make_student(assessments=[make_assessment(0, 1.0), make_assessment(20, 1.0)])
        _, (_, y) = _marker_positions([student], ["s1"], [CORRECT], 30, config)
        right = PlotArea.from_config(config).right

        assert nearest_point(right, y, [student], ["s1"], [CORRECT], 7, config) is None

    def test_hit_when_student_inactive_then_ignored(self, doubling_student, config):
        x, y = _marker_positions([doubling_student], ["ana"], [CORRECT], 30, config)[0]

        assert nearest_point(x, y, [doubling_student], [], [CORRECT], 30, config) is None

    def test_hit_when_two_points_equidistant_then_first_metric_wins(self, make_student, make_assessment, config):
        # Same value for both metrics on the same day: identical pixel
        student = make_student(assessments=[make_assessment(0, 3.0, 3.0), make_assessment(1, 4.0, 2.0)])
        x, y = _marker_positions([student], ["s1"], [CORRECT], 7, config)[0]

        hit = nearest_point(x, y, [student], ["s1"], [ERRORS, CORRECT], 7, config)

        assert hit.metric == CORRECT

    def test_hit_when_closer_point_later_then_closer_wins(self, make_student, make_assessment, config):
        student = make_student(assessments=[make_assessment(0, 1.0), make_assessment(1, 1.0)])
        (x0, y0), (x1, y1) = _marker_positions([student], ["s1"], [CORRECT], 7, config)

        hit = nearest_point(x1 - 2, y1, [student], ["s1"], [CORRECT], 7, config)

        assert hit.point.normalized_day == 1
