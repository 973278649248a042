"""
Tests for chart.celeration

Test Coverage:
- fit_trend(): OLS on log10 values
- calculate_celeration(): weekly multiplier
- format_celeration(): ×/÷/N/A formatting
- trend_segment(): drawn extent of a trend line
"""
import math

import pytest

from scc_toolkit.chart.celeration import (
    MAX_TREND_EXTENSION_DAYS,
    calculate_celeration,
    fit_trend,
    format_celeration,
    trend_segment,
)
from scc_toolkit.chart.series import extract_series


class TestFitTrend:
    """Tests for fit_trend."""

    @pytest.mark.parametrize("a, b", [(0.3, 0.043), (-1.2, -0.01), (2.0, 0.0)])
    def test_fit_when_points_on_exponential_then_recovers_parameters(self, a, b):
        points = [(x, 10 ** (a + b * x)) for x in (0, 2, 5, 9, 13)]

        fit = fit_trend(points)

        assert fit.slope == pytest.approx(b, abs=1e-9)
        assert fit.intercept == pytest.approx(a, abs=1e-9)
        assert fit.point_count == 5

    def test_fit_when_fewer_than_two_positive_points_then_none(self):
        assert fit_trend([]) is None
        assert fit_trend([(0, 5)]) is None
        assert fit_trend([(0, 5), (1, 0), (2, -1)]) is None

    def test_fit_when_non_positive_values_then_ignored(self):
        fit = fit_trend([(0, 1), (1, 0), (7, 2)])

        assert fit.point_count == 2
        assert fit.slope == pytest.approx(math.log10(2) / 7)

    def test_fit_when_all_same_x_then_none(self):
        assert fit_trend([(3, 1), (3, 10)]) is None

    def test_fit_when_value_not_finite_then_ignored(self):
        fit = fit_trend([(0, 1), (1, math.inf), (7, 2)])

        assert fit.point_count == 2


class TestCalculateCeleration:
    """Tests for calculate_celeration."""

    def test_celeration_when_weekly_doubling_then_times_two(self, doubling_student):
        # Arrange
        points = extract_series(doubling_student, "correctPerMinute")

        # Act
        fit = fit_trend((p.normalized_day, p.value) for p in points)
        celeration = calculate_celeration((p.day, p.value) for p in points)

        # Assert
        assert [p.normalized_day for p in points] == [0, 7, 14]
        assert fit.slope == pytest.approx(math.log10(2) / 7)
        assert celeration == pytest.approx(2.0)
        assert format_celeration(celeration) == "×2.00"

    def test_celeration_when_raw_or_normalized_days_then_same(self, doubling_student):
        points = extract_series(doubling_student, "errorsPerMinute")

        raw = calculate_celeration((p.day, p.value) for p in points)
        normalized = calculate_celeration((p.normalized_day, p.value) for p in points)

        assert raw == pytest.approx(normalized)
        assert raw == pytest.approx(0.5)

    def test_celeration_when_indeterminate_then_none(self):
        assert calculate_celeration([(1, 4)]) is None

    def test_celeration_when_rate_overflows_then_infinite_and_not_available(self):
        celeration = calculate_celeration([(0, 1e-200), (1, 1e200)])

        assert celeration == math.inf
        assert format_celeration(celeration) == "N/A"


class TestFormatCeleration:
    """Tests for format_celeration."""

    @pytest.mark.parametrize("value, expected", [
        (2.0, "×2.00"),
        (1.0, "×1.00"),
        (0.5, "÷2.00"),
        (0.25, "÷4.00"),
        (None, "N/A"),
        (float("nan"), "N/A"),
        (float("inf"), "N/A"),
        (0.0, "N/A"),
        (-2.0, "N/A"),
    ])
    def test_format_when_value_given_then_expected_text(self, value, expected):
        assert format_celeration(value) == expected


class TestTrendSegment:
    """Tests for trend_segment."""

    def test_segment_when_small_window_then_extension_is_tenth(self):
        fit = fit_trend([(1, 1), (4, 2)])

        segment = trend_segment(fit, min_x=1, max_x=4, x_max=7)

        assert segment.start_x == pytest.approx(0.3)
        assert segment.end_x == pytest.approx(4.7)

    def test_segment_when_large_window_then_extension_capped(self):
        fit = fit_trend([(20, 1), (40, 2)])

        segment = trend_segment(fit, min_x=20, max_x=40, x_max=140)

        assert segment.start_x == pytest.approx(20 - MAX_TREND_EXTENSION_DAYS)
        assert segment.end_x == pytest.approx(40 + MAX_TREND_EXTENSION_DAYS)

    def test_segment_when_near_edges_then_clamped_to_window(self):
        fit = fit_trend([(0, 1), (5, 2)])

        segment = trend_segment(fit, min_x=0, max_x=5, x_max=7)

        assert segment.start_x == 0.0
        assert segment.end_x <= 7
        assert segment.start_value == pytest.approx(fit.value_at(0))

    def test_segment_when_back_transform_overflows_then_infinite_end(self):
        fit = fit_trend([(0, 1e-200), (1, 1e200)])

        segment = trend_segment(fit, min_x=0, max_x=1, x_max=7)

        assert segment.end_value == math.inf
        assert segment.start_value == pytest.approx(1e-200)
