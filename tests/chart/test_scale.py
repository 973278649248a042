"""
Tests for chart.scale

Test Coverage:
- CoordinateMapper: log mapping, clamping, inverse
- PlotArea: canvas translation and containment
- map_point(): sentinel substitution for non-positive values
"""
import pytest

from scc_toolkit.chart.config import ChartConfig
from scc_toolkit.chart.scale import (
    ZERO_VALUE_SENTINEL,
    CoordinateMapper,
    PlotArea,
    map_point,
    plottable_value,
)

DECADE_VALUES = [0.001, 0.003, 0.01, 0.2, 1, 7.5, 42, 100, 999, 1000]


class TestCoordinateMapper:
    """Tests for the log-scale mapping."""

    @pytest.mark.parametrize("height", [1, 600, 1234.5])
    @pytest.mark.parametrize("value", DECADE_VALUES)
    def test_inverse_when_value_in_range_then_returns_value(self, value, height):
        mapper = CoordinateMapper()

        restored = mapper.y_to_value(mapper.value_to_y(value, height), height)

        assert restored == pytest.approx(value, rel=1e-9)

    def test_value_to_y_when_values_increase_then_y_strictly_decreases(self):
        mapper = CoordinateMapper()

        ys = [mapper.value_to_y(v, 600) for v in DECADE_VALUES]

        assert all(a > b for a, b in zip(ys, ys[1:]))

    def test_value_to_y_when_at_bounds_then_edges_of_plot(self):
        mapper = CoordinateMapper()

        assert mapper.value_to_y(1000, 600) == pytest.approx(0)
        assert mapper.value_to_y(0.001, 600) == pytest.approx(600)
        assert mapper.value_to_y(1, 600) == pytest.approx(300)

    def test_value_to_y_when_outside_range_then_clamped(self):
        mapper = CoordinateMapper()

        assert mapper.value_to_y(5000, 600) == pytest.approx(0)
        assert mapper.value_to_y(ZERO_VALUE_SENTINEL, 600) == pytest.approx(600)

    def test_day_to_x_when_mid_window_then_proportional(self):
        assert CoordinateMapper.day_to_x(7, 14, 700) == pytest.approx(350)

    @pytest.mark.parametrize("y_min, y_max", [(0, 10), (-1, 10), (10, 10), (100, 1)])
    def test_mapper_when_invalid_range_then_raises(self, y_min, y_max):
        with pytest.raises(ValueError):
            CoordinateMapper(y_min=y_min, y_max=y_max)


class TestPlotArea:
    """Tests for PlotArea."""

    def test_from_config_when_default_then_uses_margins(self):
        plot = PlotArea.from_config(ChartConfig())

        assert (plot.left, plot.top, plot.width, plot.height) == (80, 60, 1040, 680)
        assert (plot.right, plot.bottom) == (1120, 740)

    def test_contains_when_on_edge_then_true(self):
        plot = PlotArea(10, 10, 100, 50)

        assert plot.contains(10, 10)
        assert plot.contains(110, 60)
        assert not plot.contains(9.9, 30)
        assert not plot.contains(50, 60.1)


class TestMapPoint:
    """Tests for map_point."""

    def test_plottable_value_when_non_positive_then_sentinel(self):
        assert plottable_value(0) == ZERO_VALUE_SENTINEL
        assert plottable_value(-3) == ZERO_VALUE_SENTINEL
        assert plottable_value(2.5) == 2.5

    def test_map_point_when_zero_value_then_bottom_of_plot(self):
        plot = PlotArea(80, 60, 1040, 680)

        x, y = map_point(0, 0.0, plot=plot, mapper=CoordinateMapper(), x_max=7)

        assert x == pytest.approx(80)
        assert y == pytest.approx(740)

    def test_map_point_when_last_day_then_right_edge(self):
        plot = PlotArea(80, 60, 1040, 680)

        x, y = map_point(7, 1.0, plot=plot, mapper=CoordinateMapper(), x_max=7)

        assert x == pytest.approx(1120)
        assert y == pytest.approx(400)
