"""
Tests for chart.output.raster

Test Coverage:
- render_to_image(): canvas size and background
- render_to_png(): writes a readable PNG
- Dashed line splitting
"""
import pytest
from PIL import Image

from scc_toolkit.chart.config import ChartConfig, DisplayOptions
from scc_toolkit.chart.layout import compose_chart
from scc_toolkit.chart.output import render_to_image, render_to_png
from scc_toolkit.chart.output.raster import _dash_segments


@pytest.fixture
def plan(doubling_student):
    options = DisplayOptions(show_record_floor=True)
    return compose_chart(
        [doubling_student], ["ana"], ["correctPerMinute", "errorsPerMinute"], 30, options,
    )


class TestRenderToImage:
    """Tests for render_to_image."""

    def test_image_when_rendered_then_canvas_size(self, plan):
        image = render_to_image(plan)

        assert image.size == (plan.width, plan.height)
        assert image.mode == "RGB"

    def test_image_when_corner_pixel_then_background_color(self, plan):
        image = render_to_image(plan)

        assert image.getpixel((1, 1)) == (0x0A, 0x16, 0x28)

    def test_image_when_custom_size_then_matches(self, doubling_student):
        small = compose_chart(
            [doubling_student], ["ana"], ["correctPerMinute"], 7,
            config=ChartConfig(width=640, height=480),
        )

        assert render_to_image(small).size == (640, 480)

    def test_image_when_marker_drawn_then_series_color_at_center(self, plan):
        image = render_to_image(plan)
        dot = plan.markers[1]

        assert image.getpixel((round(dot.x), round(dot.y))) == (0x22, 0xC5, 0x5E)


class TestRenderToPng:
    """Tests for render_to_png."""

    def test_png_when_written_then_reopens_with_same_size(self, plan, tmp_path):
        output = tmp_path / "charts" / "ana.png"

        written = render_to_png(plan, output)

        assert written == output
        with Image.open(output) as image:
            assert image.format == "PNG"
            assert image.size == (plan.width, plan.height)


class TestDashSegments:
    """Tests for _dash_segments."""

    def test_dash_when_horizontal_then_alternating_segments(self):
        segments = _dash_segments((0, 0), (20, 0), (5.0, 5.0))

        assert segments == [
            ((0.0, 0.0), (5.0, 0.0)),
            ((10.0, 0.0), (15.0, 0.0)),
        ]

    def test_dash_when_zero_length_then_whole_line(self):
        assert _dash_segments((3, 3), (3, 3), (5.0, 5.0)) == [((3, 3), (3, 3))]
