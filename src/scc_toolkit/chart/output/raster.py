"""
Module: chart.output.raster

Purpose:
    Rasterize a ChartPlan with Pillow. Ops are painted in plan order;
    translucent ops are drawn on an overlay and alpha-composited so they
    blend with what is already on the canvas.

Key Functions:
    - render_to_image(): ChartPlan -> PIL Image
    - render_to_png(): ChartPlan -> PNG file

Dependencies:
    - PIL: Image drawing
    - chart.layout.models: Draw ops

Used By:
    - chart.controller: Render pipeline
"""

from __future__ import annotations

import logging
import math
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Tuple

from PIL import Image, ImageColor, ImageDraw, ImageFont

from ..layout.models import ChartPlan, Dot, DrawOp, ErrorMark, Line, Polyline, Rect, Text, ZeroMark

logger = logging.getLogger(__name__)

RGBA = Tuple[int, int, int, int]

FONT_REGULAR = "DejaVuSans.ttf"
FONT_BOLD = "DejaVuSans-Bold.ttf"

_H_ANCHOR = {"left": "l", "center": "m", "right": "r"}
_V_ANCHOR = {"top": "t", "middle": "m", "bottom": "b"}


def render_to_image(plan: ChartPlan) -> Image.Image:
    """
    Rasterize a chart plan.

    Args:
        plan: Composed chart

    Returns:
        RGB image of size (plan.width, plan.height)

    Example:
        >>> image = render_to_image(plan)
        >>> image.size
        (1200, 800)
    """
    canvas = Image.new("RGBA", (plan.width, plan.height), (0, 0, 0, 255))
    for op in plan.ops:
        alpha = getattr(op, "alpha", 1.0)
        if alpha >= 1.0:
            _draw_op(canvas, ImageDraw.Draw(canvas), op)
            continue
        overlay = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
        _draw_op(overlay, ImageDraw.Draw(overlay), op)
        canvas = Image.alpha_composite(canvas, overlay)
    return canvas.convert("RGB")


def render_to_png(plan: ChartPlan, output_path: Path) -> Path:
    """
    Rasterize a chart plan and save it as PNG.

    Args:
        plan: Composed chart
        output_path: Destination file (parent directories are created)

    Returns:
        The written path

    Raises:
        OSError: If the file cannot be written
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    render_to_image(plan).save(output_path, format="PNG")
    logger.info(f"Rendered {plan.op_count} ops to {output_path}")
    return output_path


def _rgba(color: str, alpha: float = 1.0) -> RGBA:
    r, g, b = ImageColor.getrgb(color)[:3]
    return (r, g, b, int(round(255 * max(0.0, min(1.0, alpha)))))


@lru_cache(maxsize=32)
def _font(size: int, bold: bool) -> ImageFont.ImageFont:
    try:
        return ImageFont.truetype(FONT_BOLD if bold else FONT_REGULAR, size)
    except (IOError, OSError):
        return ImageFont.load_default(size=size)


def _width(value: float) -> int:
    return max(1, int(round(value)))


def _draw_op(image: Image.Image, draw: ImageDraw.ImageDraw, op: DrawOp) -> None:
    """Paint one op at full opacity; the caller handles blending."""
    if isinstance(op, Rect):
        draw.rectangle((op.x, op.y, op.x + op.width, op.y + op.height), fill=_rgba(op.fill))
    elif isinstance(op, Line):
        color = _rgba(op.color)
        if op.dash:
            for segment in _dash_segments((op.x1, op.y1), (op.x2, op.y2), op.dash):
                draw.line(segment, fill=color, width=_width(op.width))
        else:
            draw.line(((op.x1, op.y1), (op.x2, op.y2)), fill=color, width=_width(op.width))
    elif isinstance(op, Polyline):
        draw.line(list(op.points), fill=_rgba(op.color), width=_width(op.width), joint="curve")
    elif isinstance(op, Dot):
        r = op.radius
        draw.ellipse((op.x - r, op.y - r, op.x + r, op.y + r), fill=_rgba(op.color), outline=_rgba(op.outline), width=1)
    elif isinstance(op, ErrorMark):
        color = _rgba(op.color)
        s = op.size
        draw.line(((op.x - s, op.y - s), (op.x + s, op.y + s)), fill=color, width=_width(op.width))
        draw.line(((op.x + s, op.y - s), (op.x - s, op.y + s)), fill=color, width=_width(op.width))
    elif isinstance(op, ZeroMark):
        draw.text((op.x, op.y), op.glyph, fill=_rgba(op.color), font=_font(int(op.size), True), anchor="mm")
    elif isinstance(op, Text):
        _draw_text(image, draw, op)
    else:
        logger.debug(f"Skipping unsupported op {type(op).__name__}")


def _draw_text(image: Image.Image, draw: ImageDraw.ImageDraw, op: Text) -> None:
    font = _font(int(op.size), op.bold)
    color = _rgba(op.color)
    if not op.rotation:
        anchor = _H_ANCHOR[op.align] + _V_ANCHOR[op.baseline]
        draw.text((op.x, op.y), op.text, fill=color, font=font, anchor=anchor)
        return

    # Rotated text is drawn on its own tile and pasted centered on the anchor
    left, top, right, bottom = draw.textbbox((0, 0), op.text, font=font)
    tile = Image.new("RGBA", (right - left + 2, bottom - top + 2), (0, 0, 0, 0))
    ImageDraw.Draw(tile).text((1 - left, 1 - top), op.text, fill=color, font=font)
    tile = tile.rotate(op.rotation, expand=True)
    position = (int(round(op.x - tile.width / 2)), int(round(op.y - tile.height / 2)))
    image.alpha_composite(tile, dest=(max(0, position[0]), max(0, position[1])))


def _dash_segments(
    start: Tuple[float, float],
    end: Tuple[float, float],
    pattern: Iterable[float],
) -> list[Tuple[Tuple[float, float], Tuple[float, float]]]:
    """Split a line into the 'on' segments of a dash pattern."""
    pattern = [p for p in pattern if p > 0]
    (x1, y1), (x2, y2) = start, end
    length = math.hypot(x2 - x1, y2 - y1)
    if not pattern or length == 0:
        return [(start, end)]

    ux, uy = (x2 - x1) / length, (y2 - y1) / length
    segments = []
    distance = 0.0
    index = 0
    while distance < length:
        step = pattern[index % len(pattern)]
        stop = min(length, distance + step)
        if index % 2 == 0:
            segments.append(((x1 + ux * distance, y1 + uy * distance), (x1 + ux * stop, y1 + uy * stop)))
        distance = stop
        index += 1
    return segments
