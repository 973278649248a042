"""
Module: chart.output.pdf

Purpose:
    Render a ChartPlan to a single-page vector PDF using ReportLab.
    Plan coordinates are top-down pixels; PDF coordinates are bottom-up
    points, so every Y is transformed on the way out.

Key Functions:
    - render_to_pdf(): Main rendering function

Dependencies:
    - reportlab: PDF generation
    - chart.layout.models: Draw ops

Used By:
    - chart.controller: Render pipeline
"""

from __future__ import annotations

import logging
from pathlib import Path

from reportlab.lib.colors import HexColor
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from ..layout.models import ChartPlan, Dot, DrawOp, ErrorMark, Line, Polyline, Rect, Text, ZeroMark

logger = logging.getLogger(__name__)

# Chart pixels map to CSS pixels by default (1px = 0.75pt)
DEFAULT_DPI = 96

FONT_REGULAR = "Helvetica"
FONT_BOLD = "Helvetica-Bold"

# Footer configuration
FOOTER_FONT_SIZE = 7
FOOTER_COLOR = "#64748b"

# Fraction of the font size between the baseline and the visual middle
_MIDDLE_OFFSET = 0.35
_TOP_OFFSET = 0.75


def _get_footer_text() -> str:
    """Get footer text with current version number."""
    try:
        from scc_toolkit import __version__
        version = __version__
    except ImportError:
        version = "unknown"
    return f"Generated with SCC Toolkit v{version}"


def render_to_pdf(
    plan: ChartPlan,
    output_path: Path,
    *,
    dpi: int = DEFAULT_DPI,
    title: str = "",
    show_footer: bool = True,
) -> Path:
    """
    Render a chart plan to a PDF file.

    The page is sized to the plan's canvas.

    Args:
        plan: Composed chart
        output_path: Path to write PDF (parent directories are created)
        dpi: DPI for pixel to point conversion (default 96)
        title: Document title metadata
        show_footer: Draw the version footer in the bottom margin

    Returns:
        The written path

    Raises:
        OSError: If the PDF cannot be written

    Example:
        >>> render_to_pdf(plan, Path("output/chart.pdf"))
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    page_width_pt = _px_to_pt(plan.width, dpi)
    page_height_pt = _px_to_pt(plan.height, dpi)

    c = canvas.Canvas(str(output_path), pagesize=(page_width_pt, page_height_pt))
    if title:
        c.setTitle(title)
    c.setLineCap(1)
    c.setLineJoin(1)

    for op in plan.ops:
        c.saveState()
        _draw_op(c, op, dpi, page_height_pt)
        c.restoreState()

    if show_footer:
        _draw_footer(c, page_width_pt)

    c.showPage()
    c.save()

    logger.info(f"Rendered {plan.op_count} ops to {output_path}")
    return output_path


def _draw_op(c: canvas.Canvas, op: DrawOp, dpi: int, page_height_pt: float) -> None:
    """Draw one op; the caller saves and restores graphics state."""

    def pt(value: float) -> float:
        return _px_to_pt(value, dpi)

    def y(value: float) -> float:
        return _transform_y(value, dpi, page_height_pt)

    if isinstance(op, Rect):
        c.setFillColor(HexColor(op.fill))
        c.rect(pt(op.x), y(op.y + op.height), pt(op.width), pt(op.height), stroke=0, fill=1)

    elif isinstance(op, Line):
        c.setStrokeColor(HexColor(op.color))
        c.setStrokeAlpha(op.alpha)
        c.setLineWidth(pt(op.width))
        if op.dash:
            c.setDash([pt(d) for d in op.dash], 0)
        c.line(pt(op.x1), y(op.y1), pt(op.x2), y(op.y2))

    elif isinstance(op, Polyline):
        c.setStrokeColor(HexColor(op.color))
        c.setStrokeAlpha(op.alpha)
        c.setLineWidth(pt(op.width))
        path = c.beginPath()
        (x0, y0), rest = op.points[0], op.points[1:]
        path.moveTo(pt(x0), y(y0))
        for px, py in rest:
            path.lineTo(pt(px), y(py))
        c.drawPath(path, stroke=1, fill=0)

    elif isinstance(op, Dot):
        c.setFillColor(HexColor(op.color))
        c.setStrokeColor(HexColor(op.outline))
        c.setLineWidth(pt(1.0))
        c.circle(pt(op.x), y(op.y), pt(op.radius), stroke=1, fill=1)

    elif isinstance(op, ErrorMark):
        c.setStrokeColor(HexColor(op.color))
        c.setLineWidth(pt(op.width))
        s = op.size
        c.line(pt(op.x - s), y(op.y - s), pt(op.x + s), y(op.y + s))
        c.line(pt(op.x + s), y(op.y - s), pt(op.x - s), y(op.y + s))

    elif isinstance(op, ZeroMark):
        size = pt(op.size)
        c.setFillColor(HexColor(op.color))
        c.setFont(FONT_BOLD, size)
        c.drawCentredString(pt(op.x), y(op.y) - size * _MIDDLE_OFFSET, op.glyph)

    elif isinstance(op, Text):
        _draw_text(c, op, pt(op.x), y(op.y), pt(op.size))

    else:
        logger.debug(f"Skipping unsupported op {type(op).__name__}")


def _draw_text(c: canvas.Canvas, op: Text, x_pt: float, y_pt: float, size_pt: float) -> None:
    """Draw a text op anchored at (x_pt, y_pt) in page coordinates."""
    font = FONT_BOLD if op.bold else FONT_REGULAR
    c.setFont(font, size_pt)
    c.setFillColor(HexColor(op.color))
    c.setFillAlpha(op.alpha)

    if op.rotation:
        c.translate(x_pt, y_pt)
        c.rotate(op.rotation)
        x_pt, y_pt = 0.0, 0.0

    width = stringWidth(op.text, font, size_pt)
    if op.align == "center":
        x_pt -= width / 2
    elif op.align == "right":
        x_pt -= width

    if op.baseline == "middle":
        y_pt -= size_pt * _MIDDLE_OFFSET
    elif op.baseline == "top":
        y_pt -= size_pt * _TOP_OFFSET

    c.drawString(x_pt, y_pt, op.text)


def _draw_footer(c: canvas.Canvas, page_width_pt: float) -> None:
    """Draw the version footer centered in the bottom margin."""
    c.setFont(FONT_REGULAR, FOOTER_FONT_SIZE)
    c.setFillColor(HexColor(FOOTER_COLOR))
    c.drawCentredString(page_width_pt / 2, FOOTER_FONT_SIZE, _get_footer_text())


def _px_to_pt(px: float, dpi: int = DEFAULT_DPI) -> float:
    """
    Convert pixels to PDF points.

    PDF points are 1/72 inch.

    Args:
        px: Pixel value
        dpi: Dots per inch

    Returns:
        Value in PDF points
    """
    return px * 72.0 / dpi


def _transform_y(y_px: float, dpi: int, page_height_pt: float) -> float:
    """
    Convert a top-down pixel Y to a bottom-up PDF Y.

    Args:
        y_px: Y from the top of the canvas, in pixels
        dpi: Dots per inch
        page_height_pt: Page height in points

    Returns:
        Y from the bottom of the page, in points
    """
    return page_height_pt - _px_to_pt(y_px, dpi)
