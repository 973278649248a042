"""
Module: chart.layout

Purpose:
    Chart composition. Converts the active selection into positioned draw
    operations.

Key Functions:
    - compose_chart(): Main entry point for composition
    - compose_series(): Ops for one (student, metric) series

Key Classes:
    - ChartPlan: Ordered draw-op list with diagnostics
    - Rect, Line, Polyline, Text: Primitives
    - Dot, ErrorMark, ZeroMark: Data-point markers

Used By:
    - chart.controller: Render pipeline
    - gui.widgets.chart_canvas: Interactive viewer
"""

from .models import (
    ChartPlan,
    Dot,
    DrawOp,
    ErrorMark,
    Line,
    Marker,
    Polyline,
    Rect,
    SeriesKey,
    Text,
    ZeroMark,
)
from .composer import compose_chart, compose_series

__all__ = [
    # Models
    "ChartPlan",
    "DrawOp",
    "Marker",
    "SeriesKey",
    "Rect",
    "Line",
    "Polyline",
    "Text",
    "Dot",
    "ErrorMark",
    "ZeroMark",
    # Functions
    "compose_chart",
    "compose_series",
]
