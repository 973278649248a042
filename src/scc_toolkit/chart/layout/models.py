"""
Module: chart.layout.models

Purpose:
    Draw operations produced by the composer. Each op is an immutable
    geometric or textual primitive in canvas coordinates; a renderer only
    has to rasterize them in order.

Key Classes:
    - Rect, Line, Polyline, Text: Generic primitives
    - Dot, ErrorMark, ZeroMark: Data-point markers (tagged by metric/value)
    - SeriesKey: (student, metric) a series op belongs to
    - ChartPlan: Ordered op list plus diagnostics

Dependencies:
    - dataclasses (std)
    - chart.scale: PlotArea
    - chart.config: ZoomWindow

Used By:
    - chart.layout.composer: Creates ops
    - chart.output: Rasterizes ops
    - gui.widgets.chart_canvas: Paints ops
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional, Tuple, Union

from ..config import ZoomWindow
from ..scale import PlotArea

Layer = Literal["background", "grid", "axes", "series"]
HAlign = Literal["left", "center", "right"]
VAlign = Literal["top", "middle", "bottom"]


@dataclass(frozen=True)
class SeriesKey:
    """Identifies the (student, metric) series an op was drawn for."""

    student_id: str
    metric: str


@dataclass(frozen=True)
class Rect:
    """Filled rectangle."""

    x: float
    y: float
    width: float
    height: float
    fill: str
    layer: Layer = "background"
    role: str = "background"


@dataclass(frozen=True)
class Line:
    """
    Straight line segment.

    Attributes:
        dash: Dash pattern (on, off, ...) in pixels; empty for solid
        alpha: Opacity 0-1
    """

    x1: float
    y1: float
    x2: float
    y2: float
    color: str
    width: float = 1.0
    alpha: float = 1.0
    dash: Tuple[float, ...] = ()
    layer: Layer = "grid"
    role: str = "grid_line"
    series: Optional[SeriesKey] = None


@dataclass(frozen=True)
class Polyline:
    """Connected run of points."""

    points: Tuple[Tuple[float, float], ...]
    color: str
    width: float = 2.0
    alpha: float = 1.0
    layer: Layer = "series"
    role: str = "connect"
    series: Optional[SeriesKey] = None


@dataclass(frozen=True)
class Text:
    """
    Text label anchored at (x, y).

    Attributes:
        align: Horizontal anchor
        baseline: Vertical anchor
        rotation: Counter-clockwise rotation in degrees about the anchor
    """

    x: float
    y: float
    text: str
    color: str
    size: float = 11.0
    bold: bool = False
    align: HAlign = "center"
    baseline: VAlign = "middle"
    rotation: float = 0.0
    alpha: float = 1.0
    layer: Layer = "axes"
    role: str = "label"


@dataclass(frozen=True)
class Dot:
    """Filled circle marker (positive values of non-error metrics)."""

    x: float
    y: float
    radius: float
    color: str
    outline: str = "#0a1628"
    layer: Layer = "series"
    role: str = "marker"
    series: Optional[SeriesKey] = None


@dataclass(frozen=True)
class ErrorMark:
    """X glyph marker (errors metric, any value)."""

    x: float
    y: float
    size: float
    color: str
    width: float = 2.5
    layer: Layer = "series"
    role: str = "marker"
    series: Optional[SeriesKey] = None


@dataclass(frozen=True)
class ZeroMark:
    """Question-mark glyph marker (non-error metric whose value is exactly 0)."""

    x: float
    y: float
    color: str
    size: float = 14.0
    glyph: str = "?"
    layer: Layer = "series"
    role: str = "marker"
    series: Optional[SeriesKey] = None


Marker = Union[Dot, ErrorMark, ZeroMark]
DrawOp = Union[Rect, Line, Polyline, Text, Dot, ErrorMark, ZeroMark]


@dataclass(frozen=True)
class ChartPlan:
    """
    Composed chart (immutable).

    Attributes:
        ops: Draw operations in paint order
        width: Canvas width
        height: Canvas height
        plot: Plot rectangle within the canvas
        zoom: Zoom window the plan was composed for
        series_count: Non-empty (student, metric) series drawn
        trend_count: Trend lines drawn
        warnings: Non-fatal issues found while composing

    Example:
        >>> plan = compose_chart(...)
        >>> plan.op_count > 0
        True
    """

    ops: tuple[DrawOp, ...]
    width: int
    height: int
    plot: PlotArea
    zoom: ZoomWindow
    series_count: int = 0
    trend_count: int = 0
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def op_count(self) -> int:
        """Number of draw operations."""
        return len(self.ops)

    def ops_with_role(self, role: str) -> tuple[DrawOp, ...]:
        """Ops carrying the given role, in paint order."""
        return tuple(op for op in self.ops if op.role == role)

    def ops_for_series(self, student_id: str, metric: str) -> tuple[DrawOp, ...]:
        """Ops drawn for one (student, metric) series, in paint order."""
        key = SeriesKey(student_id, metric)
        return tuple(op for op in self.ops if getattr(op, "series", None) == key)

    @property
    def markers(self) -> tuple[Marker, ...]:
        """All data-point markers, in paint order."""
        return tuple(op for op in self.ops if isinstance(op, (Dot, ErrorMark, ZeroMark)))
