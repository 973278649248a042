"""
Module: chart.layout.composer

Purpose:
    Compose the ordered draw-op list for a Standard Celeration Chart from
    the active students, active metrics, zoom window and display options.

Key Functions:
    - compose_chart(): Main entry point, returns a ChartPlan
    - compose_series(): Ops for one (student, metric) series

Paint order:
    background → grid → axes/labels → for each active student (selection
    order), for each active metric (configured order):
    connecting line → trend line → markers → record-floor ticks

Dependencies:
    - chart.series: Series extraction and zoom clipping
    - chart.celeration: Trend fitting
    - chart.scale: Coordinate mapping

Used By:
    - chart.controller: Render pipeline
    - gui.widgets.chart_canvas: Interactive viewer
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, List, Sequence, Union

from scc_toolkit.core.models import Student

from ..celeration import fit_trend, trend_segment
from ..config import (
    ChartConfig,
    DAYS_PER_WEEK,
    DisplayOptions,
    LOG_GRID_LINES,
    MAJOR_LOG_LINES,
    ZoomWindow,
    resolve_zoom,
)
from ..metrics import get_metric_spec, order_metrics
from ..scale import CoordinateMapper, PlotArea, map_point
from ..series import MetricSeriesPoint, extract_series, visible_points
from .models import ChartPlan, Dot, DrawOp, ErrorMark, Line, Polyline, Rect, SeriesKey, Text, ZeroMark

logger = logging.getLogger(__name__)

Y_AXIS_TITLE = "COUNT PER MINUTE"
X_AXIS_TITLE = "SUCCESSIVE CALENDAR WEEKS"

# Grid opacity
MAJOR_GRID_ALPHA = 0.3
MINOR_GRID_ALPHA = 0.1
WEEK_LABEL_ALPHA = 0.5

# Series styling
CONNECT_ALPHA = 0.7
TREND_ALPHA = 0.8
TREND_DASH = (5.0, 5.0)
RECORD_FLOOR_ALPHA = 0.5


def compose_chart(
    students: Sequence[Student],
    active_student_ids: Iterable[str],
    active_metrics: Iterable[str],
    zoom: Union[ZoomWindow, int],
    display_options: DisplayOptions = DisplayOptions(),
    config: ChartConfig = ChartConfig(),
) -> ChartPlan:
    """
    Compose the full chart.

    Series are recomputed from the raw assessments on every call.

    Args:
        students: Roster (any order)
        active_student_ids: Students to draw, in selection order
        active_metrics: Metrics to draw (drawn in configured order)
        zoom: Zoom window, or a day-span to resolve
        display_options: Drawing toggles
        config: Canvas and scale configuration

    Returns:
        ChartPlan with ops in paint order. Always valid: ids missing from
        the roster are skipped with a warning, series without a fittable
        trend simply get no trend line.

    Example:
        >>> plan = compose_chart(roster, ["s1"], ["correctPerMinute"], 30)
        >>> plan.ops_with_role("trend")
        (Line(...),)
    """
    window = zoom if isinstance(zoom, ZoomWindow) else resolve_zoom(zoom)
    plot = PlotArea.from_config(config)
    mapper = CoordinateMapper.from_config(config)

    ops: List[DrawOp] = [Rect(0, 0, config.width, config.height, fill=config.background_color)]
    ops.extend(_compose_grid(plot, mapper, window, config))
    ops.extend(_compose_axes(plot, mapper, window, config))

    roster = {student.id: student for student in students}
    metrics = order_metrics(active_metrics)
    warnings: List[str] = []
    series_count = 0
    trend_count = 0

    for student_id in dict.fromkeys(active_student_ids):
        student = roster.get(student_id)
        if student is None:
            message = f"Active student {student_id!r} is not in the roster"
            logger.warning(message)
            warnings.append(message)
            continue

        for metric in metrics:
            series_ops = compose_series(student, metric, window, display_options, config)
            if series_ops:
                series_count += 1
                trend_count += sum(1 for op in series_ops if op.role == "trend")
            ops.extend(series_ops)

    logger.info(
        f"Composed {len(ops)} draw ops: {series_count} series, {trend_count} trends "
        f"({window.label}, {window.days} days)"
    )
    return ChartPlan(
        ops=tuple(ops),
        width=config.width,
        height=config.height,
        plot=plot,
        zoom=window,
        series_count=series_count,
        trend_count=trend_count,
        warnings=tuple(warnings),
    )


def compose_series(
    student: Student,
    metric: str,
    zoom: ZoomWindow,
    display_options: DisplayOptions,
    config: ChartConfig,
) -> List[DrawOp]:
    """
    Compose ops for one (student, metric) series.

    Each step is gated by its own option:
    - connect_points: polylines through visible positive points; a
      non-positive point ends the current run
    - show_celeration_lines: trend when ≥2 visible positive points fit
    - show_data_points: X for the errors metric, "?" for an exact 0,
      filled circle otherwise
    - show_record_floor: tick at 1/counting time for timed points

    Args:
        student: Student to draw
        metric: Metric identifier
        zoom: Zoom window
        display_options: Drawing toggles
        config: Canvas and scale configuration

    Returns:
        Ops in paint order; empty when no point is visible
    """
    points = extract_series(student, metric)
    visible = visible_points(points, zoom.x_max)
    if not visible:
        return []

    spec = get_metric_spec(metric)
    key = SeriesKey(student.id, metric)
    plot = PlotArea.from_config(config)
    mapper = CoordinateMapper.from_config(config)
    x_max = zoom.x_max

    def position(point: MetricSeriesPoint, value: float) -> tuple[float, float]:
        return map_point(point.normalized_day, value, plot=plot, mapper=mapper, x_max=x_max)

    ops: List[DrawOp] = []

    if display_options.connect_points and len(visible) > 1:
        for run in _positive_runs(visible):
            if len(run) < 2:
                continue
            ops.append(Polyline(
                points=tuple(position(p, p.value) for p in run),
                color=spec.color,
                width=2.0,
                alpha=CONNECT_ALPHA,
                series=key,
            ))

    if display_options.show_celeration_lines:
        trend = _compose_trend(visible, spec.color, key, plot, mapper, x_max)
        if trend is not None:
            ops.append(trend)

    if display_options.show_data_points:
        for point in visible:
            x, y = position(point, point.value)
            if spec.is_error_metric:
                ops.append(ErrorMark(x, y, size=config.error_mark_size, color=spec.color, series=key))
            elif point.value == 0:
                ops.append(ZeroMark(x, y, color=spec.color, series=key))
            else:
                ops.append(Dot(
                    x, y,
                    radius=config.dot_radius,
                    color=spec.color,
                    outline=config.background_color,
                    series=key,
                ))

    if display_options.show_record_floor:
        for point in visible:
            counting_time = point.counting_time_min
            if not counting_time or counting_time <= 0:
                continue
            x, y = position(point, 1.0 / counting_time)
            ops.append(Line(
                x - config.record_floor_half_width, y,
                x + config.record_floor_half_width, y,
                color=spec.color,
                width=2.0,
                alpha=RECORD_FLOOR_ALPHA,
                layer="series",
                role="record_floor",
                series=key,
            ))

    return ops


def _positive_runs(points: Sequence[MetricSeriesPoint]) -> List[List[MetricSeriesPoint]]:
    """Split points into consecutive runs of positive values."""
    runs: List[List[MetricSeriesPoint]] = []
    current: List[MetricSeriesPoint] = []
    for point in points:
        if point.value > 0:
            current.append(point)
        elif current:
            runs.append(current)
            current = []
    if current:
        runs.append(current)
    return runs


def _compose_trend(
    visible: Sequence[MetricSeriesPoint],
    color: str,
    key: SeriesKey,
    plot: PlotArea,
    mapper: CoordinateMapper,
    x_max: float,
) -> Line | None:
    """Trend line over the visible positive points, or None."""
    positive = [p for p in visible if p.value > 0]
    if len(positive) < 2:
        return None

    fit = fit_trend((p.normalized_day, p.value) for p in positive)
    if fit is None:
        logger.debug(f"No trend for {key.student_id}/{key.metric}: all points on one day")
        return None

    segment = trend_segment(
        fit,
        min_x=min(p.normalized_day for p in positive),
        max_x=max(p.normalized_day for p in positive),
        x_max=x_max,
    )
    x1, y1 = map_point(segment.start_x, segment.start_value, plot=plot, mapper=mapper, x_max=x_max)
    x2, y2 = map_point(segment.end_x, segment.end_value, plot=plot, mapper=mapper, x_max=x_max)
    return Line(
        x1, y1, x2, y2,
        color=color,
        width=1.5,
        alpha=TREND_ALPHA,
        dash=TREND_DASH,
        layer="series",
        role="trend",
        series=key,
    )


def _compose_grid(
    plot: PlotArea,
    mapper: CoordinateMapper,
    zoom: ZoomWindow,
    config: ChartConfig,
) -> List[DrawOp]:
    """Vertical day lines, week numbers along the top, horizontal log grid."""
    ops: List[DrawOp] = []
    x_max = zoom.x_max

    for day in range(0, x_max + 1, zoom.day_interval):
        x = plot.left + mapper.day_to_x(day, x_max, plot.width)
        ops.append(Line(
            x, plot.top, x, plot.bottom,
            color=config.grid_color,
            width=1.0,
            alpha=MINOR_GRID_ALPHA,
            role="day_line",
        ))

    max_weeks = math.ceil(x_max / DAYS_PER_WEEK)
    for week in range(0, max_weeks + 1, zoom.week_interval):
        x = mapper.day_to_x(week * DAYS_PER_WEEK, x_max, plot.width)
        if x > plot.width:
            continue
        ops.append(Text(
            plot.left + x, plot.top - 8, str(week),
            color=config.grid_color,
            size=10,
            baseline="bottom",
            alpha=WEEK_LABEL_ALPHA,
            layer="grid",
            role="week_label",
        ))

    for value in LOG_GRID_LINES:
        y = plot.top + mapper.value_to_y(value, plot.height)
        is_major = value in MAJOR_LOG_LINES
        ops.append(Line(
            plot.left, y, plot.right, y,
            color=config.grid_color,
            width=1.0 if is_major else 0.5,
            alpha=MAJOR_GRID_ALPHA if is_major else MINOR_GRID_ALPHA,
            role="value_line",
        ))

    return ops


def _compose_axes(
    plot: PlotArea,
    mapper: CoordinateMapper,
    zoom: ZoomWindow,
    config: ChartConfig,
) -> List[DrawOp]:
    """Value labels, day labels and axis titles."""
    ops: List[DrawOp] = []

    for value in MAJOR_LOG_LINES:
        y = plot.top + mapper.value_to_y(value, plot.height)
        ops.append(Text(
            plot.left - 10, y, format_axis_value(value),
            color=config.axis_color,
            size=11,
            align="right",
            baseline="middle",
            role="y_label",
        ))

    for day in range(0, zoom.x_max + 1, zoom.day_interval):
        x = plot.left + mapper.day_to_x(day, zoom.x_max, plot.width)
        ops.append(Text(
            x, plot.bottom + 10, str(day),
            color=config.axis_color,
            size=11,
            baseline="top",
            role="x_label",
        ))

    ops.append(Text(
        20, config.height / 2, Y_AXIS_TITLE,
        color=config.axis_color,
        size=12,
        bold=True,
        rotation=90.0,
        role="axis_title",
    ))
    ops.append(Text(
        config.width / 2, 20, X_AXIS_TITLE,
        color=config.axis_color,
        size=10,
        bold=True,
        role="axis_title",
    ))
    return ops


def format_axis_value(value: float) -> str:
    """Axis label for a grid value: 0.001 → "0.001", 1000 → "1000"."""
    return f"{value:g}"
