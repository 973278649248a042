"""
Module: chart.panels

Purpose:
    Plain-data content for the panels around the chart: the stats panel,
    the metric legend, hover tooltips and the chart subtitle. Renderers
    (GUI, CLI) turn these into widgets or text.

Key Functions:
    - build_stats(): Stats for the first active student
    - build_legend(): One entry per active metric
    - build_tooltip(): Rows for a hit-test result
    - chart_subtitle(): "View: 1 Week (7 days)"

Dependencies:
    - chart.celeration: Celeration and formatting
    - chart.metrics: Labels and colors

Used By:
    - gui.main_window: Side panels and tooltips
    - cli: ``stats`` command
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, Literal, Optional, Sequence

from scc_toolkit.core.models import Student

from .celeration import NOT_AVAILABLE, calculate_celeration, format_celeration
from .config import ZoomWindow
from .hit_test import HitResult
from .metrics import CORRECT_PER_MINUTE, ERRORS_PER_MINUTE, get_metric_spec, order_metrics

Trend = Literal["positive", "negative", "neutral"]


@dataclass(frozen=True)
class StudentStats:
    """
    Stats panel content for one student.

    Celeration values are computed over raw calendar days (not normalized)
    from assessments with a positive value.

    Attributes:
        student_id: Student id
        name: Display name
        assessment_count: Number of ingested assessments
        average_accuracy: Exported average accuracy, or "N/A"
        average_wpm: Exported average WPM, or "N/A"
        correct_celeration: Weekly correct/min celeration, None if indeterminate
        error_celeration: Weekly errors/min celeration, None if indeterminate
    """

    student_id: str
    name: str
    assessment_count: int
    average_accuracy: str
    average_wpm: str
    correct_celeration: Optional[float]
    error_celeration: Optional[float]

    @property
    def correct_celeration_text(self) -> str:
        return format_celeration(self.correct_celeration)

    @property
    def error_celeration_text(self) -> str:
        return format_celeration(self.error_celeration)

    @property
    def correct_trend(self) -> Trend:
        """Accelerating corrects are good."""
        if self.correct_celeration is None or not math.isfinite(self.correct_celeration):
            return "neutral"
        return "positive" if self.correct_celeration >= 1 else "negative"

    @property
    def error_trend(self) -> Trend:
        """Decelerating errors are good."""
        if self.error_celeration is None or not math.isfinite(self.error_celeration):
            return "neutral"
        return "positive" if self.error_celeration <= 1 else "negative"

    def rows(self) -> list[tuple[str, str]]:
        """Label/value rows in display order."""
        accuracy = self.average_accuracy
        if accuracy != NOT_AVAILABLE:
            accuracy = f"{accuracy}%"
        return [
            ("Student", self.name),
            ("Assessments", str(self.assessment_count)),
            ("Avg Accuracy", accuracy),
            ("Avg WPM", self.average_wpm),
            ("Correct Celeration", self.correct_celeration_text),
            ("Error Celeration", self.error_celeration_text),
        ]


@dataclass(frozen=True)
class LegendEntry:
    """One legend row: metric label with its color and marker symbol."""

    metric: str
    label: str
    color: str
    symbol: Literal["dot", "x"]


@dataclass(frozen=True)
class TooltipContent:
    """Tooltip title and label/value rows."""

    title: str
    rows: tuple[tuple[str, str], ...]


def _display_average(value: Any) -> str:
    """Exported averages are shown as-is; empty or zero reads as N/A."""
    if value in (None, "", 0):
        return NOT_AVAILABLE
    return str(value)


def _celeration_for(student: Student, metric: str) -> Optional[float]:
    spec = get_metric_spec(metric)
    points = [
        (a.calendar_day, spec.accessor(a))
        for a in student.assessments
        if a.has_celeration and a.calendar_day is not None
    ]
    return calculate_celeration(points)


def build_stats(students: Sequence[Student], active_student_ids: Iterable[str]) -> Optional[StudentStats]:
    """
    Stats panel for the first roster student that is active.

    Args:
        students: Roster in registration order
        active_student_ids: Selected ids

    Returns:
        StudentStats, or None when nothing is selected
    """
    active = set(active_student_ids)
    student = next((s for s in students if s.id in active), None)
    if student is None:
        return None

    summary = student.summary
    return StudentStats(
        student_id=student.id,
        name=student.name,
        assessment_count=student.assessment_count,
        average_accuracy=_display_average(summary.average_accuracy if summary else None),
        average_wpm=_display_average(summary.average_wpm if summary else None),
        correct_celeration=_celeration_for(student, CORRECT_PER_MINUTE),
        error_celeration=_celeration_for(student, ERRORS_PER_MINUTE),
    )


def build_legend(active_metrics: Iterable[str]) -> tuple[LegendEntry, ...]:
    """Legend entries for the active metrics, in drawing order."""
    entries = []
    for metric in order_metrics(active_metrics):
        spec = get_metric_spec(metric)
        entries.append(LegendEntry(
            metric=metric,
            label=spec.label,
            color=spec.color,
            symbol="x" if spec.is_error_metric else "dot",
        ))
    return tuple(entries)


def build_tooltip(hit: HitResult) -> TooltipContent:
    """
    Tooltip rows for a hit-test result.

    Shows the raw calendar day, not the normalized one.
    """
    point = hit.point
    rows = [
        ("Date", point.date or NOT_AVAILABLE),
        ("Day", str(point.day)),
        (get_metric_spec(hit.metric).label, f"{point.value:.2f}"),
    ]
    if point.counting_time_min:
        rows.append(("Timing", f"{point.counting_time_min * 60:.0f}s"))
    return TooltipContent(title=hit.student.name, rows=tuple(rows))


def chart_subtitle(zoom: ZoomWindow) -> str:
    """Subtitle describing the zoom window."""
    return f"View: {zoom.label} ({zoom.days} days)"
