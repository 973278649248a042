"""
Module: chart.series

Purpose:
    Convert a student's raw assessments into a day-ordered, day-normalized
    point sequence for one metric.

Key Functions:
    - extract_series(): Build the MetricSeriesPoint sequence
    - visible_points(): Clip a series to a zoom window

Key Classes:
    - MetricSeriesPoint: One plotted point (derived, never persisted)

Dependencies:
    - chart.metrics: Value accessors
    - core.models: Student, Assessment

Used By:
    - chart.layout.composer: Draw-op composition
    - chart.hit_test: Pointer lookup

Note:
    Day 0 is anchored per series: ``normalized_day = day - min(day)`` over
    every extracted point of this student and metric, before any zoom
    clipping. Two metrics of the same student can therefore have different
    day-0 anchors when some assessments lack one of the metrics.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from scc_toolkit.core.models import Student

from .metrics import get_metric_spec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetricSeriesPoint:
    """
    One point of a metric series (immutable).

    Attributes:
        day: Absolute calendar day
        value: Metric value (prosody already scaled)
        normalized_day: ``day`` minus the series' earliest day
        counting_time_min: Observation duration in minutes, if recorded
        date: Display date string
    """

    day: int
    value: float
    normalized_day: int
    counting_time_min: Optional[float] = None
    date: Optional[str] = None


def extract_series(student: Student, metric: str) -> tuple[MetricSeriesPoint, ...]:
    """
    Extract one metric series for a student.

    Rules:
    - correctPerMinute/errorsPerMinute skip assessments without a
      celeration block (not zero-filled)
    - wpm/accuracy/prosody read their nested field, 0 when absent
    - prosody is scaled by 20
    - unknown metrics yield value 0 for every point
    - assessments without any calendar day cannot be placed and are skipped

    Args:
        student: Student to read
        metric: Metric identifier

    Returns:
        Points sorted ascending by day (stable), first point at
        normalized_day 0; empty when nothing could be extracted

    Example:
        >>> [p.normalized_day for p in extract_series(student, "correctPerMinute")]
        [0, 7, 14]
    """
    spec = get_metric_spec(metric)

    raw: list[tuple[int, float, Optional[float], Optional[str]]] = []
    for assessment in student.assessments:
        if spec.requires_celeration and not assessment.has_celeration:
            continue
        if assessment.calendar_day is None:
            logger.warning(f"Skipping assessment without calendar day for {student.id} ({metric})")
            continue
        raw.append((
            assessment.calendar_day,
            spec.accessor(assessment),
            assessment.counting_time_min,
            assessment.date,
        ))

    if not raw:
        return ()

    # sorted() is stable: same-day assessments keep ingestion order
    raw.sort(key=lambda item: item[0])
    min_day = raw[0][0]

    points = tuple(
        MetricSeriesPoint(
            day=day,
            value=value,
            normalized_day=day - min_day,
            counting_time_min=counting_time,
            date=date,
        )
        for day, value, counting_time, date in raw
    )
    logger.debug(f"Extracted {len(points)} {metric} points for {student.id}")
    return points


def visible_points(points: Sequence[MetricSeriesPoint], x_max: float) -> list[MetricSeriesPoint]:
    """
    Clip a series to a zoom window.

    Only the upper bound truncates; nothing is excluded for its value.

    Args:
        points: Extracted series
        x_max: Zoom window span in days

    Returns:
        Points with ``normalized_day <= x_max``, order preserved
    """
    return [p for p in points if p.normalized_day <= x_max]
