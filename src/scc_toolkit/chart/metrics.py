"""
Module: chart.metrics

Purpose:
    Metric lookup table. Each charted metric maps to a color, a label, a
    marker family, and an accessor that reads its value from an Assessment.

Key Classes:
    - MetricSpec: One row of the table

Key Functions:
    - get_metric_spec(): Table lookup with the explicit unknown-metric fallback

Dependencies:
    - core.models.Assessment

Used By:
    - chart.series: Value extraction
    - chart.layout.composer: Colors and marker dispatch
    - chart.panels: Legend and tooltip labels
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Final, Optional

from scc_toolkit.core.models import Assessment

CORRECT_PER_MINUTE: Final = "correctPerMinute"
ERRORS_PER_MINUTE: Final = "errorsPerMinute"
WPM: Final = "wpm"
ACCURACY: Final = "accuracy"
PROSODY: Final = "prosody"

# Configured drawing order; active metrics are always drawn in this order
METRIC_ORDER: Final = (CORRECT_PER_MINUTE, ERRORS_PER_MINUTE, WPM, ACCURACY, PROSODY)
DEFAULT_ACTIVE_METRICS: Final = (CORRECT_PER_MINUTE, ERRORS_PER_MINUTE)

# Brings a 0-5 prosody score onto the per-minute plotting range
PROSODY_SCALE: Final = 20.0

UNKNOWN_METRIC_COLOR: Final = "#94a3b8"


@dataclass(frozen=True)
class MetricSpec:
    """
    Display and extraction rules for one metric.

    Attributes:
        key: Metric identifier
        label: Human-friendly label
        color: Series color
        requires_celeration: Skip assessments without a celeration block
        is_error_metric: Plot markers as X glyphs
        accessor: Reads the value from an Assessment (0 when absent)
    """

    key: str
    label: str
    color: str
    requires_celeration: bool
    is_error_metric: bool
    accessor: Callable[[Assessment], float]


def _correct(a: Assessment) -> float:
    return (a.celeration.correct_per_minute if a.celeration else None) or 0.0


def _errors(a: Assessment) -> float:
    return (a.celeration.errors_per_minute if a.celeration else None) or 0.0


def _wpm(a: Assessment) -> float:
    return (a.performance.wpm if a.performance else None) or 0.0


def _accuracy(a: Assessment) -> float:
    return (a.performance.accuracy if a.performance else None) or 0.0


def _prosody(a: Assessment) -> float:
    return ((a.prosody.score if a.prosody else None) or 0.0) * PROSODY_SCALE


def _zero(a: Assessment) -> float:
    return 0.0


METRICS: Final[Dict[str, MetricSpec]] = {
    CORRECT_PER_MINUTE: MetricSpec(CORRECT_PER_MINUTE, "Correct/min", "#22c55e", True, False, _correct),
    ERRORS_PER_MINUTE: MetricSpec(ERRORS_PER_MINUTE, "Errors/min", "#ef4444", True, True, _errors),
    WPM: MetricSpec(WPM, "Words/min", "#3b82f6", False, False, _wpm),
    ACCURACY: MetricSpec(ACCURACY, "Accuracy %", "#a855f7", False, False, _accuracy),
    PROSODY: MetricSpec(PROSODY, "Prosody", "#f59e0b", False, False, _prosody),
}


def get_metric_spec(metric: str) -> MetricSpec:
    """
    Return the MetricSpec for a metric.

    Unknown identifiers are not an error: they get a MetricSpec whose accessor
    yields 0 for every assessment and whose label is the identifier itself.

    Args:
        metric: Metric identifier

    Returns:
        MetricSpec for the metric
    """
    spec: Optional[MetricSpec] = METRICS.get(metric)
    if spec is not None:
        return spec
    return MetricSpec(
        key=metric,
        label=metric,
        color=UNKNOWN_METRIC_COLOR,
        requires_celeration=False,
        is_error_metric=False,
        accessor=_zero,
    )


def order_metrics(active_metrics) -> tuple[str, ...]:
    """
    Put active metrics in the configured drawing order.

    Known metrics come first in ``METRIC_ORDER``; unknown ones follow in
    the order given. Duplicates are dropped.
    """
    active = list(dict.fromkeys(active_metrics))
    known = [m for m in METRIC_ORDER if m in active]
    unknown = [m for m in active if m not in METRICS]
    return tuple(known + unknown)
