"""
Module: chart.celeration

Purpose:
    Log-linear trend fitting. Fits ``log10(value)`` against day by ordinary
    least squares and converts the per-day slope into a weekly
    multiplicative rate (celeration).

Key Functions:
    - fit_trend(): OLS fit, None when indeterminate
    - weekly_celeration(): 10 ** (slope * 7)
    - calculate_celeration(): Weekly celeration straight from (day, value) pairs
    - format_celeration(): "×2.00" / "÷2.00" / "N/A"
    - trend_segment(): Endpoints of the drawn trend line

Dependencies:
    - math (std)

Used By:
    - chart.layout.composer: Trend lines
    - chart.panels: Stats panel
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .config import DAYS_PER_WEEK

# Trend lines extend at most this many days beyond the observed data
MAX_TREND_EXTENSION_DAYS = 3.0
TREND_EXTENSION_FRACTION = 0.1

NOT_AVAILABLE = "N/A"


def _pow10(exponent: float) -> float:
    """10 ** exponent, saturating to inf instead of raising OverflowError."""
    try:
        return 10.0 ** exponent
    except OverflowError:
        return math.inf


@dataclass(frozen=True)
class TrendFit:
    """
    Result of a log-linear fit (immutable).

    ``log10(value) = intercept + slope * x``

    Attributes:
        slope: Per-day slope in log10 units
        intercept: log10 value at x = 0
        point_count: Number of positive points used
    """

    slope: float
    intercept: float
    point_count: int

    def value_at(self, x: float) -> float:
        """Back-transform the fitted line at x (inf when it overflows)."""
        return _pow10(self.intercept + self.slope * x)

    @property
    def weekly_celeration(self) -> float:
        return weekly_celeration(self)


@dataclass(frozen=True)
class TrendSegment:
    """Drawn portion of a trend line, in (day, value) space."""

    start_x: float
    start_value: float
    end_x: float
    end_value: float


def fit_trend(points: Iterable[Tuple[float, float]]) -> Optional[TrendFit]:
    """
    Fit ``log10(y)`` against ``x`` by ordinary least squares.

    Points with ``y <= 0`` or a non-finite ``y`` are ignored.

    Args:
        points: (x, y) pairs

    Returns:
        TrendFit, or None when fewer than 2 positive points remain or all
        x values are identical

    Example:
        >>> fit = fit_trend([(0, 2), (7, 4), (14, 8)])
        >>> round(fit.weekly_celeration, 2)
        2.0
    """
    log_points = [(float(x), math.log10(y)) for x, y in points if y > 0 and math.isfinite(y)]
    n = len(log_points)
    if n < 2:
        return None

    sum_x = sum(x for x, _ in log_points)
    sum_y = sum(y for _, y in log_points)
    sum_xy = sum(x * y for x, y in log_points)
    sum_x2 = sum(x * x for x, _ in log_points)

    denominator = n * sum_x2 - sum_x * sum_x
    if denominator == 0:
        return None

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    return TrendFit(slope=slope, intercept=intercept, point_count=n)


def weekly_celeration(fit: TrendFit) -> float:
    """Convert a per-day log slope into a weekly multiplier."""
    return _pow10(fit.slope * DAYS_PER_WEEK)


def calculate_celeration(points: Iterable[Tuple[float, float]]) -> Optional[float]:
    """
    Weekly celeration for raw (calendar day, value) pairs.

    Args:
        points: (day, value) pairs; non-positive values are ignored

    Returns:
        Weekly multiplier, or None when no trend can be fitted
    """
    fit = fit_trend(points)
    if fit is None:
        return None
    return weekly_celeration(fit)


def format_celeration(value: Optional[float]) -> str:
    """
    Format a weekly celeration for display.

    Args:
        value: Weekly multiplier, or None

    Returns:
        ``"×v"`` for growth (v >= 1), ``"÷(1/v)"`` for decay, ``"N/A"`` for
        None, NaN, non-finite or non-positive values

    Example:
        >>> format_celeration(2.0), format_celeration(0.5)
        ('×2.00', '÷2.00')
    """
    if value is None or not math.isfinite(value) or value <= 0:
        return NOT_AVAILABLE
    if value >= 1:
        return f"×{value:.2f}"
    return f"÷{1 / value:.2f}"


def trend_segment(fit: TrendFit, min_x: float, max_x: float, x_max: float) -> TrendSegment:
    """
    Compute the drawn extent of a trend line.

    The line runs slightly beyond the observed data and never outside
    ``[0, x_max]``.

    Args:
        fit: Fitted trend
        min_x: Earliest normalized day of the fitted points
        max_x: Latest normalized day of the fitted points
        x_max: Zoom window span

    Returns:
        TrendSegment with back-transformed endpoint values
    """
    extension = min(MAX_TREND_EXTENSION_DAYS, x_max * TREND_EXTENSION_FRACTION)
    start_x = max(0.0, min_x - extension)
    end_x = min(float(x_max), max_x + extension)
    return TrendSegment(
        start_x=start_x,
        start_value=fit.value_at(start_x),
        end_x=end_x,
        end_value=fit.value_at(end_x),
    )
