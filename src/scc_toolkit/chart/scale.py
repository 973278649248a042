"""
Module: chart.scale

Purpose:
    Coordinate mapping for the Standard Celeration Chart. The Y axis is
    logarithmic over a fixed value range; the X axis is linear over the
    active zoom window.

Key Classes:
    - CoordinateMapper: value <-> pixel transforms
    - PlotArea: plot rectangle inside the canvas

Dependencies:
    - math (std)

Used By:
    - chart.layout.composer: Draw-op coordinates
    - chart.hit_test: Candidate marker positions
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .config import ChartConfig, DEFAULT_Y_MAX, DEFAULT_Y_MIN

# Plotted in place of non-positive values so they sit just above the axis floor
ZERO_VALUE_SENTINEL = 0.0005


@dataclass(frozen=True)
class CoordinateMapper:
    """
    Log-scale value <-> pixel mapping (immutable, stateless).

    Pixel Y grows downward, so larger values map to smaller Y.

    Attributes:
        y_min: Lowest plottable value
        y_max: Highest plottable value

    Example:
        >>> mapper = CoordinateMapper()
        >>> mapper.value_to_y(1, 600)
        300.0
    """

    y_min: float = DEFAULT_Y_MIN
    y_max: float = DEFAULT_Y_MAX

    def __post_init__(self) -> None:
        """Validate range on construction."""
        if self.y_min <= 0:
            raise ValueError(f"y_min must be positive: {self.y_min}")
        if self.y_min >= self.y_max:
            raise ValueError(f"y_min must be below y_max: {self.y_min} >= {self.y_max}")

    @classmethod
    def from_config(cls, config: ChartConfig) -> CoordinateMapper:
        return cls(y_min=config.y_min, y_max=config.y_max)

    @property
    def _log_min(self) -> float:
        return math.log10(self.y_min)

    @property
    def _log_max(self) -> float:
        return math.log10(self.y_max)

    def value_to_y(self, value: float, height: float) -> float:
        """
        Map a value to a pixel Y inside a plot of the given height.

        The value is clamped into ``[y_min, y_max]`` first. Callers must
        substitute ``ZERO_VALUE_SENTINEL`` for non-positive values; the clamp
        only protects against values below ``y_min``, not against ``log10(0)``
        of a raw zero.

        Args:
            value: Value to map
            height: Plot height in pixels

        Returns:
            Pixel Y, 0 at ``y_max`` and ``height`` at ``y_min``
        """
        value = max(self.y_min, min(self.y_max, value))
        normalized = (math.log10(value) - self._log_min) / (self._log_max - self._log_min)
        return height * (1 - normalized)

    def y_to_value(self, pixel_y: float, height: float) -> float:
        """
        Inverse of ``value_to_y`` (no clamping on output).

        Args:
            pixel_y: Pixel Y inside the plot
            height: Plot height in pixels

        Returns:
            Value at that height
        """
        normalized = 1 - (pixel_y / height)
        return 10 ** (self._log_min + normalized * (self._log_max - self._log_min))

    @staticmethod
    def day_to_x(normalized_day: float, x_max: float, width: float) -> float:
        """
        Map a normalized day to a pixel X.

        Only valid for ``normalized_day`` in ``[0, x_max]``; callers discard
        points outside the zoom window before mapping.
        """
        return (normalized_day / x_max) * width


def plottable_value(value: float) -> float:
    """Substitute the sentinel for values that cannot go through log10."""
    return value if value > 0 else ZERO_VALUE_SENTINEL


@dataclass(frozen=True)
class PlotArea:
    """
    Plot rectangle in canvas coordinates.

    Attributes:
        left: X of the plot's left edge
        top: Y of the plot's top edge
        width: Plot width
        height: Plot height
    """

    left: float
    top: float
    width: float
    height: float

    @classmethod
    def from_config(cls, config: ChartConfig) -> PlotArea:
        return cls(
            left=config.margin_left,
            top=config.margin_top,
            width=config.plot_width,
            height=config.plot_height,
        )

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def to_canvas(self, x: float, y: float) -> tuple[float, float]:
        """Translate plot-local coordinates to canvas coordinates."""
        return (self.left + x, self.top + y)

    def contains(self, x: float, y: float) -> bool:
        """True when a canvas point lies inside the plot (edges included)."""
        return self.left <= x <= self.right and self.top <= y <= self.bottom


def map_point(
    normalized_day: float,
    value: float,
    *,
    plot: PlotArea,
    mapper: CoordinateMapper,
    x_max: float,
) -> tuple[float, float]:
    """
    Canvas position of a (normalized day, value) pair.

    Shared by the composer and the hit tester so a pointer lookup lands on
    exactly the pixel a marker was drawn at. Non-positive values go through
    the sentinel.

    Args:
        normalized_day: Day within ``[0, x_max]``
        value: Metric value
        plot: Plot rectangle
        mapper: Y mapping
        x_max: Zoom window span

    Returns:
        (x, y) in canvas coordinates
    """
    x = mapper.day_to_x(normalized_day, x_max, plot.width)
    y = mapper.value_to_y(plottable_value(value), plot.height)
    return plot.to_canvas(x, y)
