"""
Module: chart.config

Purpose:
    Configuration for the chart pipeline. Defines canvas geometry, the
    logarithmic value range and grid, zoom windows, the student palette,
    and the display-option flags.

Key Classes:
    - ZoomWindow: Visible day-span with axis tick densities
    - DisplayOptions: Independent drawing toggles
    - ChartConfig: Immutable canvas/scale configuration

Key Functions:
    - resolve_zoom(): Look up a zoom window, falling back to the largest

Dependencies:
    - dataclasses (std)

Used By:
    - chart.layout.composer: Draw-op composition
    - chart.hit_test: Pointer lookup
    - chart.state: Dashboard state
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


# Standard Celeration Chart value range (count per minute)
DEFAULT_Y_MIN = 0.001
DEFAULT_Y_MAX = 1000.0

# Canvas defaults
DEFAULT_CANVAS_WIDTH = 1200
DEFAULT_CANVAS_HEIGHT = 800

LOG_GRID_LINES = (0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1, 5, 10, 50, 100, 500, 1000)
MAJOR_LOG_LINES = (0.001, 0.01, 0.1, 1, 10, 100, 1000)

DAYS_PER_WEEK = 7

STUDENT_PALETTE = (
    "#06b6d4",  # cyan
    "#f59e0b",  # amber
    "#a855f7",  # purple
    "#ec4899",  # pink
    "#10b981",  # emerald
    "#6366f1",  # indigo
    "#f43f5e",  # rose
    "#84cc16",  # lime
)


@dataclass(frozen=True)
class ZoomWindow:
    """
    A visible day-span (immutable).

    Attributes:
        days: Span in days; the X axis covers ``[0, days]``
        label: Display label
        day_interval: Spacing of vertical grid lines and day labels
        week_interval: Spacing of week numbers along the top edge
    """

    days: int
    label: str
    day_interval: int
    week_interval: int

    def __post_init__(self) -> None:
        """Validate zoom window on construction."""
        if self.days <= 0:
            raise ValueError(f"days must be positive: {self.days}")
        if self.day_interval <= 0 or self.week_interval <= 0:
            raise ValueError("tick intervals must be positive")

    @property
    def x_max(self) -> int:
        """Upper bound of the visible normalized-day range."""
        return self.days


ZOOM_WINDOWS: Dict[int, ZoomWindow] = {
    7: ZoomWindow(days=7, label="1 Week", day_interval=1, week_interval=1),
    30: ZoomWindow(days=30, label="1 Month", day_interval=7, week_interval=1),
    90: ZoomWindow(days=90, label="3 Months", day_interval=14, week_interval=2),
    140: ZoomWindow(days=140, label="Full", day_interval=14, week_interval=4),
}

DEFAULT_ZOOM_DAYS = 7


def resolve_zoom(days: int) -> ZoomWindow:
    """
    Look up a zoom window by span.

    Args:
        days: Requested span in days

    Returns:
        The matching ZoomWindow, or the largest defined span if unknown

    Example:
        >>> resolve_zoom(30).label
        '1 Month'
        >>> resolve_zoom(45).days
        140
    """
    window = ZOOM_WINDOWS.get(days)
    if window is None:
        return ZOOM_WINDOWS[max(ZOOM_WINDOWS)]
    return window


@dataclass(frozen=True)
class DisplayOptions:
    """
    Drawing toggles (immutable). No option implies another.

    Attributes:
        show_celeration_lines: Draw fitted trend lines
        show_data_points: Draw one marker per visible point
        show_record_floor: Draw record-floor ticks at 1/counting time
        connect_points: Draw polylines through positive points
    """

    show_celeration_lines: bool = True
    show_data_points: bool = True
    show_record_floor: bool = False
    connect_points: bool = True


@dataclass(frozen=True)
class ChartConfig:
    """
    Canvas and scale configuration (immutable).

    Attributes:
        width: Canvas width in pixels
        height: Canvas height in pixels
        margin_top / margin_right / margin_bottom / margin_left: Plot margins
        y_min / y_max: Logarithmic value range
        background_color: Canvas fill
        axis_color: Axis labels and titles
        grid_color: Grid line RGB (alpha set per line)
        dot_radius: Filled-circle marker radius
        error_mark_size: Half-size of the X marker
        record_floor_half_width: Half-width of a record-floor tick

    Example:
        >>> config = ChartConfig(width=1000, height=600)
        >>> config.plot_width
        840
    """

    width: int = DEFAULT_CANVAS_WIDTH
    height: int = DEFAULT_CANVAS_HEIGHT

    margin_top: int = 60
    margin_right: int = 80
    margin_bottom: int = 60
    margin_left: int = 80

    y_min: float = DEFAULT_Y_MIN
    y_max: float = DEFAULT_Y_MAX

    background_color: str = "#0a1628"
    axis_color: str = "#06b6d4"
    grid_color: str = "#06b6d4"

    dot_radius: float = 5.0
    error_mark_size: float = 6.0
    record_floor_half_width: float = 8.0

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.width <= 0:
            raise ValueError(f"width must be positive: {self.width}")
        if self.height <= 0:
            raise ValueError(f"height must be positive: {self.height}")
        if self.plot_width <= 0:
            raise ValueError("Margins exceed canvas width")
        if self.plot_height <= 0:
            raise ValueError("Margins exceed canvas height")
        if self.y_min <= 0:
            raise ValueError(f"y_min must be positive: {self.y_min}")
        if self.y_min >= self.y_max:
            raise ValueError(f"y_min must be below y_max: {self.y_min} >= {self.y_max}")

    @property
    def plot_width(self) -> int:
        """Width of the plot area (excluding margins)."""
        return self.width - self.margin_left - self.margin_right

    @property
    def plot_height(self) -> int:
        """Height of the plot area (excluding margins)."""
        return self.height - self.margin_top - self.margin_bottom
