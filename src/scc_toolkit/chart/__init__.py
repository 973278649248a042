"""
Module: chart

Purpose:
    Standard Celeration Chart pipeline. Extracts per-metric series from
    student assessments, fits weekly celeration trends, composes an ordered
    list of draw operations for the active selection, hit-tests pointer
    positions and renders the result to PNG or PDF.

Key Functions:
    - extract_series(): Per-metric series with normalized days
    - fit_trend() / calculate_celeration(): Log-linear regression
    - compose_chart(): Main entry point for composition
    - nearest_point(): Tooltip hit test
    - render_chart(): Load → compose → render to file

Key Classes:
    - DashboardState: Roster and selection snapshot
    - ChartConfig / DisplayOptions / ZoomWindow: Configuration
    - RenderConfig: Pipeline configuration

Dependencies:
    - PIL: PNG output
    - reportlab: PDF output
    - scc_toolkit.core.models: Student and assessment models

Used By:
    - scc_toolkit.cli: Command-line interface
    - scc_toolkit.gui: Interactive viewer
"""

from .celeration import calculate_celeration, fit_trend, format_celeration, weekly_celeration
from .config import ChartConfig, DisplayOptions, ZOOM_WINDOWS, ZoomWindow, resolve_zoom
from .hit_test import HitResult, PICK_RADIUS_PX, nearest_point
from .layout import ChartPlan, compose_chart
from .metrics import METRICS, MetricSpec, get_metric_spec
from .panels import build_legend, build_stats, build_tooltip, chart_subtitle
from .series import MetricSeriesPoint, extract_series, visible_points
from .state import DashboardState
from .controller import ChartError, RenderConfig, RenderResult, load_state, render_chart

__all__ = [
    # Config
    "ChartConfig",
    "DisplayOptions",
    "ZoomWindow",
    "ZOOM_WINDOWS",
    "resolve_zoom",
    "METRICS",
    "MetricSpec",
    "get_metric_spec",
    # Series and celeration
    "MetricSeriesPoint",
    "extract_series",
    "visible_points",
    "fit_trend",
    "weekly_celeration",
    "calculate_celeration",
    "format_celeration",
    # Composition
    "ChartPlan",
    "compose_chart",
    "HitResult",
    "PICK_RADIUS_PX",
    "nearest_point",
    # Panels
    "build_stats",
    "build_legend",
    "build_tooltip",
    "chart_subtitle",
    # State and controller
    "DashboardState",
    "RenderConfig",
    "RenderResult",
    "ChartError",
    "load_state",
    "render_chart",
]
