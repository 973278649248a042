"""
Module: chart.controller

Purpose:
    Orchestrate the complete chart rendering pipeline.
    Load → Ingest → Compose → Render

Key Functions:
    - render_chart(): Main entry point for rendering a chart file
    - load_state(): Build a DashboardState from export files

Key Classes:
    - RenderConfig: Pipeline configuration
    - RenderResult: Complete render result
    - ChartError: Exception for pipeline failures

Dependencies:
    - core.utils: Export file loading
    - chart.state: Roster and selection
    - chart.output: PNG/PDF backends

Used By:
    - scc_toolkit.cli: ``render`` and ``stats`` commands
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Literal, Optional, Tuple

from scc_toolkit.core.schemas import ValidationError
from scc_toolkit.core.utils import LoaderError, load_student_file

from .config import ChartConfig, DEFAULT_CANVAS_HEIGHT, DEFAULT_CANVAS_WIDTH, DEFAULT_ZOOM_DAYS, DisplayOptions
from .layout import ChartPlan
from .metrics import DEFAULT_ACTIVE_METRICS
from .output import render_to_pdf, render_to_png
from .panels import StudentStats, build_stats
from .state import DashboardState

logger = logging.getLogger(__name__)

OutputFormat = Literal["png", "pdf"]
SUPPORTED_FORMATS = ("png", "pdf")


class ChartError(Exception):
    """Error during chart pipeline."""
    pass


@dataclass(frozen=True)
class RenderConfig:
    """
    Configuration for rendering a chart file (immutable).

    Attributes:
        inputs: Student-export JSON files, ingested in order
        output_path: File to write
        output_format: "png" or "pdf"; inferred from the output suffix when None
        zoom_days: Zoom window span (unknown spans resolve to the largest)
        metrics: Active metrics
        display_options: Drawing toggles
        width: Canvas width in pixels
        height: Canvas height in pixels

    Example:
        >>> config = RenderConfig(
        ...     inputs=(Path("ana.json"),),
        ...     output_path=Path("out/ana.pdf"),
        ...     zoom_days=30,
        ... )
        >>> config.resolved_format
        'pdf'
    """

    # Required
    inputs: Tuple[Path, ...]
    output_path: Path

    # Output
    output_format: Optional[OutputFormat] = None
    width: int = DEFAULT_CANVAS_WIDTH
    height: int = DEFAULT_CANVAS_HEIGHT

    # Chart
    zoom_days: int = DEFAULT_ZOOM_DAYS
    metrics: Tuple[str, ...] = DEFAULT_ACTIVE_METRICS
    display_options: DisplayOptions = field(default_factory=DisplayOptions)

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not self.inputs:
            raise ValueError("inputs must name at least one file")
        if self.zoom_days <= 0:
            raise ValueError(f"zoom_days must be positive: {self.zoom_days}")
        if self.output_format is not None and self.output_format not in SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported output format: {self.output_format!r}")
        if self.output_format is None and Path(self.output_path).suffix.lower().lstrip(".") not in SUPPORTED_FORMATS:
            raise ValueError(f"Cannot infer output format from {self.output_path}; use .png or .pdf")

    @property
    def resolved_format(self) -> OutputFormat:
        """Explicit format, or the one named by the output suffix."""
        if self.output_format is not None:
            return self.output_format
        return Path(self.output_path).suffix.lower().lstrip(".")  # type: ignore[return-value]

    @property
    def chart_config(self) -> ChartConfig:
        """Canvas configuration for the requested size."""
        return ChartConfig(width=self.width, height=self.height)


@dataclass(frozen=True)
class RenderResult:
    """
    Complete render result (immutable).

    Attributes:
        output_path: Written file
        output_format: Format written
        plan: Composed chart
        state: Dashboard snapshot the chart was composed from
        stats: Stats panel for the first active student
        warnings: Any warnings during composition

    Example:
        >>> result = render_chart(config)
        >>> print(f"Drew {result.plan.series_count} series to {result.output_path}")
    """

    output_path: Path
    output_format: OutputFormat
    plan: ChartPlan
    state: DashboardState
    stats: Optional[StudentStats]
    warnings: tuple[str, ...] = ()


def load_state(
    inputs: Iterable[Path],
    *,
    metrics: Iterable[str] = DEFAULT_ACTIVE_METRICS,
    zoom_days: int = DEFAULT_ZOOM_DAYS,
    display_options: DisplayOptions = DisplayOptions(),
) -> DashboardState:
    """
    Ingest export files into a fresh dashboard state.

    Files are ingested in order; a repeated student id merges into the
    earlier entry.

    Args:
        inputs: Student-export JSON files
        metrics: Active metrics
        zoom_days: Zoom window span
        display_options: Drawing toggles

    Returns:
        DashboardState with every loaded student selected

    Raises:
        ChartError: If a file cannot be read or a record is malformed
    """
    state = DashboardState(
        active_metrics=tuple(metrics),
        zoom_days=zoom_days,
        display_options=display_options,
    )
    for path in inputs:
        path = Path(path)
        try:
            student = load_student_file(path)
        except LoaderError as e:
            raise ChartError(f"Failed to load students: {e}") from e
        except ValidationError as e:
            raise ChartError(f"Invalid student record in {path.name}: {e}") from e
        state = state.ingest(student)

    logger.info(f"Loaded {len(state.students)} students")
    return state


def render_chart(config: RenderConfig) -> RenderResult:
    """
    Render a chart file from start to finish.

    Pipeline:
    1. Load and ingest export files
    2. Compose draw ops for all loaded students
    3. Render to PNG or PDF

    Args:
        config: Render configuration

    Returns:
        RenderResult with the written path and the composed plan

    Raises:
        ChartError: If any step fails

    Example:
        >>> config = RenderConfig(
        ...     inputs=(Path("exports/ana.json"),),
        ...     output_path=Path("output/ana.png"),
        ... )
        >>> result = render_chart(config)
        >>> print(result.output_path)
    """
    start_time = time.perf_counter()
    output_format = config.resolved_format
    logger.info(f"Starting {output_format.upper()} render of {len(config.inputs)} file(s)")

    # 1. Load
    state = load_state(
        config.inputs,
        metrics=config.metrics,
        zoom_days=config.zoom_days,
        display_options=config.display_options,
    )
    if not state.students:
        raise ChartError("No students loaded")

    # 2. Compose
    plan = state.compose(config.chart_config)
    for warning in plan.warnings:
        logger.warning(warning)

    # 3. Render
    output_path = Path(config.output_path)
    try:
        if output_format == "pdf":
            render_to_pdf(plan, output_path, title=_document_title(state))
        else:
            render_to_png(plan, output_path)
    except OSError as e:
        raise ChartError(f"Failed to write {output_path}: {e}") from e

    elapsed = time.perf_counter() - start_time
    logger.info(f"Chart render completed in {elapsed:.2f}s")

    return RenderResult(
        output_path=output_path,
        output_format=output_format,
        plan=plan,
        state=state,
        stats=build_stats(state.students, state.active_student_ids),
        warnings=plan.warnings,
    )


def _document_title(state: DashboardState) -> str:
    names = ", ".join(s.name for s in state.active_students)
    return f"Standard Celeration Chart: {names}" if names else "Standard Celeration Chart"
