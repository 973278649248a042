"""
Module: cli

Purpose:
    Command-line entry point (``scc-chart``).

    - render: Export files → PNG or PDF chart
    - stats: Print the stats panel for the loaded students
    - gui: Open the interactive viewer

Dependencies:
    - argparse (std)
    - chart.controller: Render pipeline

Used By:
    - pyproject ``scc-chart`` console script
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from scc_toolkit import __version__
from scc_toolkit.chart.config import DEFAULT_CANVAS_HEIGHT, DEFAULT_CANVAS_WIDTH, DEFAULT_ZOOM_DAYS, DisplayOptions
from scc_toolkit.chart.controller import ChartError, RenderConfig, load_state, render_chart
from scc_toolkit.chart.metrics import DEFAULT_ACTIVE_METRICS, METRIC_ORDER
from scc_toolkit.chart.panels import build_stats

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s" if verbose else "%(message)s",
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scc-chart",
        description="Standard Celeration Chart rendering for precision-teaching exports",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    # render
    render = sub.add_parser("render", help="Render a chart to PNG or PDF")
    render.add_argument("inputs", nargs="+", type=Path, help="Student-export JSON files")
    render.add_argument("-o", "--output", type=Path, required=True, help="Output .png or .pdf file")
    render.add_argument("--format", choices=("png", "pdf"), help="Output format (default: from suffix)")
    render.add_argument("--zoom", type=int, default=DEFAULT_ZOOM_DAYS, help="Zoom span in days (7, 30, 90, 140)")
    render.add_argument(
        "--metric", "-m",
        action="append",
        dest="metrics",
        metavar="METRIC",
        help=f"Metric to draw, repeatable ({', '.join(METRIC_ORDER)})",
    )
    render.add_argument("--width", type=int, default=DEFAULT_CANVAS_WIDTH, help="Canvas width in pixels")
    render.add_argument("--height", type=int, default=DEFAULT_CANVAS_HEIGHT, help="Canvas height in pixels")
    render.add_argument("--no-celeration", action="store_true", help="Hide celeration lines")
    render.add_argument("--no-points", action="store_true", help="Hide data points")
    render.add_argument("--record-floor", action="store_true", help="Show record-floor ticks")
    render.add_argument("--no-connect", action="store_true", help="Do not connect points")
    render.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    # stats
    stats = sub.add_parser("stats", help="Print celeration stats")
    stats.add_argument("inputs", nargs="+", type=Path, help="Student-export JSON files")
    stats.add_argument("--all", action="store_true", help="Print every student, not only the first")
    stats.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    # gui
    gui = sub.add_parser("gui", help="Open the chart viewer")
    gui.add_argument("inputs", nargs="*", type=Path, help="Student-export JSON files to open")
    gui.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    return parser


def _cmd_render(args: argparse.Namespace) -> int:
    try:
        config = RenderConfig(
            inputs=tuple(args.inputs),
            output_path=args.output,
            output_format=args.format,
            zoom_days=args.zoom,
            metrics=tuple(args.metrics) if args.metrics else DEFAULT_ACTIVE_METRICS,
            display_options=DisplayOptions(
                show_celeration_lines=not args.no_celeration,
                show_data_points=not args.no_points,
                show_record_floor=args.record_floor,
                connect_points=not args.no_connect,
            ),
            width=args.width,
            height=args.height,
        )
        result = render_chart(config)
    except (ChartError, ValueError) as e:
        logger.error(f"Render failed: {e}")
        return 1

    print(f"Wrote {result.output_path} ({result.plan.series_count} series, {result.plan.trend_count} trends)")
    return 0


def _cmd_stats(args: argparse.Namespace) -> int:
    try:
        state = load_state(args.inputs)
    except ChartError as e:
        logger.error(f"Stats failed: {e}")
        return 1

    students = state.students if args.all else state.students[:1]
    for index, student in enumerate(students):
        stats = build_stats(state.students, [student.id])
        if index:
            print()
        width = max(len(label) for label, _ in stats.rows())
        for label, value in stats.rows():
            print(f"{label:<{width}}  {value}")
    return 0


def _cmd_gui(args: argparse.Namespace) -> int:
    from scc_toolkit.gui.app import run

    return run(args.inputs)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI.

    Args:
        argv: Arguments without the program name (default: sys.argv[1:])

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    commands = {"render": _cmd_render, "stats": _cmd_stats, "gui": _cmd_gui}
    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
