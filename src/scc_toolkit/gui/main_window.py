"""
Main Window for the SCC Toolkit viewer.
"""
from __future__ import annotations

import logging
import queue
from pathlib import Path
from typing import Iterable

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import (
    QFileDialog, QHBoxLayout, QLabel, QMainWindow, QPushButton,
    QStatusBar, QVBoxLayout, QWidget,
)

from scc_toolkit import __version__
from scc_toolkit.chart.panels import build_legend, build_stats, chart_subtitle
from scc_toolkit.chart.state import DashboardState
from scc_toolkit.core.schemas import ValidationError
from scc_toolkit.core.utils import LoaderError, load_student_file
from scc_toolkit.gui.styles.theme import Colors
from scc_toolkit.gui.utils.logging_utils import attach_queue_handler, detach_queue_handler, drain_queue
from scc_toolkit.gui.widgets.chart_canvas import ChartCanvas
from scc_toolkit.gui.widgets.controls_panel import ControlsPanel
from scc_toolkit.gui.widgets.stats_panel import LegendPanel, StatsPanel
from scc_toolkit.gui.widgets.student_list import StudentList

logger = logging.getLogger(__name__)

STATUS_TIMEOUT_MS = 5000
SIDEBAR_WIDTH = 280


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()

        self.state = DashboardState()

        self.setWindowTitle(f"SCC Toolkit v{__version__}")
        self.resize(1500, 900)
        self.setMinimumSize(1100, 650)

        # --- Menu Bar ---
        file_menu = self.menuBar().addMenu("File")
        open_action = QAction("Open Student Files...", self)
        open_action.setShortcut(QKeySequence.StandardKey.Open)
        open_action.triggered.connect(self._open_files_dialog)
        file_menu.addAction(open_action)
        file_menu.addSeparator()
        exit_action = QAction("Quit", self)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        # Initialize Logging
        self.log_queue = queue.Queue()
        self._log_handler = attach_queue_handler(self.log_queue)
        self.log_timer = QTimer(self)
        self.log_timer.timeout.connect(self._drain_log_queue)
        self.log_timer.start(100)

        # Central Widget
        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QHBoxLayout(central)
        main_layout.setContentsMargins(12, 12, 12, 12)
        main_layout.setSpacing(12)

        # --- Left sidebar: loading, roster, controls ---
        left = QVBoxLayout()
        self.load_button = QPushButton("Load JSON...")
        self.load_button.setObjectName("primaryButton")
        self.load_button.setCursor(Qt.CursorShape.PointingHandCursor)
        self.load_button.clicked.connect(self._open_files_dialog)
        left.addWidget(self.load_button)

        self.student_list = StudentList()
        self.student_list.studentToggled.connect(self._on_student_toggled)
        self.student_list.removeRequested.connect(self._on_remove_requested)
        left.addWidget(self.student_list, 1)

        self.controls = ControlsPanel()
        self.controls.metricToggled.connect(self._on_metric_toggled)
        self.controls.zoomChanged.connect(self._on_zoom_changed)
        self.controls.displayOptionChanged.connect(self._on_display_option_changed)
        left.addWidget(self.controls)
        main_layout.addWidget(self._fixed_width(left))

        # --- Center: chart ---
        center = QVBoxLayout()
        title = QLabel("Standard Celeration Chart")
        title.setObjectName("chartTitle")
        center.addWidget(title)
        self.subtitle_label = QLabel()
        self.subtitle_label.setObjectName("chartSubtitle")
        center.addWidget(self.subtitle_label)
        self.canvas = ChartCanvas()
        center.addWidget(self.canvas, 1)
        main_layout.addLayout(center, 1)

        # --- Right sidebar: stats and legend ---
        right = QVBoxLayout()
        self.stats_panel = StatsPanel()
        right.addWidget(self.stats_panel)
        self.legend_panel = LegendPanel()
        right.addWidget(self.legend_panel)
        right.addStretch()
        main_layout.addWidget(self._fixed_width(right))

        # Status Bar
        self.status_bar = QStatusBar()
        self.status_bar.showMessage("Ready")
        self.setStatusBar(self.status_bar)

        self.set_state(self.state)

    @staticmethod
    def _fixed_width(layout: QVBoxLayout) -> QWidget:
        # Sidebars are wrapped so the chart takes the remaining width
        container = QWidget()
        container.setFixedWidth(SIDEBAR_WIDTH)
        container.setLayout(layout)
        layout.setContentsMargins(0, 0, 0, 0)
        return container

    # ─────────────────────────────────────────────────────────────────────────
    # State
    # ─────────────────────────────────────────────────────────────────────────

    def set_state(self, state: DashboardState) -> None:
        """Replace the dashboard snapshot and refresh every view of it."""
        self.state = state
        self.student_list.set_state(state)
        self.controls.set_state(state)
        self.canvas.set_state(state)
        self.subtitle_label.setText(chart_subtitle(state.zoom))
        self.stats_panel.set_stats(build_stats(state.students, state.active_student_ids))
        self.legend_panel.set_entries(build_legend(state.active_metrics))

    def load_files(self, paths: Iterable[Path]) -> int:
        """
        Load student-export files into the roster.

        Files that fail to load are reported in the status bar and skipped.

        Returns:
            Number of files loaded
        """
        state = self.state
        loaded = 0
        for path in paths:
            path = Path(path)
            try:
                student = load_student_file(path)
            except (LoaderError, ValidationError) as e:
                logger.error(f"Could not load {path.name}: {e}")
                continue
            state = state.ingest(student)
            loaded += 1
        self.set_state(state)
        return loaded

    # ─────────────────────────────────────────────────────────────────────────
    # Slots
    # ─────────────────────────────────────────────────────────────────────────

    def _open_files_dialog(self):
        paths, _ = QFileDialog.getOpenFileNames(
            self, "Load Student Data", "", "Student JSON (*.json);;All Files (*)"
        )
        if paths:
            self.load_files(paths)

    def _on_student_toggled(self, student_id: str):
        self.set_state(self.state.toggle_student(student_id))

    def _on_remove_requested(self, student_id: str):
        student = self.state.get_student(student_id)
        self.set_state(self.state.remove_student(student_id))
        if student is not None:
            logger.info(f"Removed {student.name}")

    def _on_metric_toggled(self, metric: str, enabled: bool):
        self.set_state(self.state.set_metric(metric, enabled))

    def _on_zoom_changed(self, days: int):
        self.set_state(self.state.set_zoom(days))

    def _on_display_option_changed(self, name: str, value: bool):
        self.set_state(self.state.with_display_options(**{name: value}))

    def _drain_log_queue(self):
        messages = drain_queue(self.log_queue)
        if not messages:
            return
        text, level = messages[-1]
        color = Colors.ERROR if level in ("ERROR", "CRITICAL") else (
            Colors.WARNING if level == "WARNING" else Colors.TEXT_SECONDARY
        )
        self.status_bar.setStyleSheet(f"QStatusBar {{ color: {color}; }}")
        self.status_bar.showMessage(text, STATUS_TIMEOUT_MS)

    def closeEvent(self, event):
        self.log_timer.stop()
        detach_queue_handler(self._log_handler)
        super().closeEvent(event)
