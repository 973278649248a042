"""
Chart controls: metric checkboxes, zoom buttons and display toggles.
"""
from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QButtonGroup, QCheckBox, QGroupBox, QHBoxLayout, QLabel, QPushButton, QVBoxLayout

from scc_toolkit.chart.config import ZOOM_WINDOWS
from scc_toolkit.chart.metrics import METRIC_ORDER, get_metric_spec
from scc_toolkit.chart.state import DashboardState

DISPLAY_OPTION_LABELS = {
    "show_celeration_lines": "Celeration lines",
    "show_data_points": "Data points",
    "show_record_floor": "Record floor",
    "connect_points": "Connect points",
}


class ControlsPanel(QGroupBox):
    """
    Metric, zoom and display controls.

    Signals:
        metricToggled(str, bool): Metric id and new enabled state
        zoomChanged(int): Zoom span in days
        displayOptionChanged(str, bool): DisplayOptions field name and value
    """

    metricToggled = Signal(str, bool)
    zoomChanged = Signal(int)
    displayOptionChanged = Signal(str, bool)

    def __init__(self, parent=None):
        super().__init__("Chart", parent)

        layout = QVBoxLayout(self)

        # Metrics
        layout.addWidget(QLabel("Metrics"))
        self.metric_boxes: dict[str, QCheckBox] = {}
        for metric in METRIC_ORDER:
            spec = get_metric_spec(metric)
            box = QCheckBox(spec.label)
            box.setStyleSheet(f"QCheckBox {{ color: {spec.color}; }}")
            box.toggled.connect(lambda checked, m=metric: self.metricToggled.emit(m, checked))
            self.metric_boxes[metric] = box
            layout.addWidget(box)

        # Zoom
        layout.addWidget(QLabel("Zoom"))
        zoom_row = QHBoxLayout()
        zoom_row.setSpacing(4)
        self.zoom_group = QButtonGroup(self)
        self.zoom_group.setExclusive(True)
        self.zoom_buttons: dict[int, QPushButton] = {}
        for days, window in sorted(ZOOM_WINDOWS.items()):
            button = QPushButton(window.label)
            button.setCheckable(True)
            button.setCursor(Qt.CursorShape.PointingHandCursor)
            self.zoom_group.addButton(button, days)
            self.zoom_buttons[days] = button
            zoom_row.addWidget(button)
        self.zoom_group.idClicked.connect(self.zoomChanged.emit)
        layout.addLayout(zoom_row)

        # Display options
        layout.addWidget(QLabel("Display"))
        self.option_boxes: dict[str, QCheckBox] = {}
        for name, label in DISPLAY_OPTION_LABELS.items():
            box = QCheckBox(label)
            box.toggled.connect(lambda checked, n=name: self.displayOptionChanged.emit(n, checked))
            self.option_boxes[name] = box
            layout.addWidget(box)

        layout.addStretch()

    def set_state(self, state: DashboardState) -> None:
        """Sync controls to a dashboard snapshot without emitting signals."""
        for metric, box in self.metric_boxes.items():
            box.blockSignals(True)
            box.setChecked(metric in state.active_metrics)
            box.blockSignals(False)

        button = self.zoom_buttons.get(state.zoom.days)
        if button is not None:
            button.setChecked(True)

        for name, box in self.option_boxes.items():
            box.blockSignals(True)
            box.setChecked(getattr(state.display_options, name))
            box.blockSignals(False)
