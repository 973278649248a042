"""
Stats and legend panels shown beside the chart.
"""
from __future__ import annotations

from typing import Iterable, Optional

from PySide6.QtWidgets import QFormLayout, QGroupBox, QLabel, QVBoxLayout

from scc_toolkit.chart.panels import LegendEntry, StudentStats
from scc_toolkit.gui.styles.theme import Colors, TREND_COLORS

EMPTY_STATS_TEXT = "Select a student to see stats"

# Which rows carry a trend color
_TREND_ROWS = {"Correct Celeration": "correct_trend", "Error Celeration": "error_trend"}


class StatsPanel(QGroupBox):
    """Stats for the first active student."""

    def __init__(self, parent=None):
        super().__init__("Stats", parent)
        self.form = QFormLayout(self)
        self.value_labels: dict[str, QLabel] = {}
        self.set_stats(None)

    def set_stats(self, stats: Optional[StudentStats]) -> None:
        while self.form.rowCount():
            self.form.removeRow(0)
        self.value_labels = {}

        if stats is None:
            placeholder = QLabel(EMPTY_STATS_TEXT)
            placeholder.setStyleSheet(f"color: {Colors.TEXT_SECONDARY};")
            self.form.addRow(placeholder)
            return

        for label, value in stats.rows():
            value_label = QLabel(value)
            trend_attr = _TREND_ROWS.get(label)
            if trend_attr is not None:
                color = TREND_COLORS[getattr(stats, trend_attr)]
                value_label.setStyleSheet(f"color: {color}; font-weight: 600;")
            self.value_labels[label] = value_label
            self.form.addRow(QLabel(label), value_label)


class LegendPanel(QGroupBox):
    """Metric legend: marker symbol in the metric color plus its label."""

    def __init__(self, parent=None):
        super().__init__("Legend", parent)
        self.entries_layout = QVBoxLayout(self)
        self.entry_labels: list[QLabel] = []

    def set_entries(self, entries: Iterable[LegendEntry]) -> None:
        for label in self.entry_labels:
            self.entries_layout.removeWidget(label)
            label.deleteLater()
        self.entry_labels = []

        for entry in entries:
            symbol = "✕" if entry.symbol == "x" else "●"
            label = QLabel(f"<span style='color:{entry.color}'>{symbol}</span> {entry.label}")
            self.entries_layout.addWidget(label)
            self.entry_labels.append(label)
