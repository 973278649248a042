"""
Student roster widget.

One checkable row per loaded student, with the student's chart color as a
swatch. Checking a row selects the student for charting.
"""
from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QColor, QIcon, QPixmap
from PySide6.QtWidgets import QGroupBox, QHBoxLayout, QListWidget, QListWidgetItem, QPushButton, QVBoxLayout

from scc_toolkit.chart.state import DashboardState

SWATCH_SIZE = 12


def _swatch(color: str) -> QIcon:
    pixmap = QPixmap(SWATCH_SIZE, SWATCH_SIZE)
    pixmap.fill(QColor(color))
    return QIcon(pixmap)


class StudentList(QGroupBox):
    """
    Roster list with selection checkboxes.

    Signals:
        studentToggled(str): Row checkbox changed for a student id
        removeRequested(str): Remove pressed with a student row selected
    """

    studentToggled = Signal(str)
    removeRequested = Signal(str)

    def __init__(self, parent=None):
        super().__init__("Students", parent)

        layout = QVBoxLayout(self)

        self.list_widget = QListWidget()
        self.list_widget.itemChanged.connect(self._on_item_changed)
        layout.addWidget(self.list_widget)

        buttons = QHBoxLayout()
        self.remove_button = QPushButton("Remove")
        self.remove_button.setCursor(Qt.CursorShape.PointingHandCursor)
        self.remove_button.clicked.connect(self._on_remove_clicked)
        buttons.addStretch()
        buttons.addWidget(self.remove_button)
        layout.addLayout(buttons)

    def set_state(self, state: DashboardState) -> None:
        """Rebuild rows from a dashboard snapshot without emitting signals."""
        self.list_widget.blockSignals(True)
        try:
            # Same roster: update rows in place (this runs inside itemChanged)
            if self.student_ids() != [s.id for s in state.students]:
                self.list_widget.clear()
                for student in state.students:
                    item = QListWidgetItem(_swatch(student.color), "")
                    item.setData(Qt.ItemDataRole.UserRole, student.id)
                    item.setFlags(item.flags() | Qt.ItemFlag.ItemIsUserCheckable)
                    self.list_widget.addItem(item)
            for row, student in enumerate(state.students):
                item = self.list_widget.item(row)
                item.setText(f"{student.name} ({student.assessment_count})")
                item.setCheckState(Qt.CheckState.Checked if state.is_active(student.id) else Qt.CheckState.Unchecked)
        finally:
            self.list_widget.blockSignals(False)
        self.remove_button.setEnabled(bool(state.students))

    def student_ids(self) -> list[str]:
        return [
            self.list_widget.item(row).data(Qt.ItemDataRole.UserRole)
            for row in range(self.list_widget.count())
        ]

    def _on_item_changed(self, item: QListWidgetItem) -> None:
        self.studentToggled.emit(item.data(Qt.ItemDataRole.UserRole))

    def _on_remove_clicked(self) -> None:
        item = self.list_widget.currentItem()
        if item is not None:
            self.removeRequested.emit(item.data(Qt.ItemDataRole.UserRole))
