"""
Chart canvas widget.

Paints a composed ChartPlan with QPainter and shows a tooltip for the point
under the pointer. The plan is recomposed whenever the state or the widget
size changes; the canvas size is the chart size.
"""
from __future__ import annotations

import html
import logging
from typing import Optional

from PySide6.QtCore import QPointF, QRectF, Qt, Signal
from PySide6.QtGui import QColor, QFont, QPainter, QPen, QPolygonF
from PySide6.QtWidgets import QToolTip, QWidget

from scc_toolkit.chart.config import ChartConfig
from scc_toolkit.chart.hit_test import HitResult
from scc_toolkit.chart.layout import ChartPlan, Dot, ErrorMark, Line, Polyline, Rect, Text, ZeroMark
from scc_toolkit.chart.panels import build_tooltip
from scc_toolkit.chart.state import DashboardState

logger = logging.getLogger(__name__)

MIN_CANVAS_WIDTH = 400
MIN_CANVAS_HEIGHT = 300

# Text ops are laid out in a box this wide around their anchor
_TEXT_BOX_WIDTH = 1000.0

_H_FLAGS = {
    "left": Qt.AlignmentFlag.AlignLeft,
    "center": Qt.AlignmentFlag.AlignHCenter,
    "right": Qt.AlignmentFlag.AlignRight,
}
_V_FLAGS = {
    "top": Qt.AlignmentFlag.AlignTop,
    "middle": Qt.AlignmentFlag.AlignVCenter,
    "bottom": Qt.AlignmentFlag.AlignBottom,
}


class ChartCanvas(QWidget):
    """
    Interactive chart view.

    Signals:
        pointHovered(object): HitResult under the pointer, or None
    """

    pointHovered = Signal(object)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._state = DashboardState()
        self._plan: Optional[ChartPlan] = None
        self._hover: Optional[HitResult] = None

        self.setMouseTracking(True)
        self.setMinimumSize(MIN_CANVAS_WIDTH, MIN_CANVAS_HEIGHT)

    @property
    def state(self) -> DashboardState:
        return self._state

    @property
    def hovered(self) -> Optional[HitResult]:
        return self._hover

    def set_state(self, state: DashboardState) -> None:
        """Replace the displayed snapshot and repaint."""
        self._state = state
        self._plan = None
        self.update()

    def chart_config(self) -> ChartConfig:
        """Chart configuration matching the current widget size."""
        return ChartConfig(
            width=max(self.width(), MIN_CANVAS_WIDTH),
            height=max(self.height(), MIN_CANVAS_HEIGHT),
        )

    def plan(self) -> ChartPlan:
        """Composed plan for the current state and size (cached until either changes)."""
        if self._plan is None:
            self._plan = self._state.compose(self.chart_config())
        return self._plan

    # ─────────────────────────────────────────────────────────────────────────
    # Qt events
    # ─────────────────────────────────────────────────────────────────────────

    def resizeEvent(self, event):
        self._plan = None
        super().resizeEvent(event)

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        try:
            paint_plan(painter, self.plan())
        finally:
            painter.end()

    def mouseMoveEvent(self, event):
        pos = event.position()
        self.hover_at(pos.x(), pos.y())
        if self._hover is not None:
            QToolTip.showText(event.globalPosition().toPoint(), tooltip_html(self._hover), self)
        else:
            QToolTip.hideText()
        super().mouseMoveEvent(event)

    def leaveEvent(self, event):
        self._set_hover(None)
        QToolTip.hideText()
        super().leaveEvent(event)

    def hover_at(self, x: float, y: float) -> Optional[HitResult]:
        """Hit-test a widget position and update the hovered point."""
        hit = self._state.hit_test(x, y, self.chart_config())
        self._set_hover(hit)
        return hit

    def _set_hover(self, hit: Optional[HitResult]) -> None:
        if hit == self._hover:
            return
        self._hover = hit
        self.pointHovered.emit(hit)


def tooltip_html(hit: HitResult) -> str:
    """Rich-text tooltip for a hit-test result."""
    content = build_tooltip(hit)
    rows = "".join(f"<br>{html.escape(label)}: {html.escape(value)}" for label, value in content.rows)
    return f"<b>{html.escape(content.title)}</b>{rows}"


def _color(name: str, alpha: float = 1.0) -> QColor:
    color = QColor(name)
    color.setAlphaF(max(0.0, min(1.0, alpha)))
    return color


def _font(size: float, bold: bool) -> QFont:
    font = QFont()
    font.setPixelSize(max(1, int(round(size))))
    font.setBold(bold)
    return font


def paint_plan(painter: QPainter, plan: ChartPlan) -> None:
    """Paint every op of a plan in order."""
    for op in plan.ops:
        painter.save()
        try:
            _paint_op(painter, op)
        finally:
            painter.restore()


def _paint_op(painter: QPainter, op) -> None:
    if isinstance(op, Rect):
        painter.fillRect(QRectF(op.x, op.y, op.width, op.height), _color(op.fill))

    elif isinstance(op, Line):
        pen = QPen(_color(op.color, op.alpha), op.width)
        if op.dash:
            # Qt dash lengths are in units of the pen width
            pen.setDashPattern([d / op.width for d in op.dash])
        painter.setPen(pen)
        painter.drawLine(QPointF(op.x1, op.y1), QPointF(op.x2, op.y2))

    elif isinstance(op, Polyline):
        pen = QPen(_color(op.color, op.alpha), op.width)
        pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
        painter.setPen(pen)
        painter.drawPolyline(QPolygonF([QPointF(x, y) for x, y in op.points]))

    elif isinstance(op, Dot):
        painter.setPen(QPen(_color(op.outline), 1.0))
        painter.setBrush(_color(op.color))
        painter.drawEllipse(QPointF(op.x, op.y), op.radius, op.radius)

    elif isinstance(op, ErrorMark):
        pen = QPen(_color(op.color), op.width)
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        painter.setPen(pen)
        s = op.size
        painter.drawLine(QPointF(op.x - s, op.y - s), QPointF(op.x + s, op.y + s))
        painter.drawLine(QPointF(op.x + s, op.y - s), QPointF(op.x - s, op.y + s))

    elif isinstance(op, ZeroMark):
        painter.setPen(_color(op.color))
        painter.setFont(_font(op.size, True))
        box = QRectF(op.x - op.size, op.y - op.size, op.size * 2, op.size * 2)
        painter.drawText(box, Qt.AlignmentFlag.AlignCenter, op.glyph)

    elif isinstance(op, Text):
        _paint_text(painter, op)

    else:
        logger.debug(f"Skipping unsupported op {type(op).__name__}")


def _paint_text(painter: QPainter, op: Text) -> None:
    painter.setPen(_color(op.color, op.alpha))
    painter.setFont(_font(op.size, op.bold))
    height = op.size * 2

    x, y = op.x, op.y
    align, baseline = op.align, op.baseline
    if op.rotation:
        # Qt rotates clockwise; op rotation is counter-clockwise about the anchor
        painter.translate(x, y)
        painter.rotate(-op.rotation)
        x, y = 0.0, 0.0
        align, baseline = "center", "middle"

    left = {"left": x, "center": x - _TEXT_BOX_WIDTH / 2, "right": x - _TEXT_BOX_WIDTH}[align]
    top = {"top": y, "middle": y - height / 2, "bottom": y - height}[baseline]
    painter.drawText(QRectF(left, top, _TEXT_BOX_WIDTH, height), _H_FLAGS[align] | _V_FLAGS[baseline], op.text)
