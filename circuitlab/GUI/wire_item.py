from PyQt6.QtWidgets import QGraphicsPathItem
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QPen, QColor, QPainterPath

from simulation.render_state import IDLE_WIRE_STROKE, IDLE_WIRE_WIDTH


class WireItem(QGraphicsPathItem):
    """Wire connecting two component terminals with an orthogonal path"""

    def __init__(self, wire_id, start_item, start_term, end_item, end_term):
        super().__init__()
        self.wire_id = wire_id
        self.start_item = start_item
        self.start_term = start_term
        self.end_item = end_item
        self.end_term = end_term
        self.render_state = None

        self.setPen(QPen(QColor(IDLE_WIRE_STROKE), IDLE_WIRE_WIDTH))
        self.setFlag(QGraphicsPathItem.GraphicsItemFlag.ItemIsSelectable)
        self.setZValue(-1)
        self.update_position()

    def connects(self, item):
        return item is self.start_item or item is self.end_item

    def update_position(self):
        """Recompute the path from the current terminal positions"""
        self.prepareGeometryChange()
        start = self.start_item.get_terminal_pos(self.start_term)
        end = self.end_item.get_terminal_pos(self.end_term)

        path = QPainterPath()
        path.moveTo(start)
        path.lineTo(end.x(), start.y())
        path.lineTo(end)
        self.setPath(path)

    def apply_render_state(self, state):
        """Green and thicker while current flows through this wire"""
        self.render_state = state
        self.setPen(QPen(QColor(state.stroke), state.stroke_width))
        self.update()

    def paint(self, painter, option=None, widget=None):
        """Override paint to show selection highlight"""
        if painter is None:
            return
        if self.isSelected():
            painter.setPen(QPen(Qt.GlobalColor.yellow, self.pen().width() + 1))
        else:
            painter.setPen(self.pen())
        painter.drawPath(self.path())
