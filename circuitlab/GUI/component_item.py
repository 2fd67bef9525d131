from PyQt6.QtWidgets import QGraphicsItem
from PyQt6.QtCore import Qt, QPointF, QRectF
from PyQt6.QtGui import QPen, QBrush, QColor, QFont

from models.component import ComponentKind, Terminal

from . import GRID_SIZE

# Terminal offsets from the component center
TERMINAL_OFFSETS = {
    Terminal.TOP: QPointF(0, -20),
    Terminal.BOTTOM: QPointF(0, 20),
    Terminal.LEFT: QPointF(-20, 0),
    Terminal.RIGHT: QPointF(20, 0),
}

TERMINAL_HIT_RADIUS = 6

SYMBOLS = {
    ComponentKind.RESISTOR: 'R',
    ComponentKind.CAPACITOR: 'C',
    ComponentKind.INDUCTOR: 'L',
    ComponentKind.BATTERY: '+ -',
    ComponentKind.GROUND: '⏚',
    ComponentKind.DIODE: '▷|',
    ComponentKind.LED: 'LED',
    ComponentKind.SWITCH: 'SW',
    ComponentKind.BULB: '💡',
    ComponentKind.VOLTMETER: 'V',
    ComponentKind.AMMETER: 'A',
}


class ComponentItem(QGraphicsItem):
    """Graphical component on the canvas, drawn from its render attributes"""

    def __init__(self, component_id, kind, on_moved=None):
        super().__init__()
        self.component_id = component_id
        self.kind = ComponentKind(kind)
        self.render_state = None
        self.on_moved = on_moved  # Called with this item after the user drags it
        self.pending = False  # First terminal of an unfinished wire is on this item

        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemIsMovable)
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemIsSelectable)
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemSendsGeometryChanges)
        self.setAcceptHoverEvents(True)

    def boundingRect(self):
        return QRectF(-40, -35, 80, 70)

    def apply_render_state(self, state):
        """Store new render attributes and repaint"""
        self.render_state = state
        self.setToolTip(self._tooltip())
        self.update()

    def _tooltip(self):
        state = self.render_state
        if state is None:
            return self.component_id
        parts = [self.component_id, "powered" if state.powered else "at rest"]
        if state.value_label:
            parts.append(state.value_label)
        if state.reading_text:
            parts.append(state.reading_text)
        if state.switch_state:
            parts.append(state.switch_state)
        return " | ".join(parts)

    def terminal_at(self, local_pos):
        """Return the terminal under a point in item coordinates, or None"""
        for terminal, offset in TERMINAL_OFFSETS.items():
            if (offset - local_pos).manhattanLength() <= TERMINAL_HIT_RADIUS:
                return terminal
        return None

    def get_terminal_pos(self, terminal):
        """Get scene position of a terminal"""
        return self.pos() + TERMINAL_OFFSETS[Terminal(terminal)]

    def hoverMoveEvent(self, event):
        if event is None:
            return
        if self.terminal_at(event.pos()) is not None:
            self.setCursor(Qt.CursorShape.CrossCursor)
        else:
            self.setCursor(Qt.CursorShape.OpenHandCursor)
        super().hoverMoveEvent(event)

    def paint(self, painter, option=None, widget=None):
        if painter is None:
            return
        state = self.render_state
        color = QColor(state.color if state else '#000000')

        painter.save()

        # Glow halo for bulbs and LEDs
        if state is not None and state.glow > 0:
            halo = QColor(color)
            halo.setAlphaF(0.15 + 0.6 * state.glow)
            painter.setPen(Qt.PenStyle.NoPen)
            painter.setBrush(QBrush(halo))
            radius = 18 + 10 * state.glow
            painter.drawEllipse(QPointF(0, 0), radius, radius)

        if self.isSelected():
            painter.setPen(QPen(Qt.GlobalColor.yellow, 3))
            painter.setBrush(Qt.BrushStyle.NoBrush)
            painter.drawRect(QRectF(-24, -24, 48, 48))

        # Body
        body_pen = QPen(color, 3 if state is not None and state.powered else 2)
        painter.setPen(body_pen)
        painter.setBrush(QBrush(color.lighter(170)))
        painter.drawRoundedRect(QRectF(-16, -14, 32, 28), 4, 4)

        if self.kind is ComponentKind.SWITCH and state is not None:
            self._draw_switch(painter, state.switch_state == "closed")
        else:
            painter.setPen(QPen(Qt.GlobalColor.black))
            painter.drawText(QRectF(-16, -14, 32, 28), Qt.AlignmentFlag.AlignCenter, SYMBOLS[self.kind])

        # Labels
        font = QFont()
        font.setPointSize(7)
        painter.setFont(font)
        painter.setPen(QPen(Qt.GlobalColor.black))
        painter.drawText(-38, -26, self.component_id)
        if state is not None and (state.reading_text or state.value_label):
            painter.drawText(-38, 33, state.reading_text or state.value_label)

        painter.restore()

        # Terminals
        terminal_color = Qt.GlobalColor.darkGreen if self.pending else Qt.GlobalColor.red
        painter.setPen(QPen(terminal_color, 4))
        for offset in TERMINAL_OFFSETS.values():
            painter.drawEllipse(offset, 3, 3)

    def _draw_switch(self, painter, closed):
        painter.setPen(QPen(Qt.GlobalColor.black, 2))
        painter.drawLine(QPointF(-10, 4), QPointF(-4, 4))
        if closed:
            painter.drawLine(QPointF(-4, 4), QPointF(10, 4))
        else:
            painter.drawLine(QPointF(-4, 4), QPointF(8, -8))

    def itemChange(self, change, value):
        if change == QGraphicsItem.GraphicsItemChange.ItemPositionChange and self.scene():
            # Snap to grid
            grid_x = round(value.x() / GRID_SIZE) * GRID_SIZE
            grid_y = round(value.y() / GRID_SIZE) * GRID_SIZE
            return QPointF(grid_x, grid_y)
        elif change == QGraphicsItem.GraphicsItemChange.ItemPositionHasChanged:
            if self.on_moved is not None:
                self.on_moved(self)
        return super().itemChange(change, value)
