import logging

from PyQt6.QtWidgets import QGraphicsView, QGraphicsScene, QGraphicsLineItem
from PyQt6.QtCore import Qt, QLineF, pyqtSignal
from PyQt6.QtGui import QPen, QColor, QPainter

from models.component import ComponentKind
from models.errors import CircuitError, SelfConnectionError

from . import GRID_SIZE
from .component_item import ComponentItem
from .wire_item import WireItem

logger = logging.getLogger(__name__)


class CircuitCanvasView(QGraphicsView):
    """
    Circuit drawing canvas.

    A pure view of the CircuitController: user gestures are forwarded to
    the controller, and the scene is updated only from observer events.
    """

    componentSelected = pyqtSignal(str)  # component_id, "" when nothing is selected
    statusMessage = pyqtSignal(str)

    def __init__(self, controller):
        super().__init__()
        self.controller = controller
        self.scene = QGraphicsScene()
        self.setScene(self.scene)
        self.setSceneRect(-500, -500, 1000, 1000)

        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setDragMode(QGraphicsView.DragMode.NoDrag)
        self.setViewportUpdateMode(QGraphicsView.ViewportUpdateMode.FullViewportUpdate)

        self.components = {}  # id -> ComponentItem
        self.wires = {}  # id -> WireItem
        self.temp_wire_line = None  # Preview line while a wire is pending
        self._syncing = False

        self.draw_grid()
        self.setAcceptDrops(True)
        self.setMouseTracking(True)
        self.scene.selectionChanged.connect(self._on_selection_changed)

        self.controller.add_observer(self._on_model_changed)
        self.rebuild_from_model()

    def draw_grid(self):
        """Draw background grid"""
        pen = QPen(QColor(220, 220, 220), 0.5)
        pen.setCosmetic(True)
        for x in range(-500, 501, GRID_SIZE * 2):
            self.scene.addLine(x, -500, x, 500, pen)
        for y in range(-500, 501, GRID_SIZE * 2):
            self.scene.addLine(-500, y, 500, y, pen)

    # --- Observer ---

    def _on_model_changed(self, event, data):
        """Mirror controller events onto the scene"""
        if event == 'component_added':
            self._add_component_item(data)
        elif event == 'component_removed':
            self._remove_component_item(data)
        elif event == 'component_moved':
            self._move_component_item(data)
        elif event == 'wire_added':
            self._add_wire_item(data)
            # A completed click-wire leaves the controller idle
            if self.controller.pending_terminal is None:
                self._clear_wire_preview()
        elif event == 'wire_removed':
            self._remove_wire_item(data)
        elif event in ('circuit_cleared', 'model_loaded'):
            self.rebuild_from_model()
        elif event == 'circuit_solved':
            self.refresh_render_state()
        elif event == 'wire_pending':
            self._start_wire_preview(*data)
        elif event in ('wire_cancelled', 'wire_rejected'):
            self._clear_wire_preview()
        elif event == 'edit_rejected':
            self.statusMessage.emit(str(data))

    def rebuild_from_model(self):
        """Recreate every item from the controller's model"""
        self._clear_wire_preview()
        for item in list(self.components.values()) + list(self.wires.values()):
            self.scene.removeItem(item)
        self.components.clear()
        self.wires.clear()

        model = self.controller.model
        for component in model.components.values():
            self._add_component_item(component)
        for wire in model.wires.values():
            self._add_wire_item(wire)
        self.refresh_render_state()

    def refresh_render_state(self):
        """Pull render attributes for every item from the controller"""
        for component_id, item in self.components.items():
            item.apply_render_state(self.controller.get_render_state(component_id))
        for wire_id, item in self.wires.items():
            item.apply_render_state(self.controller.get_wire_render_state(wire_id))

    def _add_component_item(self, component):
        item = ComponentItem(component.component_id, component.kind, on_moved=self._on_item_moved)
        self._syncing = True
        item.setPos(*component.position)
        self._syncing = False
        self.scene.addItem(item)
        self.components[component.component_id] = item
        item.apply_render_state(self.controller.get_render_state(component.component_id))

    def _remove_component_item(self, component_id):
        item = self.components.pop(component_id, None)
        if item is not None:
            self.scene.removeItem(item)

    def _move_component_item(self, component):
        item = self.components.get(component.component_id)
        if item is None:
            return
        self._syncing = True
        item.setPos(*component.position)
        self._syncing = False
        self._reroute_connected_wires(item)

    def _add_wire_item(self, wire):
        start_item = self.components.get(wire.start_component_id)
        end_item = self.components.get(wire.end_component_id)
        if start_item is None or end_item is None:
            logger.warning("Wire %s references a component with no item", wire.wire_id)
            return
        item = WireItem(wire.wire_id, start_item, wire.start_terminal, end_item, wire.end_terminal)
        self.scene.addItem(item)
        self.wires[wire.wire_id] = item

    def _remove_wire_item(self, wire_id):
        item = self.wires.pop(wire_id, None)
        if item is not None:
            self.scene.removeItem(item)

    def _reroute_connected_wires(self, component_item):
        for wire in self.wires.values():
            if wire.connects(component_item):
                wire.update_position()

    def _on_item_moved(self, item):
        if self._syncing:
            return
        self._reroute_connected_wires(item)
        self.controller.move_component(item.component_id, (item.pos().x(), item.pos().y()))

    # --- Wire preview ---

    def _start_wire_preview(self, component_id, terminal):
        self._clear_wire_preview()
        item = self.components.get(component_id)
        if item is None:
            return
        item.pending = True
        item.update()
        start = item.get_terminal_pos(terminal)
        self.temp_wire_line = QGraphicsLineItem(QLineF(start, start))
        self.temp_wire_line.setPen(QPen(QColor("#4caf50"), 2, Qt.PenStyle.DashLine))
        self.scene.addItem(self.temp_wire_line)

    def _clear_wire_preview(self):
        for item in self.components.values():
            if item.pending:
                item.pending = False
                item.update()
        if self.temp_wire_line is not None:
            self.scene.removeItem(self.temp_wire_line)
            self.temp_wire_line = None

    # --- Gestures ---

    def add_component_at(self, kind, scene_pos):
        grid_x = round(scene_pos.x() / GRID_SIZE) * GRID_SIZE
        grid_y = round(scene_pos.y() / GRID_SIZE) * GRID_SIZE
        return self.controller.place_component(kind, (grid_x, grid_y))

    def add_component_at_center(self, kind):
        center = self.mapToScene(self.viewport().rect().center())
        return self.add_component_at(kind, center)

    def dragEnterEvent(self, event):
        if event is None:
            return
        mime_data = event.mimeData()
        if mime_data is not None and mime_data.hasText():
            event.acceptProposedAction()

    def dragMoveEvent(self, event):
        if event is None:
            return
        event.acceptProposedAction()

    def dropEvent(self, event):
        """Handle component drop from palette"""
        if event is None:
            return
        mime_data = event.mimeData()
        if mime_data is None:
            return
        kind = mime_data.text()
        if kind not in {k.value for k in ComponentKind}:
            return
        self.add_component_at(kind, self.mapToScene(event.position().toPoint()))
        event.acceptProposedAction()

    def mousePressEvent(self, event):
        if event is None:
            return
        if event.button() == Qt.MouseButton.LeftButton:
            scene_pos = self.mapToScene(event.position().toPoint())
            hit = self._terminal_hit(scene_pos)
            if hit is not None:
                self.handle_terminal_click(*hit)
                return
        super().mousePressEvent(event)

    def _terminal_hit(self, scene_pos):
        for item in self.scene.items(scene_pos):
            if isinstance(item, ComponentItem):
                terminal = item.terminal_at(item.mapFromScene(scene_pos))
                if terminal is not None:
                    return item.component_id, terminal
        return None

    def handle_terminal_click(self, component_id, terminal):
        """Forward a terminal click to the wiring state machine"""
        try:
            wire_id = self.controller.begin_or_complete_wire(component_id, terminal)
        except SelfConnectionError as e:
            self.statusMessage.emit(str(e))
            return
        except CircuitError as e:
            logger.error("Wire failed: %s", e)
            self.statusMessage.emit(str(e))
            return
        if wire_id is not None:
            self.statusMessage.emit(f"Connected {wire_id}")
        else:
            self.statusMessage.emit(f"Wiring from {component_id} [{terminal.value}]; click another terminal or press Esc")

    def mouseMoveEvent(self, event):
        if event is None:
            return
        if self.temp_wire_line is not None:
            line = self.temp_wire_line.line()
            line.setP2(self.mapToScene(event.position().toPoint()))
            self.temp_wire_line.setLine(line)
        super().mouseMoveEvent(event)

    def mouseDoubleClickEvent(self, event):
        """Double-click on a switch toggles it"""
        if event is None:
            return
        item = self.itemAt(event.position().toPoint())
        if isinstance(item, ComponentItem) and item.kind is ComponentKind.SWITCH:
            self.controller.toggle_switch(item.component_id)
            return
        super().mouseDoubleClickEvent(event)

    def keyPressEvent(self, event):
        if event is None:
            return
        if event.key() == Qt.Key.Key_Escape:
            self.controller.cancel_wire()
        elif event.key() in (Qt.Key.Key_Delete, Qt.Key.Key_Backspace):
            self.delete_selected()
        else:
            super().keyPressEvent(event)

    def delete_selected(self):
        """Delete all selected components and wires"""
        selected = self.scene.selectedItems()
        for item in selected:
            if isinstance(item, WireItem):
                self.controller.delete_wire(item.wire_id)
        for item in selected:
            if isinstance(item, ComponentItem):
                self.controller.delete_component(item.component_id)

    def _on_selection_changed(self):
        try:
            selected = [i for i in self.scene.selectedItems() if isinstance(i, ComponentItem)]
        except RuntimeError:
            return
        self.componentSelected.emit(selected[0].component_id if selected else "")
