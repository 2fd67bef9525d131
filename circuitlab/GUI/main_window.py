"""Main application window with MVC architecture"""

import logging

from controllers.circuit_controller import CircuitController
from controllers.file_controller import FileController
from models.errors import InvalidEditError
from models.topology import TopologyModel
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QFileDialog,
    QLabel,
    QMainWindow,
    QMessageBox,
    QSplitter,
    QVBoxLayout,
    QWidget,
)

from .circuit_canvas import CircuitCanvasView
from .component_palette import ComponentPalette
from .properties_panel import PropertiesPanel

logger = logging.getLogger(__name__)

WINDOW_TITLE = "circuitlab"
STATUS_TIMEOUT_MS = 4000


class MainWindow(QMainWindow):
    """Main application window

    Builds the UI and routes user input to the controllers. Views stay in
    sync through the CircuitController's observer events.
    """

    def __init__(self):
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(1200, 800)

        # Create model (single source of truth)
        self.model = TopologyModel()
        self.circuit_ctrl = CircuitController(self.model)
        self.file_ctrl = FileController(self.model, self.circuit_ctrl)

        self.init_ui()
        self.create_menu_bar()
        self._connect_signals()

    def init_ui(self):
        """Initialize user interface"""
        splitter = QSplitter(Qt.Orientation.Horizontal)

        left_panel = QWidget()
        left_layout = QVBoxLayout(left_panel)
        left_layout.addWidget(QLabel("Component Palette"))
        self.palette = ComponentPalette()
        left_layout.addWidget(self.palette)
        instructions = QLabel(
            "Drag components from palette to canvas\n"
            "Click a terminal, then another terminal to wire\n"
            "Esc cancels a wire in progress\n"
            "Double-click a switch to toggle it\n"
            "Delete key removes the selection"
        )
        instructions.setWordWrap(True)
        left_layout.addWidget(instructions)
        splitter.addWidget(left_panel)

        self.canvas = CircuitCanvasView(self.circuit_ctrl)
        splitter.addWidget(self.canvas)

        self.properties_panel = PropertiesPanel()
        splitter.addWidget(self.properties_panel)

        splitter.setSizes([200, 750, 250])
        self.setCentralWidget(splitter)
        self.statusBar().showMessage("Ready")

    def create_menu_bar(self):
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        new_action = QAction("&New", self)
        new_action.setShortcut(QKeySequence.StandardKey.New)
        new_action.triggered.connect(self._on_new)
        file_menu.addAction(new_action)

        open_action = QAction("&Open...", self)
        open_action.setShortcut(QKeySequence.StandardKey.Open)
        open_action.triggered.connect(self._on_load)
        file_menu.addAction(open_action)

        save_action = QAction("&Save", self)
        save_action.setShortcut(QKeySequence.StandardKey.Save)
        save_action.triggered.connect(self._on_save)
        file_menu.addAction(save_action)

        save_as_action = QAction("Save &As...", self)
        save_as_action.setShortcut(QKeySequence.StandardKey.SaveAs)
        save_as_action.triggered.connect(self._on_save_as)
        file_menu.addAction(save_as_action)

        file_menu.addSeparator()
        exit_action = QAction("E&xit", self)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        edit_menu = menu_bar.addMenu("&Edit")
        delete_action = QAction("&Delete Selected", self)
        delete_action.triggered.connect(self.canvas.delete_selected)
        edit_menu.addAction(delete_action)

        cancel_action = QAction("&Cancel Wire", self)
        cancel_action.triggered.connect(self.circuit_ctrl.cancel_wire)
        edit_menu.addAction(cancel_action)

    def _connect_signals(self):
        """Connect signals between UI components"""
        self.palette.componentDoubleClicked.connect(self.canvas.add_component_at_center)
        self.canvas.componentSelected.connect(self.on_component_selected)
        self.canvas.statusMessage.connect(self.show_status)
        self.properties_panel.property_changed.connect(self.on_property_changed)
        self.properties_panel.switch_toggle_requested.connect(self.circuit_ctrl.toggle_switch)
        self.circuit_ctrl.add_observer(self._on_model_changed)

    def _on_model_changed(self, event, data):
        if event == 'circuit_solved':
            self.properties_panel.refresh_state()
            self.statusBar().showMessage(f"{data.loop_count} loop(s) solved", STATUS_TIMEOUT_MS)
        elif event == 'component_removed':
            current = self.properties_panel.current_component
            if current is not None and current.component_id == data:
                self.properties_panel.show_no_selection()
        elif event in ('circuit_cleared', 'model_loaded'):
            self.properties_panel.show_no_selection()

    def show_status(self, message):
        self.statusBar().showMessage(message, STATUS_TIMEOUT_MS)

    def on_component_selected(self, component_id):
        self.properties_panel.show_component(self.model.get_component(component_id) if component_id else None)

    def on_property_changed(self, component_id, field, text):
        """Apply an edit from the properties panel"""
        try:
            self.circuit_ctrl.edit_component(component_id, field, text)
        except InvalidEditError as e:
            # The controller kept the previous value; show it again
            self.show_status(str(e))
            self.properties_panel.show_component(self.model.get_component(component_id))

    # --- File operations ---

    def _on_new(self):
        """Create a new circuit"""
        if self.model.components:
            reply = QMessageBox.question(
                self,
                "New Circuit",
                "Current circuit will be lost. Continue?",
                QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            )
            if reply == QMessageBox.StandardButton.No:
                return
        self.file_ctrl.new_circuit()
        self.setWindowTitle(self.file_ctrl.get_window_title(WINDOW_TITLE))

    def _on_save(self):
        """Quick save to current file"""
        if self.file_ctrl.has_file():
            try:
                self.file_ctrl.save_circuit(self.file_ctrl.current_file)
                self.show_status(f"Saved to {self.file_ctrl.current_file}")
            except OSError as e:
                QMessageBox.critical(self, "Error", f"Failed to save: {e}")
        else:
            self._on_save_as()

    def _on_save_as(self):
        """Save circuit to a new file"""
        filename, _ = QFileDialog.getSaveFileName(self, "Save Circuit", "", "JSON Files (*.json);;All Files (*)")
        if filename:
            try:
                self.file_ctrl.save_circuit(filename)
                self.setWindowTitle(self.file_ctrl.get_window_title(WINDOW_TITLE))
                self.show_status(f"Saved to {filename}")
            except OSError as e:
                QMessageBox.critical(self, "Error", f"Failed to save: {e}")

    def _on_load(self):
        """Load circuit from file"""
        filename, _ = QFileDialog.getOpenFileName(self, "Load Circuit", "", "JSON Files (*.json);;All Files (*)")
        if filename:
            try:
                self.file_ctrl.load_circuit(filename)
                self.setWindowTitle(self.file_ctrl.get_window_title(WINDOW_TITLE))
                self.show_status(f"Loaded {filename}")
            except (OSError, ValueError) as e:
                logger.error("Failed to load %s: %s", filename, e)
                QMessageBox.critical(self, "Error", f"Failed to load: {e}")
