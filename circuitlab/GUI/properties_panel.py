from PyQt6.QtWidgets import (QWidget, QVBoxLayout, QLabel, QLineEdit,
                             QFormLayout, QGroupBox, QPushButton)
from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QFont

from models.component import EDITABLE_FIELDS, ComponentKind

from .format_utils import PROPERTY_UNITS, format_value

FIELD_LABELS = {
    'resistance': 'Resistance:',
    'source_voltage': 'Voltage:',
    'forward_drop_voltage': 'Forward drop:',
    'rated_current': 'Rated current:',
}


class PropertiesPanel(QWidget):
    """Panel for editing component properties and reading its solved state"""

    # Signal emitted when the user applies a new value
    property_changed = pyqtSignal(str, str, str)  # component_id, field, text
    switch_toggle_requested = pyqtSignal(str)  # component_id

    def __init__(self):
        super().__init__()
        self.current_component = None
        self.field_inputs = {}
        self.init_ui()

    def init_ui(self):
        """Initialize the properties panel UI"""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(5, 5, 5, 5)

        title = QLabel("Properties")
        title_font = QFont()
        title_font.setBold(True)
        title_font.setPointSize(10)
        title.setFont(title_font)
        layout.addWidget(title)

        self.properties_group = QGroupBox("Component Properties")
        self.form_layout = QFormLayout(self.properties_group)
        self.form_layout.setLabelAlignment(Qt.AlignmentFlag.AlignRight)

        self.id_label = QLabel("-")
        self.id_label.setStyleSheet("QLabel { color: #666; }")
        self.form_layout.addRow("ID:", self.id_label)

        self.type_label = QLabel("-")
        self.type_label.setStyleSheet("QLabel { color: #666; }")
        self.form_layout.addRow("Type:", self.type_label)

        for field, label in FIELD_LABELS.items():
            line_edit = QLineEdit()
            line_edit.setPlaceholderText("e.g., 4.7k, 9V")
            line_edit.returnPressed.connect(self.apply_changes)
            self.form_layout.addRow(label, line_edit)
            self.field_inputs[field] = line_edit

        layout.addWidget(self.properties_group)

        self.apply_button = QPushButton("Apply Changes")
        self.apply_button.clicked.connect(self.apply_changes)
        layout.addWidget(self.apply_button)

        self.switch_button = QPushButton("Toggle Switch")
        self.switch_button.clicked.connect(self._on_toggle_clicked)
        layout.addWidget(self.switch_button)

        # Solved state (read-only)
        self.state_group = QGroupBox("Live Values")
        state_form = QFormLayout(self.state_group)
        self.current_label = QLabel("-")
        self.drop_label = QLabel("-")
        self.powered_label = QLabel("-")
        self.reading_label = QLabel("-")
        state_form.addRow("Current:", self.current_label)
        state_form.addRow("Voltage drop:", self.drop_label)
        state_form.addRow("Powered:", self.powered_label)
        state_form.addRow("Reading:", self.reading_label)
        layout.addWidget(self.state_group)

        help_text = QLabel(
            "Select a component on the canvas to edit its properties.\n\n"
            "Value examples: 100, 4.7k, 1M, 9V, 20mA"
        )
        help_text.setWordWrap(True)
        layout.addWidget(help_text)
        layout.addStretch()

        self.show_no_selection()

    def show_no_selection(self):
        """Display message when no component is selected"""
        self.current_component = None
        self.properties_group.setEnabled(False)
        self.id_label.setText("-")
        self.type_label.setText("-")
        for field, line_edit in self.field_inputs.items():
            line_edit.clear()
            self._set_field_visible(field, True)
        self.apply_button.setEnabled(False)
        self.switch_button.setVisible(False)
        for label in (self.current_label, self.drop_label, self.powered_label, self.reading_label):
            label.setText("-")

    def show_component(self, component):
        """Display properties for the given ComponentData"""
        if component is None:
            self.show_no_selection()
            return

        self.current_component = component
        self.properties_group.setEnabled(True)
        self.id_label.setText(component.component_id)
        self.type_label.setText(component.kind.value.capitalize())

        any_editable = False
        for field, line_edit in self.field_inputs.items():
            editable = component.kind in EDITABLE_FIELDS.get(field, ())
            self._set_field_visible(field, editable)
            if editable:
                line_edit.setText(format_value(getattr(component, field), PROPERTY_UNITS[field]))
                any_editable = True
        self.apply_button.setEnabled(any_editable)
        self.switch_button.setVisible(component.kind is ComponentKind.SWITCH)
        self.refresh_state()

    def refresh_state(self):
        """Update the live values of the shown component"""
        component = self.current_component
        if component is None:
            return
        self.current_label.setText(format_value(component.current, "A"))
        self.drop_label.setText(format_value(component.voltage_drop, "V"))
        self.powered_label.setText("yes" if component.powered else "no")
        if component.reading is not None:
            unit = "A" if component.kind is ComponentKind.AMMETER else "V"
            self.reading_label.setText(format_value(component.reading, unit))
        else:
            self.reading_label.setText("-")
        if component.kind is ComponentKind.SWITCH:
            self.switch_button.setText("Open Switch" if component.closed else "Close Switch")

    def _set_field_visible(self, field, visible):
        self.field_inputs[field].setVisible(visible)
        label = self.form_layout.labelForField(self.field_inputs[field])
        if label is not None:
            label.setVisible(visible)

    def apply_changes(self):
        """Emit one property_changed per edited field"""
        component = self.current_component
        if component is None:
            return
        for field, line_edit in self.field_inputs.items():
            if component.kind not in EDITABLE_FIELDS.get(field, ()):
                continue
            text = line_edit.text().strip()
            if text != format_value(getattr(component, field), PROPERTY_UNITS[field]):
                self.property_changed.emit(component.component_id, field, text)

    def _on_toggle_clicked(self):
        if self.current_component is not None:
            self.switch_toggle_requested.emit(self.current_component.component_id)
