from PyQt6.QtWidgets import QListWidget, QListWidgetItem
from PyQt6.QtCore import Qt, QMimeData, pyqtSignal
from PyQt6.QtGui import QDrag, QColor

from models.component import COMPONENT_COLORS, ComponentKind


class ComponentPalette(QListWidget):
    """Component palette with drag support"""

    componentDoubleClicked = pyqtSignal(str)  # ComponentKind value

    def __init__(self):
        super().__init__()
        self.setDragEnabled(True)
        self.setDefaultDropAction(Qt.DropAction.CopyAction)

        for kind in ComponentKind:
            item = QListWidgetItem(kind.value.capitalize())
            item.setData(Qt.ItemDataRole.UserRole, kind.value)
            item.setForeground(QColor(COMPONENT_COLORS[kind]))
            self.addItem(item)

        self.itemDoubleClicked.connect(self._on_item_double_clicked)

    def _on_item_double_clicked(self, item):
        self.componentDoubleClicked.emit(item.data(Qt.ItemDataRole.UserRole))

    def startDrag(self, supportedActions):
        """Start drag operation"""
        item = self.currentItem()
        if item:
            drag = QDrag(self)
            mime_data = QMimeData()
            mime_data.setText(item.data(Qt.ItemDataRole.UserRole))
            drag.setMimeData(mime_data)
            drag.exec(Qt.DropAction.CopyAction)
