"""
Reorderable QListWidget for flexible row groups.

Reports every finished drag as a DropResult so the row controller, not the
widget, decides how the underlying stores are permuted.
"""

from PyQt6.QtWidgets import QListWidget
from PyQt6.QtCore import pyqtSignal, Qt

from pyqt_flexgroup.core.drop_result import DEFAULT_DROPPABLE_ID, DragLocation, DropResult


class ReorderableListWidget(QListWidget):
    """QListWidget that turns internal drag-and-drop moves into DropResults.

    A drop that leaves the dragged item where it started (dropped outside the
    list or onto itself) is reported without a destination.
    """

    row_dropped = pyqtSignal(object)  # DropResult

    def __init__(self, droppable_id: str = DEFAULT_DROPPABLE_ID, parent=None):
        """Initialize reorderable list widget.

        Args:
            droppable_id: Identifier reported in every DragLocation
            parent: Parent widget
        """
        super().__init__(parent)
        self.droppable_id = droppable_id
        self.setDragDropMode(QListWidget.DragDropMode.InternalMove)
        self.setDefaultDropAction(Qt.DropAction.MoveAction)
        self.setSelectionMode(QListWidget.SelectionMode.SingleSelection)

    def dropEvent(self, event):
        """Handle drop event and emit a DropResult with pre-move indices."""
        source_items = self.selectedItems()
        if not source_items:
            super().dropEvent(event)
            return

        source_index = self.row(source_items[0])

        super().dropEvent(event)

        target_index = self.row(source_items[0])
        self.row_dropped.emit(self.build_drop_result(source_index, target_index))

    def build_drop_result(self, source_index: int, target_index: int) -> DropResult:
        """Build the DropResult for a drag from ``source_index`` to ``target_index``."""
        source = DragLocation(source_index, self.droppable_id)
        if target_index < 0 or target_index == source_index:
            return DropResult(source=source, destination=None)
        return DropResult(source=source, destination=DragLocation(target_index, self.droppable_id))
