"""
Flexible Group Widget for PyQt6.

Renders a RowOrderController as a reorderable list of row sections with an
"Add <block>" button. The widget never edits rows itself: every user
action goes through the controller and the list is rebuilt from
controller.resolve_rows() after each change.
"""

import logging
from typing import Any, List, Mapping, Optional, Sequence

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import QLabel, QListWidgetItem, QPushButton, QVBoxLayout, QWidget

from pyqt_flexgroup.core.drop_result import DragLocation, DropResult
from pyqt_flexgroup.core.reorderable_list_widget import ReorderableListWidget
from pyqt_flexgroup.forms.block_templates import BLOCK_NAME_FIELD
from pyqt_flexgroup.forms.row_order_controller import RowOrderController
from pyqt_flexgroup.protocols.block_selection import BlockSelectionProvider
from pyqt_flexgroup.protocols.row_renderer import RowRenderContext, RowRenderer
from pyqt_flexgroup.services.drag_reorder_adapter import DragReorderAdapter
from pyqt_flexgroup.services.row_identity_resolver import ResolvedRow
from pyqt_flexgroup.widgets.row_renderers import DefaultRowRenderer
from pyqt_flexgroup.widgets.row_section import RowSectionWidget

logger = logging.getLogger(__name__)


class FlexibleGroupWidget(QWidget):
    """
    Editor widget for one flexible row group.

    Usage:
        controller = RowOrderController("layout", templates)
        widget = FlexibleGroupWidget(controller, label="Layout")
        widget.set_initial_value([{"blockType": "text", "body": "Hello"}])
    """

    # Signals
    rows_changed = pyqtSignal()

    def __init__(self, controller: RowOrderController, renderer: Optional[RowRenderer] = None,
                 label: str = "", singular_label: Optional[str] = None,
                 block_selection_provider: Optional[BlockSelectionProvider] = None, parent=None):
        super().__init__(parent)
        self.controller = controller
        self.renderer = renderer or DefaultRowRenderer()
        self.label = label
        self.singular_label = singular_label or controller.config.singular_label
        self.block_selection_provider = block_selection_provider

        self.drag_adapter = DragReorderAdapter(controller, controller.config.droppable_id)
        self.section_widgets: List[RowSectionWidget] = []
        # Row index of each list entry, in list order, as of the last rebuild
        self._rendered_row_indices: List[int] = []

        self.setup_ui()
        self.controller.add_listener(self.refresh)
        self.destroyed.connect(self._unsubscribe)
        self.refresh()

    def setup_ui(self):
        """Setup the user interface."""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        self.header_label = QLabel(self.label)
        self.header_label.setStyleSheet("font-weight: bold; font-size: 14px;")
        self.header_label.setVisible(bool(self.label))
        layout.addWidget(self.header_label)

        self.row_list = ReorderableListWidget(droppable_id=self.controller.config.droppable_id)
        self.row_list.row_dropped.connect(self._on_row_dropped)
        layout.addWidget(self.row_list)

        self.add_button = QPushButton(f"Add {self.singular_label}")
        self.add_button.clicked.connect(lambda: self.open_add_row_dialog(self.controller.row_count))
        layout.addWidget(self.add_button)

    def _unsubscribe(self):
        self.controller.remove_listener(self.refresh)

    # ========== HYDRATION ==========

    def set_initial_value(self, snapshot: Sequence[Mapping[str, Any]]) -> bool:
        """Hand a new initial snapshot to the controller (loads the store too)."""
        return self.controller.hydrate(snapshot)

    # ========== RENDERING ==========

    def _build_context(self, row: ResolvedRow) -> RowRenderContext:
        row_index = row.row_index
        return RowRenderContext(
            field_schema=row.field_schema,
            row_index=row_index,
            initial_values=row.initial_values,
            collapsed=row.collapsed,
            add_row_at=self.open_add_row_dialog,
            remove_row_at=self.controller.remove_row,
            dispatch_collapsible=self.controller.dispatch_collapsible,
            get_value=lambda field_name: self.controller.get_field_value(row_index, field_name),
            set_value=lambda field_name, value: self.controller.set_field_value(row_index, field_name, value),
        )

    def refresh(self):
        """Rebuild every row section from the controller's resolved rows."""
        self.row_list.clear()
        self.section_widgets = []
        self._rendered_row_indices = []

        for row in self.controller.resolve_rows():
            body = self.renderer.render_row(self._build_context(row))
            block_name = self.controller.get_field_value(row.row_index, BLOCK_NAME_FIELD)
            section = RowSectionWidget(row, body, block_name=block_name)
            section.add_requested.connect(self.open_add_row_dialog)
            section.remove_requested.connect(self.controller.remove_row)
            section.toggle_requested.connect(self.controller.toggle_collapsed)

            item = QListWidgetItem()
            item.setData(Qt.ItemDataRole.UserRole, row.row_index)
            item.setSizeHint(section.sizeHint())
            self.row_list.addItem(item)
            self.row_list.setItemWidget(item, section)

            self.section_widgets.append(section)
            self._rendered_row_indices.append(row.row_index)

        logger.debug(f"Rendered {len(self.section_widgets)} of {self.controller.row_count} rows")
        self.rows_changed.emit()

    # ========== USER ACTIONS ==========

    def open_add_row_dialog(self, row_index: int) -> bool:
        return self.controller.open_add_row_dialog(
            row_index, parent=self, provider=self.block_selection_provider,
        )

    def _to_row_location(self, location: Optional[DragLocation]) -> Optional[DragLocation]:
        """Translate a list position into the row index rendered there."""
        if location is None or not 0 <= location.index < len(self._rendered_row_indices):
            return None
        return DragLocation(self._rendered_row_indices[location.index], location.droppable_id)

    def _on_row_dropped(self, result: DropResult):
        source = self._to_row_location(result.source)
        if source is None:
            self.refresh()
            return
        moved = self.drag_adapter.on_drag_end(
            DropResult(source=source, destination=self._to_row_location(result.destination))
        )
        if not moved:
            # Qt already moved the item; restore the list from the controller
            self.refresh()
