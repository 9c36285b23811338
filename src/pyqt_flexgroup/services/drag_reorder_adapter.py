"""Translate drag-and-drop drop results into row moves."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from pyqt_flexgroup.core.drop_result import DropResult

if TYPE_CHECKING:
    from pyqt_flexgroup.forms.row_order_controller import RowOrderController

logger = logging.getLogger(__name__)


class DragReorderAdapter:
    """
    Forwards completed drags to ``RowOrderController.move_row``.

    Drops without a destination (cancelled, or released outside the list)
    and drops onto a different droppable are ignored.
    """

    def __init__(self, controller: 'RowOrderController', droppable_id: Optional[str] = None):
        self.controller = controller
        self.droppable_id = droppable_id

    def on_drag_end(self, result: DropResult) -> bool:
        """Handle a drop result. Returns True if a move was dispatched."""
        if result.destination is None:
            logger.debug(f"Drag from {result.source.index} cancelled; no move")
            return False

        if self.droppable_id is not None and result.destination.droppable_id != self.droppable_id:
            logger.debug(f"Drop onto foreign droppable {result.destination.droppable_id!r} ignored")
            return False

        return self.controller.move_row(result.source.index, result.destination.index)
