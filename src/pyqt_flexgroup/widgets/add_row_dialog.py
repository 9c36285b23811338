"""
Block selection dialog for flexible row groups.

Lists the available block templates; choosing one accepts the dialog with
that template's slug, closing it any other way selects nothing.
"""

import logging
from typing import Any, Optional, Sequence

from PyQt6.QtWidgets import QDialog, QLabel, QPushButton, QVBoxLayout

from pyqt_flexgroup.forms.block_templates import BlockTemplate

logger = logging.getLogger(__name__)


class AddRowDialog(QDialog):
    """Modal dialog offering one button per block template."""

    def __init__(self, templates: Sequence[BlockTemplate], row_index: int,
                 modal_slug: Optional[str] = None, parent=None):
        super().__init__(parent)
        self.row_index = row_index
        self.selected_slug: Optional[str] = None
        self.template_buttons = {}

        if modal_slug:
            self.setObjectName(modal_slug)
        self.setWindowTitle("Add Block")

        layout = QVBoxLayout(self)
        layout.addWidget(QLabel(f"Choose a block to insert at position {row_index + 1}"))

        for template in templates:
            button = QPushButton(template.display_label)
            button.clicked.connect(lambda _=False, slug=template.slug: self.choose(slug))
            layout.addWidget(button)
            self.template_buttons[template.slug] = button

        cancel_button = QPushButton("Cancel")
        cancel_button.clicked.connect(self.reject)
        layout.addWidget(cancel_button)

    def choose(self, slug: str) -> None:
        """Select ``slug`` and accept the dialog."""
        self.selected_slug = slug
        logger.debug(f"Block {slug!r} chosen for position {self.row_index}")
        self.accept()


class DialogBlockSelectionProvider:
    """BlockSelectionProvider backed by AddRowDialog."""

    def select_block(self, templates: Sequence[BlockTemplate], row_index: int,
                     parent: Optional[Any] = None, **context: Any) -> Optional[str]:
        dialog = AddRowDialog(templates, row_index, modal_slug=context.get("modal_slug"), parent=parent)
        if dialog.exec() == QDialog.DialogCode.Accepted:
            return dialog.selected_slug
        return None
