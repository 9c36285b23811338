"""
Row section widget - the header and body of one row in a flexible group.
"""

import logging
from typing import Optional

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QFrame, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from pyqt_flexgroup.services.row_identity_resolver import ResolvedRow

logger = logging.getLogger(__name__)


class RowSectionWidget(QFrame):
    """
    One row: a header with the block label and row controls, and a body
    that is hidden while the row is collapsed.
    """

    add_requested = pyqtSignal(int)      # insert position (this row's index)
    remove_requested = pyqtSignal(int)   # row index
    toggle_requested = pyqtSignal(int)   # row index

    def __init__(self, row: ResolvedRow, body: Optional[QWidget] = None,
                 block_name: Optional[str] = None, parent=None):
        super().__init__(parent)
        self.row = row
        self.body = body
        self.setFrameShape(QFrame.Shape.StyledPanel)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(2)

        header = QHBoxLayout()
        title = row.label if not block_name else f"{row.label}: {block_name}"
        self.title_label = QLabel(title)
        self.title_label.setStyleSheet("font-weight: bold;")
        header.addWidget(self.title_label)
        header.addStretch()

        self.toggle_button = QPushButton("Expand" if row.collapsed else "Collapse")
        self.toggle_button.clicked.connect(lambda: self.toggle_requested.emit(self.row.row_index))
        header.addWidget(self.toggle_button)

        self.add_button = QPushButton("Add")
        self.add_button.clicked.connect(lambda: self.add_requested.emit(self.row.row_index))
        header.addWidget(self.add_button)

        self.remove_button = QPushButton("Remove")
        self.remove_button.clicked.connect(lambda: self.remove_requested.emit(self.row.row_index))
        header.addWidget(self.remove_button)

        layout.addLayout(header)

        if body is not None:
            layout.addWidget(body)
            body.setVisible(not row.collapsed)

    @property
    def is_collapsed(self) -> bool:
        return self.row.collapsed
