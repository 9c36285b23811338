"""
Widgets for editing flexible row groups.
"""

from .flexible_group_widget import FlexibleGroupWidget
from .row_section import RowSectionWidget
from .row_renderers import DefaultRowRenderer
from .add_row_dialog import AddRowDialog, DialogBlockSelectionProvider

__all__ = [
    "FlexibleGroupWidget",
    "RowSectionWidget",
    "DefaultRowRenderer",
    "AddRowDialog",
    "DialogBlockSelectionProvider",
]
