"""
Row group forms.

Block templates, row commands and the RowOrderController that keeps every
position-keyed store of a flexible group in step.
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .block_templates import BlockTemplate, BlockTemplateRegistry, FieldDefinition
    from .row_commands import EditorLifecycle, RowCommand, RowCommandKind
    from .row_order_controller import RowOrderController

_EXPORTS = {
    "BlockTemplate": ("pyqt_flexgroup.forms.block_templates", "BlockTemplate"),
    "BlockTemplateRegistry": ("pyqt_flexgroup.forms.block_templates", "BlockTemplateRegistry"),
    "FieldDefinition": ("pyqt_flexgroup.forms.block_templates", "FieldDefinition"),
    "HIDDEN_ROW_FIELDS": ("pyqt_flexgroup.forms.block_templates", "HIDDEN_ROW_FIELDS"),
    "EditorLifecycle": ("pyqt_flexgroup.forms.row_commands", "EditorLifecycle"),
    "RowCommand": ("pyqt_flexgroup.forms.row_commands", "RowCommand"),
    "RowCommandKind": ("pyqt_flexgroup.forms.row_commands", "RowCommandKind"),
    "RowOrderController": ("pyqt_flexgroup.forms.row_order_controller", "RowOrderController"),
    "FlexGroupError": ("pyqt_flexgroup.forms.exceptions", "FlexGroupError"),
    "TemplateNotFound": ("pyqt_flexgroup.forms.exceptions", "TemplateNotFound"),
    "DuplicateTemplateError": ("pyqt_flexgroup.forms.exceptions", "DuplicateTemplateError"),
    "RowIndexError": ("pyqt_flexgroup.forms.exceptions", "RowIndexError"),
}


def __getattr__(name: str):
    if name in _EXPORTS:
        module_name, attr = _EXPORTS[name]
        module = importlib.import_module(module_name)
        value = getattr(module, attr)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = list(_EXPORTS.keys())
