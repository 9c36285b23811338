"""
Default row body renderer.

Builds one plain editor per visible field of a resolved row. Applications
with their own field widgets implement the RowRenderer protocol instead.
"""

from typing import Any, Optional

from PyQt6.QtWidgets import QCheckBox, QFormLayout, QLineEdit, QSpinBox, QWidget

from pyqt_flexgroup.forms.block_templates import BLOCK_NAME_FIELD, BLOCK_TYPE_FIELD
from pyqt_flexgroup.protocols.row_renderer import RowRenderContext
from pyqt_flexgroup.services.signal_service import SignalService


def _spin_box_value(value: Any) -> Optional[int]:
    """Integer a spin box can show for ``value``; 0 when unset, None if not a number."""
    if value is None:
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class DefaultRowRenderer:
    """RowRenderer that shows a QLineEdit, QCheckBox or QSpinBox per field."""

    def render_row(self, context: RowRenderContext, parent: Optional[Any] = None) -> QWidget:
        body = QWidget(parent)
        layout = QFormLayout(body)
        layout.setContentsMargins(4, 4, 4, 4)

        for field_def in context.field_schema:
            if field_def.is_hidden or field_def.name in (BLOCK_TYPE_FIELD, BLOCK_NAME_FIELD):
                continue
            editor = self._create_editor(field_def, context, body)
            editor.setObjectName(f"field_{field_def.name}")
            layout.addRow(field_def.display_label, editor)

        return body

    def _create_editor(self, field_def, context: RowRenderContext, parent: QWidget) -> QWidget:
        value = context.get_value(field_def.name)
        name = field_def.name
        spin_value = _spin_box_value(value) if field_def.field_type == "number" else None

        if field_def.field_type == "checkbox":
            editor = QCheckBox(parent)
            SignalService.update_widget_value(editor, value)
            editor.toggled.connect(lambda checked: context.set_value(name, checked))
        elif spin_value is not None:
            editor = QSpinBox(parent)
            editor.setRange(-(2 ** 31), 2 ** 31 - 1)
            SignalService.update_widget_value(editor, spin_value)
            editor.valueChanged.connect(lambda number: context.set_value(name, number))
        else:
            # Text editor also covers number fields holding non-numeric values
            editor = QLineEdit(parent)
            SignalService.update_widget_value(editor, value)
            editor.textEdited.connect(lambda text: context.set_value(name, text))
        return editor
