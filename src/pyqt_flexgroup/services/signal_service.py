"""
Signal Service for row widgets.

Context managers for widget signal blocking, so that pushing a stored value
into an editor never feeds back into the store as a user edit.
"""

from contextlib import contextmanager
from PyQt6.QtWidgets import QWidget, QCheckBox, QLineEdit, QSpinBox
import logging

logger = logging.getLogger(__name__)


class SignalService:
    """
    Service for signal blocking around programmatic widget updates.

    Examples:
        # Block signals (context manager):
        with SignalService.block_signals(checkbox):
            checkbox.setChecked(True)

        # Push a value into any supported editor:
        SignalService.update_widget_value(line_edit, "hello")
    """

    @staticmethod
    @contextmanager
    def block_signals(*widgets: QWidget):
        """Context manager for blocking widget signals."""
        for widget in widgets:
            if widget is not None:
                widget.blockSignals(True)

        try:
            yield
        finally:
            for widget in widgets:
                if widget is not None:
                    widget.blockSignals(False)

    @staticmethod
    def update_widget_value(widget: QWidget, value) -> None:
        """Update widget value with signals blocked."""
        with SignalService.block_signals(widget):
            if isinstance(widget, QCheckBox):
                widget.setChecked(bool(value))
            elif isinstance(widget, QLineEdit):
                widget.setText(str(value) if value is not None else "")
            elif isinstance(widget, QSpinBox):
                widget.setValue(value if value is not None else 0)
            else:
                raise ValueError(f"Cannot auto-detect setter for {type(widget).__name__}")
