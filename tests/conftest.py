"""pytest configuration and fixtures for pyqt-flexgroup tests."""

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for tests."""
    app = QApplication.instance() or QApplication([])
    yield app
    # Don't quit - may cause issues with other tests


@pytest.fixture
def templates():
    """Block templates used across tests: text, image and quote."""
    from pyqt_flexgroup.forms.block_templates import BlockTemplate, FieldDefinition

    return [
        BlockTemplate("text", "Text", (FieldDefinition("body", default=""),)),
        BlockTemplate("image", "Image", (
            FieldDefinition("src"),
            FieldDefinition("caption", label="Caption"),
        )),
        BlockTemplate("quote", "Quote", (
            FieldDefinition("quote", default=""),
            FieldDefinition("author"),
        )),
    ]


@pytest.fixture
def controller(templates):
    """Controller over a fresh store, hydrated with a text and an image row."""
    from pyqt_flexgroup.forms.row_order_controller import RowOrderController
    from pyqt_flexgroup.protocols.form_config import FlexGroupConfig

    controller = RowOrderController("layout", templates, config=FlexGroupConfig())
    controller.hydrate([
        {"blockType": "text", "body": "Hello"},
        {"blockType": "image", "src": "a.png", "caption": "A"},
    ])
    return controller
