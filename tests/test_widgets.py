"""Tests for flexible group widgets."""

import pytest
from PyQt6.QtWidgets import QDialog, QLineEdit, QSpinBox

from pyqt_flexgroup.core import DragLocation, DropResult
from pyqt_flexgroup.forms import EditorLifecycle


class FixedSelectionProvider:
    def __init__(self, slug):
        self.slug = slug

    def select_block(self, templates, row_index, parent=None, **context):
        return self.slug


@pytest.fixture
def group_widget(qapp, controller):
    from pyqt_flexgroup.widgets import FlexibleGroupWidget

    return FlexibleGroupWidget(
        controller, label="Layout", block_selection_provider=FixedSelectionProvider("quote"),
    )


def section_labels(widget):
    return [section.title_label.text() for section in widget.section_widgets]


def test_renders_one_section_per_row(group_widget):
    assert section_labels(group_widget) == ["Text", "Image"]
    assert group_widget.row_list.count() == 2
    assert group_widget.add_button.text() == "Add Block"


def test_add_button_appends_selected_block(group_widget):
    group_widget.add_button.click()

    assert section_labels(group_widget) == ["Text", "Image", "Quote"]
    assert group_widget.controller.row_count == 3


def test_section_add_inserts_at_its_position(group_widget):
    group_widget.section_widgets[1].add_button.click()

    assert section_labels(group_widget) == ["Text", "Quote", "Image"]


def test_section_remove_button(group_widget):
    group_widget.section_widgets[0].remove_button.click()

    assert section_labels(group_widget) == ["Image"]
    assert group_widget.controller.collapsible_states == (True,)


def test_toggle_collapses_section_body(group_widget):
    group_widget.section_widgets[0].toggle_button.click()

    section = group_widget.section_widgets[0]
    assert group_widget.controller.collapsible_states == (False, True)
    assert section.is_collapsed
    assert section.body.isHidden()
    assert section.toggle_button.text() == "Expand"


def test_drop_reorders_rows(group_widget):
    group_widget._on_row_dropped(DropResult(DragLocation(0), DragLocation(1)))

    assert section_labels(group_widget) == ["Image", "Text"]
    assert group_widget.controller.lifecycle is EditorLifecycle.MODIFIED


def test_cancelled_drop_keeps_rows(group_widget):
    group_widget._on_row_dropped(DropResult(DragLocation(0)))

    assert section_labels(group_widget) == ["Text", "Image"]
    assert group_widget.controller.lifecycle is EditorLifecycle.PRISTINE


def test_drop_maps_list_positions_past_unresolved_rows(qapp, templates):
    from pyqt_flexgroup.forms import RowOrderController
    from pyqt_flexgroup.protocols import FlexGroupConfig
    from pyqt_flexgroup.widgets import FlexibleGroupWidget

    controller = RowOrderController("layout", templates, config=FlexGroupConfig())
    controller.hydrate([{"blockType": "text"}, {"blockType": "video"}, {"blockType": "image"}])
    widget = FlexibleGroupWidget(controller)

    assert section_labels(widget) == ["Text", "Image"]

    widget._on_row_dropped(DropResult(DragLocation(0), DragLocation(1)))

    assert [row.get("blockType") for row in controller.field_store.rows("layout")] == ["video", "image", "text"]


def test_default_renderer_writes_edits_to_store(group_widget):
    editor = group_widget.section_widgets[0].body.findChild(QLineEdit, "field_body")

    assert editor.text() == "Hello"

    editor.textEdited.emit("Changed")

    assert group_widget.controller.get_field_value(0, "body") == "Changed"


def test_number_fields_accept_stored_strings(qapp):
    from pyqt_flexgroup.forms import BlockTemplate, FieldDefinition, RowOrderController
    from pyqt_flexgroup.protocols import FlexGroupConfig
    from pyqt_flexgroup.widgets import FlexibleGroupWidget

    counter = BlockTemplate("counter", "Counter", (FieldDefinition("count", field_type="number"),))
    controller = RowOrderController("layout", [counter], config=FlexGroupConfig())
    controller.hydrate([{"blockType": "counter", "count": "3"}, {"blockType": "counter", "count": "abc"}])
    widget = FlexibleGroupWidget(controller)

    first, second = (section.body for section in widget.section_widgets)
    spin_box = first.findChild(QSpinBox, "field_count")
    assert spin_box.value() == 3
    assert second.findChild(QSpinBox, "field_count") is None
    assert second.findChild(QLineEdit, "field_count").text() == "abc"

    spin_box.valueChanged.emit(5)

    assert controller.get_field_value(0, "count") == 5

def test_set_initial_value_rehydrates(group_widget):
    group_widget.controller.add_row(0, "quote")

    group_widget.set_initial_value([{"blockType": "image", "src": "b.png"}])

    assert section_labels(group_widget) == ["Image"]
    assert group_widget.controller.lifecycle is EditorLifecycle.PRISTINE


def test_add_row_dialog_choice(qapp, templates):
    from pyqt_flexgroup.widgets import AddRowDialog

    dialog = AddRowDialog(templates, row_index=2, modal_slug="flexible-layout")
    dialog.template_buttons["image"].click()

    assert dialog.selected_slug == "image"
    assert dialog.result() == QDialog.DialogCode.Accepted
    assert dialog.objectName() == "flexible-layout"
