"""Tests for drag-and-drop reordering."""

from pyqt_flexgroup.core import DragLocation, DropResult
from pyqt_flexgroup.forms import EditorLifecycle
from pyqt_flexgroup.services import DragReorderAdapter


def test_cancelled_drop_is_a_no_op(controller):
    adapter = DragReorderAdapter(controller)
    before = (controller.row_count, controller.collapsible_states, controller.field_store.snapshot())

    moved = adapter.on_drag_end(DropResult(source=DragLocation(0), destination=None))

    assert moved is False
    assert (controller.row_count, controller.collapsible_states, controller.field_store.snapshot()) == before
    assert controller.lifecycle is EditorLifecycle.PRISTINE


def test_drop_moves_row(controller):
    adapter = DragReorderAdapter(controller)

    moved = adapter.on_drag_end(DropResult(source=DragLocation(0), destination=DragLocation(1)))

    assert moved is True
    assert [row.block_type for row in controller.resolve_rows()] == ["image", "text"]
    assert controller.lifecycle is EditorLifecycle.MODIFIED


def test_drop_onto_foreign_droppable_is_ignored(controller):
    adapter = DragReorderAdapter(controller, droppable_id="flexible-drop")

    moved = adapter.on_drag_end(DropResult(
        source=DragLocation(0), destination=DragLocation(1, droppable_id="sidebar"),
    ))

    assert moved is False
    assert controller.lifecycle is EditorLifecycle.PRISTINE


def test_drop_in_place_still_marks_modified(controller):
    adapter = DragReorderAdapter(controller)

    adapter.on_drag_end(DropResult(source=DragLocation(1), destination=DragLocation(1)))

    assert [row.block_type for row in controller.resolve_rows()] == ["text", "image"]
    assert controller.lifecycle is EditorLifecycle.MODIFIED
