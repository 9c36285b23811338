"""Tests for row identity resolution."""

import pytest

from pyqt_flexgroup.forms.block_templates import BlockTemplateRegistry
from pyqt_flexgroup.forms.row_commands import EditorLifecycle
from pyqt_flexgroup.services import PositionalFieldStore, RowIdentityResolver

PRISTINE = EditorLifecycle.PRISTINE
MODIFIED = EditorLifecycle.MODIFIED


@pytest.fixture
def resolver(templates):
    return RowIdentityResolver("layout", BlockTemplateRegistry(templates))


def test_store_block_type_wins_over_snapshot(resolver):
    store = PositionalFieldStore({"layout.0.blockType": "quote"})
    snapshot = [{"blockType": "text"}]

    assert resolver.resolve_block_type(0, store, snapshot, PRISTINE) == "quote"


def test_snapshot_fallback_only_while_pristine(resolver):
    store = PositionalFieldStore()
    snapshot = [{"blockType": "text"}]

    assert resolver.resolve_block_type(0, store, snapshot, PRISTINE) == "text"
    assert resolver.resolve_block_type(0, store, snapshot, MODIFIED) is None


def test_unresolvable_rows_are_skipped_without_shifting(resolver):
    store = PositionalFieldStore()
    store.load_rows("layout", [
        {"blockType": "text"},
        {"blockType": "video"},
        {"blockType": "image"},
    ])

    rows = resolver.resolve_rows(3, store, (), MODIFIED)

    assert [row.row_index for row in rows] == [0, 2]
    assert [row.block_type for row in rows] == ["text", "image"]


def test_effective_schema_appends_hidden_fields(resolver, templates):
    store = PositionalFieldStore({"layout.0.blockType": "image"})

    row = resolver.resolve_row(0, store, (), MODIFIED)

    names = [field_def.name for field_def in row.field_schema]
    assert names == ["src", "caption", "blockType", "blockName"]
    assert all(field_def.is_hidden for field_def in row.field_schema[-2:])
    assert row.label == "Image"


def test_initial_values_come_from_snapshot_only_while_pristine(resolver):
    store = PositionalFieldStore()
    snapshot = [{"blockType": "text", "body": "Hello"}]

    pristine_row = resolver.resolve_row(0, store, snapshot, PRISTINE)
    assert pristine_row.initial_values == {"blockType": "text", "body": "Hello"}

    store.set_value("layout.0.blockType", "text")
    modified_row = resolver.resolve_row(0, store, snapshot, MODIFIED)
    assert modified_row.initial_values is None


def test_collapsed_flag_follows_collapsible_states(resolver):
    store = PositionalFieldStore()
    store.load_rows("layout", [{"blockType": "text"}, {"blockType": "text"}])

    rows = resolver.resolve_rows(2, store, (), MODIFIED, (True, False))

    assert [row.collapsed for row in rows] == [False, True]


@pytest.mark.parametrize("bad_block_type", [["image"], {"slug": "image"}, 3])
def test_non_string_block_type_is_skipped(resolver, bad_block_type):
    store = PositionalFieldStore({"layout.0.blockType": bad_block_type, "layout.1.blockType": "text"})
    snapshot = [{"blockType": bad_block_type}, {"blockType": "text"}]

    rows = resolver.resolve_rows(2, store, snapshot, PRISTINE)

    assert [row.row_index for row in rows] == [1]
