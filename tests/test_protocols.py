"""Tests for protocols, configuration and template registry."""

import pytest

from pyqt_flexgroup.forms import BlockTemplate, BlockTemplateRegistry, DuplicateTemplateError, TemplateNotFound
from pyqt_flexgroup.protocols import FieldValueStore, FlexGroupConfig, get_form_config, positional_key, set_form_config
from pyqt_flexgroup.protocols import form_config
from pyqt_flexgroup.services import FlagContextManager, PositionalFieldStore


@pytest.fixture
def restore_config(monkeypatch):
    monkeypatch.setattr(form_config, "_form_config", None)


def test_default_config(restore_config):
    config = get_form_config()

    assert config.singular_label == "Block"
    assert config.strict_indices is False
    assert config.reject_edits_during_row_operation is True


def test_set_form_config(restore_config):
    set_form_config(FlexGroupConfig(singular_label="Section"))

    assert get_form_config().singular_label == "Section"


def test_positional_store_implements_protocol():
    assert isinstance(PositionalFieldStore(), FieldValueStore)
    assert positional_key("layout", 3, "body") == "layout.3.body"


def test_registry_rejects_duplicate_slugs():
    with pytest.raises(DuplicateTemplateError):
        BlockTemplateRegistry([BlockTemplate("text"), BlockTemplate("text")])


def test_registry_lookup(templates):
    registry = BlockTemplateRegistry(templates)

    assert registry.slugs == ["text", "image", "quote"]
    assert registry.get("quote").label == "Quote"
    assert registry.find("video") is None
    assert registry.find(None) is None
    assert registry.find(["text"]) is None
    assert ["text"] not in registry
    with pytest.raises(TemplateNotFound):
        registry.get("video")


def test_flag_context_manager_restores_on_exception():
    class Holder:
        _in_row_operation = False
        _in_hydration = False

    holder = Holder()

    with pytest.raises(RuntimeError):
        with FlagContextManager.row_operation_context(holder):
            assert holder._in_row_operation is True
            raise RuntimeError("boom")

    assert holder._in_row_operation is False
    assert FlagContextManager.any_flag_set(holder) is False


def test_flag_context_manager_rejects_unknown_flags():
    class Holder:
        _in_row_operation = False

    with pytest.raises(ValueError):
        with FlagContextManager.manage_flags(Holder(), _not_a_flag=True):
            pass
