"""
Protocol definitions for collaborators of a flexible row group.

The field-value store, the block selection dialog and the row renderer are
external; these protocols fix only the interface the controller consumes.
"""

from .field_store import FieldValueStore, positional_key
from .block_selection import (
    BlockSelectionProvider,
    register_block_selection_provider,
    get_block_selection_provider,
)
from .row_renderer import RowRenderContext, RowRenderer
from .form_config import FlexGroupConfig, set_form_config, get_form_config

__all__ = [
    "FieldValueStore",
    "positional_key",
    "BlockSelectionProvider",
    "register_block_selection_provider",
    "get_block_selection_provider",
    "RowRenderContext",
    "RowRenderer",
    "FlexGroupConfig",
    "set_form_config",
    "get_form_config",
]
