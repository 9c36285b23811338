"""Base configuration class for flexible row groups.

Provides hooks for applications to customize row group behavior.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class FlexGroupConfig:
    """Base configuration for flexible row group behavior.

    Applications can subclass this to provide custom configuration.

    Attributes:
        singular_label: Label used for the "Add <label>" button
        modal_slug_prefix: Prefix of the block selection dialog id
        droppable_id: Droppable id reported by the reorderable list
        strict_indices: Raise RowIndexError on out-of-range row operations
            instead of ignoring them
        reject_edits_during_row_operation: Reject field edits that arrive
            while an add/remove/move is being applied
        debug_dispatch: Log every row command at INFO
    """

    singular_label: str = "Block"
    modal_slug_prefix: str = "flexible"
    droppable_id: str = "flexible-drop"
    strict_indices: bool = False
    reject_edits_during_row_operation: bool = True
    debug_dispatch: bool = False


# Global config instance (set by application)
_form_config: Optional[FlexGroupConfig] = None


def set_form_config(config: FlexGroupConfig) -> None:
    """Set the global flexible group configuration.

    Args:
        config: FlexGroupConfig instance
    """
    global _form_config
    _form_config = config


def get_form_config() -> FlexGroupConfig:
    """Get the current flexible group configuration.

    Returns:
        Current FlexGroupConfig or default if not set
    """
    if _form_config is None:
        return FlexGroupConfig()
    return _form_config
