"""
Core utilities.

Foundational state containers and widgets with no domain-specific logic.
"""

from .collapsible_state import (
    CollapsibleAction,
    CollapsibleActionType,
    CollapsibleStateStore,
    collapsible_reducer,
)
from .drop_result import DragLocation, DropResult
from .reorderable_list_widget import ReorderableListWidget

__all__ = [
    "CollapsibleAction",
    "CollapsibleActionType",
    "CollapsibleStateStore",
    "collapsible_reducer",
    "DragLocation",
    "DropResult",
    "ReorderableListWidget",
]
