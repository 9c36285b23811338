"""
Row commands for flexible row groups.

A RowCommand pairs the field-store edit with the matching collapsible-state
action, so a row operation is one object consumed by one coordinator and the
two position-keyed stores can never be edited in different directions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple

from pyqt_flexgroup.core.collapsible_state import CollapsibleAction
from pyqt_flexgroup.protocols.field_store import FieldValueStore


class EditorLifecycle(Enum):
    """Whether rows may still fall back to the initial snapshot."""
    PRISTINE = "pristine"
    MODIFIED = "modified"


class RowCommandKind(Enum):
    ADD = "ADD_ROW"
    REMOVE = "REMOVE_ROW"
    MOVE = "MOVE_ROW"


@dataclass(frozen=True)
class RowCommand:
    """One positional row edit, applied to every position-keyed store."""
    kind: RowCommandKind
    row_index: int
    move_to_index: Optional[int] = None
    block_type: Optional[str] = None
    field_schema: Tuple[Any, ...] = ()

    @classmethod
    def add(cls, row_index: int, block_type: str, field_schema) -> 'RowCommand':
        return cls(RowCommandKind.ADD, row_index, block_type=block_type, field_schema=tuple(field_schema))

    @classmethod
    def remove(cls, row_index: int) -> 'RowCommand':
        return cls(RowCommandKind.REMOVE, row_index)

    @classmethod
    def move(cls, move_from_index: int, move_to_index: int) -> 'RowCommand':
        return cls(RowCommandKind.MOVE, move_from_index, move_to_index=move_to_index)

    @property
    def row_count_delta(self) -> int:
        if self.kind is RowCommandKind.ADD:
            return 1
        if self.kind is RowCommandKind.REMOVE:
            return -1
        return 0

    def apply_to_field_store(self, field_store: FieldValueStore, group_name: str) -> bool:
        """Issue this command's edit to the external field-value store; True if it was applied."""
        if self.kind is RowCommandKind.ADD:
            return field_store.add_row(group_name, self.row_index, self.field_schema, self.block_type)
        elif self.kind is RowCommandKind.REMOVE:
            return field_store.remove_row(group_name, self.row_index)
        else:
            return field_store.move_row(group_name, self.row_index, self.move_to_index)

    def collapsible_action(self) -> CollapsibleAction:
        """The CollapsibleAction that mirrors this command."""
        if self.kind is RowCommandKind.ADD:
            return CollapsibleAction.insert_at(self.row_index)
        if self.kind is RowCommandKind.REMOVE:
            return CollapsibleAction.remove_at(self.row_index)
        return CollapsibleAction.move(self.row_index, self.move_to_index)

    def describe(self) -> str:
        if self.kind is RowCommandKind.MOVE:
            return f"{self.kind.value}({self.row_index} -> {self.move_to_index})"
        if self.kind is RowCommandKind.ADD:
            return f"{self.kind.value}({self.row_index}, {self.block_type!r})"
        return f"{self.kind.value}({self.row_index})"
