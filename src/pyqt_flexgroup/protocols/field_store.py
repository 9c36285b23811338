"""Field value store protocol.

The store owns every leaf value of every row, namespaced by positional key
``<group>.<rowIndex>.<field>``. Row operations must shift embedded indices
so that position stays the only row identity.
"""

from typing import Any, Iterable, List, Mapping, Protocol, Sequence, runtime_checkable


def positional_key(group_name: str, row_index: int, field_name: str) -> str:
    """Build the store key for one field of one row."""
    return f"{group_name}.{row_index}.{field_name}"


@runtime_checkable
class FieldValueStore(Protocol):
    """Protocol for the external field-value store consumed by the row controller."""

    def add_row(self, group_name: str, row_index: int,
                field_schema: Iterable[Any], block_type: str) -> bool:
        """Create a row at ``row_index``, shifting rows at ``>= row_index`` up by one.

        Returns False, leaving the store untouched, if ``row_index`` is out of range.
        """
        ...

    def remove_row(self, group_name: str, row_index: int) -> bool:
        """Delete row ``row_index``, shifting rows at ``> row_index`` down by one."""
        ...

    def move_row(self, group_name: str, move_from_index: int, move_to_index: int) -> bool:
        """Relocate a row's whole subtree using list splice semantics. False if not applied."""
        ...

    def get_value(self, key: str, default: Any = None) -> Any:
        ...

    def set_value(self, key: str, value: Any) -> None:
        ...

    def row_indices(self, group_name: str) -> List[int]:
        """Return the sorted distinct row indices materialized for a group."""
        ...

    def load_rows(self, group_name: str, rows: Iterable[Mapping[str, Any]]) -> None:
        """Replace a group's contents with one dict per row position."""
        ...

    def sync_rows(self, group_name: str, rows: Sequence[Mapping[str, Any]]) -> None:
        """Resize a group to ``len(rows)`` positions, seeding only keys not already stored."""
        ...

    def rows(self, group_name: str) -> List[Mapping[str, Any]]:
        """Collect a group back into a list of per-row dicts."""
        ...
