"""
Positional Field Store - in-memory field-value store for flexible row groups.

Every leaf value lives under a positional key ``<group>.<rowIndex>.<field>``.
Row operations rewrite the embedded ``rowIndex`` of every affected key so
that values, hidden fields and nested subtrees travel with their row.

Framework-agnostic - can be used by any UI framework (PyQt, Textual, etc.).
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from pyqt_flexgroup.forms.block_templates import BLOCK_TYPE_FIELD
from pyqt_flexgroup.protocols.field_store import positional_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreChangeEvent:
    """Immutable event describing one store edit."""
    kind: str                               # ADD_ROW, REMOVE_ROW, MOVE_ROW, SET_VALUE, LOAD_ROWS, SYNC_ROWS
    group_name: Optional[str] = None
    row_index: Optional[int] = None
    move_to_index: Optional[int] = None
    key: Optional[str] = None


StoreListener = Callable[[StoreChangeEvent], None]


def _field_name_and_default(field_def: Any) -> Tuple[Optional[str], Any]:
    """Read name/default from a FieldDefinition or a plain mapping."""
    if isinstance(field_def, Mapping):
        return field_def.get("name"), field_def.get("default")
    return getattr(field_def, "name", None), getattr(field_def, "default", None)


def flatten_value(prefix: str, value: Any) -> Dict[str, Any]:
    """Flatten nested dicts/lists into dotted paths below ``prefix``."""
    if isinstance(value, Mapping):
        items = value.items()
    elif isinstance(value, list):
        items = enumerate(value)
    else:
        return {prefix: value}

    flat: Dict[str, Any] = {}
    for sub_key, sub_value in items:
        flat.update(flatten_value(f"{prefix}.{sub_key}", sub_value))
    return flat


def _listify(node: Any) -> Any:
    """Turn dicts keyed by consecutive integers back into lists."""
    if not isinstance(node, dict):
        return node
    converted = {key: _listify(value) for key, value in node.items()}
    if converted and all(key.isdigit() for key in converted):
        indices = sorted(int(key) for key in converted)
        if indices == list(range(len(indices))):
            return [converted[str(i)] for i in indices]
    return converted


def unflatten_paths(flat: Mapping[str, Any]) -> Dict[str, Any]:
    """Inverse of ``flatten_value`` for one row's field paths."""
    root: Dict[str, Any] = {}
    for path, value in flat.items():
        parts = path.split(".")
        node = root
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[parts[-1]] = value
    return {key: _listify(value) for key, value in root.items()}


class PositionalFieldStore:
    """
    In-memory FieldValueStore keyed by positional keys.

    Usage:
        store = PositionalFieldStore()
        store.add_row("layout", 0, text_block.fields, "text")
        store.get_value("layout.0.blockType")  # "text"
        store.move_row("layout", 0, 1)
    """

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values: Dict[str, Any] = dict(values or {})
        self._listeners: List[StoreListener] = []

    # ========== KEY HANDLING ==========

    @staticmethod
    def _split_key(group_name: str, key: str) -> Optional[Tuple[int, str]]:
        """Return (row_index, field_path) if ``key`` belongs to ``group_name``."""
        prefix = f"{group_name}."
        if not key.startswith(prefix):
            return None
        index_part, sep, field_path = key[len(prefix):].partition(".")
        if not sep or not index_part.isdigit():
            return None
        return int(index_part), field_path

    def _rewrite_group(self, group_name: str, remap: Callable[[int], Optional[int]]) -> None:
        """Rewrite every key of a group through ``remap``; None drops the key."""
        rewritten: Dict[str, Any] = {}
        for key, value in self._values.items():
            parsed = self._split_key(group_name, key)
            if parsed is None:
                rewritten[key] = value
                continue
            row_index, field_path = parsed
            new_index = remap(row_index)
            if new_index is not None:
                rewritten[positional_key(group_name, new_index, field_path)] = value
        self._values = rewritten

    # ========== QUERIES ==========

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def get_value(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def snapshot(self) -> Dict[str, Any]:
        """Return a shallow copy of every stored key."""
        return dict(self._values)

    def row_indices(self, group_name: str) -> List[int]:
        indices = set()
        for key in self._values:
            parsed = self._split_key(group_name, key)
            if parsed is not None:
                indices.add(parsed[0])
        return sorted(indices)

    def row_count(self, group_name: str) -> int:
        """Number of row positions spanned by a group (highest index + 1)."""
        indices = self.row_indices(group_name)
        return indices[-1] + 1 if indices else 0

    def row_values(self, group_name: str, row_index: int) -> Dict[str, Any]:
        """Return one row's flat ``{field_path: value}`` mapping."""
        values: Dict[str, Any] = {}
        for key, value in self._values.items():
            parsed = self._split_key(group_name, key)
            if parsed is not None and parsed[0] == row_index:
                values[parsed[1]] = value
        return values

    def rows(self, group_name: str) -> List[Dict[str, Any]]:
        """Collect a group back into a list of per-row dicts (gaps become empty dicts)."""
        return [
            unflatten_paths(self.row_values(group_name, row_index))
            for row_index in range(self.row_count(group_name))
        ]

    # ========== EDITS ==========

    def set_value(self, key: str, value: Any) -> None:
        self._values[key] = value
        self._notify(StoreChangeEvent("SET_VALUE", key=key))

    def load_rows(self, group_name: str, rows: Iterable[Mapping[str, Any]]) -> None:
        """Replace a group's contents with ``rows``, one dict per position."""
        self._rewrite_group(group_name, lambda _: None)
        for row_index, row in enumerate(rows):
            for field_name, value in row.items():
                self._values.update(flatten_value(positional_key(group_name, row_index, field_name), value))
        logger.debug(f"Loaded {self.row_count(group_name)} rows into group {group_name!r}")
        self._notify(StoreChangeEvent("LOAD_ROWS", group_name=group_name))

    def sync_rows(self, group_name: str, rows: Sequence[Mapping[str, Any]]) -> None:
        """
        Make a group span exactly ``len(rows)`` positions.

        Keys already stored win; missing keys are seeded from ``rows`` and
        every position gets a ``blockType`` key so it is materialized even
        when its snapshot row holds nothing storable. Rows past the end are
        dropped.
        """
        row_total = len(rows)
        self._rewrite_group(group_name, lambda i: i if i < row_total else None)
        for row_index, row in enumerate(rows):
            row = row if isinstance(row, Mapping) else {}
            for field_name, value in row.items():
                for key, leaf in flatten_value(positional_key(group_name, row_index, field_name), value).items():
                    self._values.setdefault(key, leaf)
            self._values.setdefault(positional_key(group_name, row_index, BLOCK_TYPE_FIELD), row.get(BLOCK_TYPE_FIELD))
        logger.debug(f"Synced group {group_name!r} to {row_total} rows")
        self._notify(StoreChangeEvent("SYNC_ROWS", group_name=group_name))

    def add_row(self, group_name: str, row_index: int,
                field_schema: Iterable[Any], block_type: str) -> bool:
        count = self.row_count(group_name)
        if not 0 <= row_index <= count:
            logger.debug(f"ADD_ROW ignored: {group_name}.{row_index} outside 0..{count}")
            return False

        self._rewrite_group(group_name, lambda i: i + 1 if i >= row_index else i)
        for field_def in field_schema:
            name, default = _field_name_and_default(field_def)
            if name:
                self._values[positional_key(group_name, row_index, name)] = default
        self._values[positional_key(group_name, row_index, BLOCK_TYPE_FIELD)] = block_type
        logger.debug(f"ADD_ROW {group_name}.{row_index} blockType={block_type!r}")
        self._notify(StoreChangeEvent("ADD_ROW", group_name=group_name, row_index=row_index))
        return True

    def remove_row(self, group_name: str, row_index: int) -> bool:
        count = self.row_count(group_name)
        if not 0 <= row_index < count:
            logger.debug(f"REMOVE_ROW ignored: {group_name}.{row_index} outside 0..{count - 1}")
            return False

        def remap(i: int) -> Optional[int]:
            if i == row_index:
                return None
            return i - 1 if i > row_index else i

        self._rewrite_group(group_name, remap)
        logger.debug(f"REMOVE_ROW {group_name}.{row_index}")
        self._notify(StoreChangeEvent("REMOVE_ROW", group_name=group_name, row_index=row_index))
        return True

    def move_row(self, group_name: str, move_from_index: int, move_to_index: int) -> bool:
        count = self.row_count(group_name)
        if not (0 <= move_from_index < count and 0 <= move_to_index < count):
            logger.debug(f"MOVE_ROW ignored: {move_from_index} -> {move_to_index} with {count} rows")
            return False

        order = list(range(count))
        order.insert(move_to_index, order.pop(move_from_index))
        new_positions = {old_index: new_index for new_index, old_index in enumerate(order)}

        self._rewrite_group(group_name, new_positions.get)
        logger.debug(f"MOVE_ROW {group_name}: {move_from_index} -> {move_to_index}")
        self._notify(StoreChangeEvent(
            "MOVE_ROW", group_name=group_name, row_index=move_from_index, move_to_index=move_to_index,
        ))
        return True

    # ========== LISTENERS ==========

    def add_listener(self, listener: StoreListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: StoreListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, event: StoreChangeEvent) -> None:
        for listener in list(self._listeners):
            listener(event)
