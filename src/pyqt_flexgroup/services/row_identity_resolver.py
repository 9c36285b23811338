"""
Row identity resolution for flexible row groups.

Rows carry no identity beyond their position, so the block template a row
renders is re-derived on every render from the field store, falling back to
the initial snapshot only while the editor is still pristine.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from pyqt_flexgroup.forms.block_templates import (
    BLOCK_TYPE_FIELD,
    HIDDEN_ROW_FIELDS,
    BlockTemplate,
    BlockTemplateRegistry,
    FieldDefinition,
)
from pyqt_flexgroup.forms.row_commands import EditorLifecycle
from pyqt_flexgroup.protocols.field_store import FieldValueStore, positional_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedRow:
    """Everything the renderer needs for one row position."""
    row_index: int
    block_type: str
    template: BlockTemplate
    field_schema: Tuple[FieldDefinition, ...]
    initial_values: Optional[Mapping[str, Any]] = None
    collapsed: bool = False

    @property
    def label(self) -> str:
        return self.template.display_label


class RowIdentityResolver:
    """Derives each row's block template and initial values for a render."""

    def __init__(self, group_name: str, templates: BlockTemplateRegistry):
        self.group_name = group_name
        self.templates = templates

    @staticmethod
    def _snapshot_row(snapshot: Sequence[Mapping[str, Any]], row_index: int) -> Optional[Mapping[str, Any]]:
        if 0 <= row_index < len(snapshot) and isinstance(snapshot[row_index], Mapping):
            return snapshot[row_index]
        return None

    def resolve_block_type(self, row_index: int, field_store: FieldValueStore,
                           snapshot: Sequence[Mapping[str, Any]],
                           lifecycle: EditorLifecycle) -> Optional[str]:
        """
        Resolve the block type slug rendered at ``row_index``.

        The store wins; the snapshot is only consulted while pristine.
        """
        block_type = field_store.get_value(positional_key(self.group_name, row_index, BLOCK_TYPE_FIELD))
        if not block_type and lifecycle is EditorLifecycle.PRISTINE:
            snapshot_row = self._snapshot_row(snapshot, row_index)
            if snapshot_row is not None:
                block_type = snapshot_row.get(BLOCK_TYPE_FIELD)
        return block_type or None

    def initial_values(self, row_index: int, snapshot: Sequence[Mapping[str, Any]],
                       lifecycle: EditorLifecycle) -> Optional[Mapping[str, Any]]:
        """Snapshot values for a row while pristine; None once the store is authoritative."""
        if lifecycle is not EditorLifecycle.PRISTINE:
            return None
        return self._snapshot_row(snapshot, row_index)

    def effective_schema(self, template: BlockTemplate) -> Tuple[FieldDefinition, ...]:
        """Template fields followed by the two reserved hidden fields."""
        return template.fields + HIDDEN_ROW_FIELDS

    def resolve_row(self, row_index: int, field_store: FieldValueStore,
                    snapshot: Sequence[Mapping[str, Any]], lifecycle: EditorLifecycle,
                    collapsible_states: Sequence[bool] = ()) -> Optional[ResolvedRow]:
        """Resolve one row, or return None if it has no known template."""
        block_type = self.resolve_block_type(row_index, field_store, snapshot, lifecycle)
        template = self.templates.find(block_type)
        if template is None:
            logger.debug(f"Skipping {self.group_name}.{row_index}: unresolved block type {block_type!r}")
            return None

        expanded = collapsible_states[row_index] if row_index < len(collapsible_states) else True
        return ResolvedRow(
            row_index=row_index,
            block_type=block_type,
            template=template,
            field_schema=self.effective_schema(template),
            initial_values=self.initial_values(row_index, snapshot, lifecycle),
            collapsed=not expanded,
        )

    def resolve_rows(self, row_count: int, field_store: FieldValueStore,
                     snapshot: Sequence[Mapping[str, Any]], lifecycle: EditorLifecycle,
                     collapsible_states: Sequence[bool] = ()) -> List[ResolvedRow]:
        """Resolve every position; unresolvable rows are omitted without shifting others."""
        resolved = []
        for row_index in range(row_count):
            row = self.resolve_row(row_index, field_store, snapshot, lifecycle, collapsible_states)
            if row is not None:
                resolved.append(row)
        return resolved
