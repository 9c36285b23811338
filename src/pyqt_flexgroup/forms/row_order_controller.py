"""
Row order controller for flexible row groups.

Keeps the three position-indexed containers of a row group consistent:
the external field-value store, the collapsible state store and the row
count. Every add/remove/move is built as one RowCommand and applied in a
single step; listeners are notified only after all stores agree, so no
render can observe a row count that differs from the collapsible length.

Framework-agnostic - the PyQt widgets subscribe through add_listener().
"""

import logging
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from pyqt_flexgroup.core.collapsible_state import (
    CollapsibleAction,
    CollapsibleActionType,
    CollapsibleStates,
    CollapsibleStateStore,
)
from pyqt_flexgroup.forms.block_templates import BlockTemplate, BlockTemplateRegistry
from pyqt_flexgroup.forms.exceptions import RowIndexError
from pyqt_flexgroup.forms.row_commands import EditorLifecycle, RowCommand
from pyqt_flexgroup.protocols.block_selection import BlockSelectionProvider, get_block_selection_provider
from pyqt_flexgroup.protocols.field_store import FieldValueStore, positional_key
from pyqt_flexgroup.protocols.form_config import FlexGroupConfig, get_form_config
from pyqt_flexgroup.services.flag_context_manager import FlagContextManager
from pyqt_flexgroup.services.positional_field_store import PositionalFieldStore
from pyqt_flexgroup.services.row_identity_resolver import ResolvedRow, RowIdentityResolver

logger = logging.getLogger(__name__)

_MISSING = object()

# Collapsible actions row sections may dispatch; structural ones go through RowCommand
_ROW_LOCAL_ACTIONS = {CollapsibleActionType.TOGGLE, CollapsibleActionType.SET}


class RowOrderController:
    """
    Orchestrates add/remove/move for one flexible row group.

    Usage:
        controller = RowOrderController("layout", [text_block, image_block])
        controller.hydrate([{"blockType": "text"}, {"blockType": "image"}])
        controller.add_row(1, "text")
        controller.move_row(0, 2)
        rows = controller.resolve_rows()
    """

    def __init__(self, group_name: str,
                 templates: Union[BlockTemplateRegistry, Iterable[BlockTemplate]],
                 field_store: Optional[FieldValueStore] = None,
                 initial_snapshot: Optional[Sequence[Mapping[str, Any]]] = None,
                 config: Optional[FlexGroupConfig] = None):
        self.group_name = group_name
        self.templates = templates if isinstance(templates, BlockTemplateRegistry) else BlockTemplateRegistry(templates)
        self.field_store = field_store if field_store is not None else PositionalFieldStore()
        self.config = config or get_form_config()
        self.resolver = RowIdentityResolver(group_name, self.templates)
        self.collapsible = CollapsibleStateStore()

        self.row_count = 0
        self.lifecycle = EditorLifecycle.PRISTINE
        self.row_index_being_added: Optional[int] = None

        self._initial_snapshot: Tuple[Mapping[str, Any], ...] = ()
        self._snapshot_source: Any = None
        self._listeners: List[Callable[[], None]] = []

        # Flags managed by FlagContextManager
        self._in_row_operation = False
        self._in_hydration = False

        if initial_snapshot is not None:
            self.on_initial_snapshot_changed(initial_snapshot)

    # ========== STATE ==========

    @property
    def collapsible_states(self) -> CollapsibleStates:
        return self.collapsible.states

    @property
    def initial_snapshot(self) -> Tuple[Mapping[str, Any], ...]:
        return self._initial_snapshot

    @property
    def is_modified(self) -> bool:
        return self.lifecycle is EditorLifecycle.MODIFIED

    @property
    def modal_slug(self) -> str:
        """Id of the block selection dialog for this group."""
        return f"{self.config.modal_slug_prefix}-{self.group_name}"

    def _is_busy(self) -> bool:
        return FlagContextManager.any_flag_set(self)

    # ========== LISTENERS ==========

    def add_listener(self, listener: Callable[[], None]) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Callable[[], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    # ========== HYDRATION ==========

    def on_initial_snapshot_changed(self, snapshot: Sequence[Mapping[str, Any]]) -> bool:
        """
        Re-initialize from a new initial snapshot.

        Only a snapshot with a new identity resets state; passing the same
        object again is a no-op. Returns True if state was reset.

        The field store is synced to the snapshot's row positions: missing
        rows are seeded from it, extra rows are dropped, and values already
        stored are kept.
        """
        if snapshot is self._snapshot_source:
            logger.debug(f"Snapshot for {self.group_name!r} unchanged; skipping hydration")
            return False
        if self._is_busy():
            logger.warning(f"Rejected snapshot change for {self.group_name!r} during a row operation")
            return False

        with FlagContextManager.hydration_context(self):
            self._snapshot_source = snapshot
            self._initial_snapshot = tuple(snapshot or ())
            self.row_count = len(self._initial_snapshot)
            self.field_store.sync_rows(self.group_name, self._initial_snapshot)
            self.lifecycle = EditorLifecycle.PRISTINE
            self.collapsible.replace_all([True] * self.row_count)

        logger.debug(f"Hydrated {self.group_name!r} with {self.row_count} rows")
        self._notify()
        return True

    def hydrate(self, snapshot: Sequence[Mapping[str, Any]]) -> bool:
        """Load ``snapshot`` into the field store, then re-initialize from it."""
        if snapshot is self._snapshot_source:
            return False
        if self._is_busy():
            logger.warning(f"Rejected hydration of {self.group_name!r} during a row operation")
            return False
        self.field_store.load_rows(self.group_name, snapshot or ())
        return self.on_initial_snapshot_changed(snapshot)

    # ========== ROW OPERATIONS ==========

    def _check_index(self, index: int, upper: int, operation: str) -> bool:
        """True if ``0 <= index < upper``; otherwise ignore or raise per config."""
        if isinstance(index, int) and 0 <= index < upper:
            return True
        message = f"{operation}: index {index} out of range for {self.row_count} rows in {self.group_name!r}"
        if self.config.strict_indices:
            raise RowIndexError(message)
        logger.debug(f"Ignored {message}")
        return False

    def _apply(self, command: RowCommand) -> bool:
        """Apply one command to every position-keyed store, then notify once."""
        if self._is_busy():
            logger.warning(
                f"Rejected {command.describe()} on {self.group_name!r}: "
                f"another operation is in progress {FlagContextManager.get_flag_state(self)}"
            )
            return False

        with FlagContextManager.row_operation_context(self):
            if self.config.debug_dispatch:
                logger.info(f"DISPATCH {self.group_name}: {command.describe()}")
            if not command.apply_to_field_store(self.field_store, self.group_name):
                logger.warning(
                    f"Rejected {command.describe()} on {self.group_name!r}: "
                    f"field store did not apply it"
                )
                return False
            self.collapsible.dispatch(command.collapsible_action())
            self.row_count += command.row_count_delta
            self.lifecycle = EditorLifecycle.MODIFIED

        logger.debug(
            f"{command.describe()} applied to {self.group_name!r}: "
            f"row_count={self.row_count}, collapsible={self.collapsible.states}"
        )
        self._notify()
        return True

    def add_row(self, row_index: int, block_type: str) -> bool:
        """
        Insert a row of template ``block_type`` at ``row_index``.

        Raises:
            TemplateNotFound: If ``block_type`` is not a configured template
        """
        template = self.templates.get(block_type)
        if not self._check_index(row_index, self.row_count + 1, "add_row"):
            return False
        return self._apply(RowCommand.add(row_index, template.slug, template.fields))

    def remove_row(self, row_index: int) -> bool:
        if not self._check_index(row_index, self.row_count, "remove_row"):
            return False
        return self._apply(RowCommand.remove(row_index))

    def move_row(self, move_from_index: int, move_to_index: int) -> bool:
        """Move a row using list splice semantics; both indices are pre-move positions."""
        if not (self._check_index(move_from_index, self.row_count, "move_row")
                and self._check_index(move_to_index, self.row_count, "move_row")):
            return False
        return self._apply(RowCommand.move(move_from_index, move_to_index))

    def open_add_row_dialog(self, row_index: int, parent: Optional[Any] = None,
                            provider: Optional[BlockSelectionProvider] = None) -> bool:
        """Ask the block selection provider for a template and insert it at ``row_index``."""
        provider = provider or get_block_selection_provider()
        if provider is None:
            raise RuntimeError("No block selection provider registered. Call register_block_selection_provider(...).")

        self.row_index_being_added = row_index
        try:
            block_type = provider.select_block(
                list(self.templates), row_index, parent=parent, modal_slug=self.modal_slug,
            )
        finally:
            self.row_index_being_added = None

        if block_type is None:
            logger.debug(f"Block selection for {self.modal_slug} at {row_index} cancelled")
            return False
        return self.add_row(row_index, block_type)

    # ========== FIELD VALUES ==========

    def get_field_value(self, row_index: int, field_name: str, default: Any = None) -> Any:
        """Current value of one field; falls back to the snapshot while pristine."""
        value = self.field_store.get_value(positional_key(self.group_name, row_index, field_name), _MISSING)
        if value is not _MISSING:
            return value
        initial_values = self.resolver.initial_values(row_index, self._initial_snapshot, self.lifecycle)
        if initial_values is not None:
            return initial_values.get(field_name, default)
        return default

    def set_field_value(self, row_index: int, field_name: str, value: Any) -> bool:
        """Write one field of one row. Edits during a row operation are rejected."""
        if self._is_busy() and self.config.reject_edits_during_row_operation:
            logger.warning(
                f"Rejected edit of {self.group_name}.{row_index}.{field_name} "
                f"while a row operation is in progress"
            )
            return False
        if not self._check_index(row_index, self.row_count, "set_field_value"):
            return False

        self.field_store.set_value(positional_key(self.group_name, row_index, field_name), value)
        return True

    # ========== COLLAPSIBLE STATE ==========

    def dispatch_collapsible(self, action: CollapsibleAction) -> CollapsibleStates:
        """Dispatch a row-local collapsible action (toggle/set) and notify."""
        if action.type not in _ROW_LOCAL_ACTIONS:
            raise ValueError(
                f"{action.type.name} changes row positions; use add_row/remove_row/move_row instead"
            )
        states = self.collapsible.dispatch(action)
        self._notify()
        return states

    def toggle_collapsed(self, row_index: int) -> CollapsibleStates:
        return self.dispatch_collapsible(CollapsibleAction.toggle(row_index))

    # ========== RESOLUTION ==========

    def resolve_rows(self) -> List[ResolvedRow]:
        """Resolve every row for the next render."""
        return self.resolver.resolve_rows(
            self.row_count, self.field_store, self._initial_snapshot,
            self.lifecycle, self.collapsible.states,
        )
