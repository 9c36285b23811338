"""
Collapsible state reducer for flexible row groups.

One boolean per row position, ``True`` meaning expanded. All transitions go
through ``collapsible_reducer`` so every edit is a pure
``(states, action) -> states`` step; ``CollapsibleStateStore`` is the single
writer that holds the current tuple.

Framework-agnostic - no Qt imports.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

CollapsibleStates = Tuple[bool, ...]


class CollapsibleActionType(Enum):
    """Tagged variants understood by ``collapsible_reducer``."""
    ADD = "ADD_COLLAPSIBLE"
    REMOVE = "REMOVE_COLLAPSIBLE"
    MOVE = "MOVE_COLLAPSIBLE"
    SET_ALL = "SET_ALL_COLLAPSIBLES"
    TOGGLE = "TOGGLE_COLLAPSIBLE"
    SET = "SET_COLLAPSIBLE"


@dataclass(frozen=True)
class CollapsibleAction:
    """Immutable action dispatched to a CollapsibleStateStore."""
    type: CollapsibleActionType
    index: Optional[int] = None            # Row the action applies to
    move_to_index: Optional[int] = None    # MOVE only, post-removal coordinates
    payload: Optional[Tuple[bool, ...]] = None  # SET_ALL only
    value: Optional[bool] = None           # SET only

    @classmethod
    def insert_at(cls, index: int) -> 'CollapsibleAction':
        return cls(CollapsibleActionType.ADD, index=index)

    @classmethod
    def remove_at(cls, index: int) -> 'CollapsibleAction':
        return cls(CollapsibleActionType.REMOVE, index=index)

    @classmethod
    def move(cls, from_index: int, to_index: int) -> 'CollapsibleAction':
        return cls(CollapsibleActionType.MOVE, index=from_index, move_to_index=to_index)

    @classmethod
    def replace_all(cls, states: Sequence[bool]) -> 'CollapsibleAction':
        return cls(CollapsibleActionType.SET_ALL, payload=tuple(bool(s) for s in states))

    @classmethod
    def toggle(cls, index: int) -> 'CollapsibleAction':
        return cls(CollapsibleActionType.TOGGLE, index=index)

    @classmethod
    def set(cls, index: int, value: bool) -> 'CollapsibleAction':
        return cls(CollapsibleActionType.SET, index=index, value=bool(value))


def _in_bounds(index: Optional[int], length: int) -> bool:
    return index is not None and 0 <= index < length


def _insert(states: CollapsibleStates, action: CollapsibleAction) -> CollapsibleStates:
    # Appending (index == len) is allowed
    if action.index is None or not 0 <= action.index <= len(states):
        logger.debug(f"Ignoring insert at {action.index} (length {len(states)})")
        return states
    return states[:action.index] + (True,) + states[action.index:]


def _remove(states: CollapsibleStates, action: CollapsibleAction) -> CollapsibleStates:
    if not _in_bounds(action.index, len(states)):
        logger.debug(f"Ignoring remove at {action.index} (length {len(states)})")
        return states
    return states[:action.index] + states[action.index + 1:]


def _move(states: CollapsibleStates, action: CollapsibleAction) -> CollapsibleStates:
    length = len(states)
    if not (_in_bounds(action.index, length) and _in_bounds(action.move_to_index, length)):
        logger.debug(f"Ignoring move {action.index} -> {action.move_to_index} (length {length})")
        return states
    remaining = list(states)
    moved = remaining.pop(action.index)
    remaining.insert(action.move_to_index, moved)
    return tuple(remaining)


def _set_all(states: CollapsibleStates, action: CollapsibleAction) -> CollapsibleStates:
    return tuple(action.payload or ())


def _toggle(states: CollapsibleStates, action: CollapsibleAction) -> CollapsibleStates:
    if not _in_bounds(action.index, len(states)):
        logger.debug(f"Ignoring toggle at {action.index} (length {len(states)})")
        return states
    flipped = list(states)
    flipped[action.index] = not flipped[action.index]
    return tuple(flipped)


def _set(states: CollapsibleStates, action: CollapsibleAction) -> CollapsibleStates:
    if not _in_bounds(action.index, len(states)) or action.value is None:
        logger.debug(f"Ignoring set at {action.index} (length {len(states)})")
        return states
    updated = list(states)
    updated[action.index] = action.value
    return tuple(updated)


_HANDLERS: Dict[CollapsibleActionType, Callable[[CollapsibleStates, CollapsibleAction], CollapsibleStates]] = {
    CollapsibleActionType.ADD: _insert,
    CollapsibleActionType.REMOVE: _remove,
    CollapsibleActionType.MOVE: _move,
    CollapsibleActionType.SET_ALL: _set_all,
    CollapsibleActionType.TOGGLE: _toggle,
    CollapsibleActionType.SET: _set,
}


def collapsible_reducer(states: Sequence[bool], action: CollapsibleAction) -> CollapsibleStates:
    """
    Apply one action to a collapsible state sequence.

    Pure function: the input is never modified and out-of-range indices
    return the input unchanged.

    Args:
        states: Current per-row expanded flags
        action: Action to apply

    Returns:
        New tuple of per-row expanded flags
    """
    handler = _HANDLERS.get(action.type)
    if handler is None:
        raise ValueError(f"Unknown collapsible action type: {action.type!r}")
    return handler(tuple(states), action)


class CollapsibleStateStore:
    """
    Single-writer cell holding the current collapsible states.

    Usage:
        store = CollapsibleStateStore()
        store.dispatch(CollapsibleAction.replace_all([True, True]))
        store.insert_at(1)
        store.states  # (True, True, True)
    """

    def __init__(self, states: Sequence[bool] = ()):
        self._states: CollapsibleStates = tuple(bool(s) for s in states)

    @property
    def states(self) -> CollapsibleStates:
        return self._states

    def __len__(self) -> int:
        return len(self._states)

    def is_expanded(self, index: int) -> bool:
        """Return the flag at ``index``; rows without a flag count as expanded."""
        if 0 <= index < len(self._states):
            return self._states[index]
        return True

    def dispatch(self, action: CollapsibleAction) -> CollapsibleStates:
        self._states = collapsible_reducer(self._states, action)
        return self._states

    def insert_at(self, index: int) -> CollapsibleStates:
        return self.dispatch(CollapsibleAction.insert_at(index))

    def remove_at(self, index: int) -> CollapsibleStates:
        return self.dispatch(CollapsibleAction.remove_at(index))

    def move(self, from_index: int, to_index: int) -> CollapsibleStates:
        return self.dispatch(CollapsibleAction.move(from_index, to_index))

    def replace_all(self, states: Sequence[bool]) -> CollapsibleStates:
        return self.dispatch(CollapsibleAction.replace_all(states))

    def toggle(self, index: int) -> CollapsibleStates:
        return self.dispatch(CollapsibleAction.toggle(index))

    def set(self, index: int, value: bool) -> CollapsibleStates:
        return self.dispatch(CollapsibleAction.set(index, value))
