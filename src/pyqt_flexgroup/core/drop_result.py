"""Drop result records produced by drag-and-drop reordering."""

from dataclasses import dataclass
from typing import Optional

DEFAULT_DROPPABLE_ID = "flexible-drop"


@dataclass(frozen=True)
class DragLocation:
    """A position inside a droppable list, in pre-move coordinates."""
    index: int
    droppable_id: str = DEFAULT_DROPPABLE_ID


@dataclass(frozen=True)
class DropResult:
    """Outcome of a drag gesture. ``destination`` is None when the drag was cancelled."""
    source: DragLocation
    destination: Optional[DragLocation] = None

    @property
    def cancelled(self) -> bool:
        return self.destination is None
