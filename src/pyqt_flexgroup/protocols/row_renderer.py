"""Row renderer protocol.

A renderer turns one resolved row into a widget. Everything it may need is
passed in a RowRenderContext; renderers must not keep references to row
indices across renders since indices shift on every add/remove/move.
"""

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Protocol, Tuple


@dataclass(frozen=True)
class RowRenderContext:
    """Per-row inputs handed to a RowRenderer."""
    field_schema: Tuple[Any, ...]
    row_index: int
    initial_values: Optional[Mapping[str, Any]]
    collapsed: bool
    add_row_at: Callable[[int], Any]
    remove_row_at: Callable[[int], Any]
    dispatch_collapsible: Callable[[Any], Any]
    get_value: Callable[[str], Any]
    set_value: Callable[[str, Any], Any]


class RowRenderer(Protocol):
    """Protocol for building the body widget of one row."""

    def render_row(self, context: RowRenderContext, parent: Optional[Any] = None) -> Any:
        """Return a widget displaying the row's fields."""
        ...
