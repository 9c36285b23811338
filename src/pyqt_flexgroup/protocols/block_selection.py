"""Block selection provider protocol."""

from typing import Any, Optional, Protocol, Sequence


class BlockSelectionProvider(Protocol):
    """Protocol for choosing which block template to insert at a position."""

    def select_block(
        self,
        templates: Sequence[Any],
        row_index: int,
        parent: Optional[Any] = None,
        **context: Any,
    ) -> Optional[str]:
        """Show selection UI and return the chosen template slug (or None if canceled)."""
        ...


_block_selection_provider: Optional[BlockSelectionProvider] = None


def register_block_selection_provider(provider: Optional[BlockSelectionProvider]) -> None:
    """Register a global block selection provider."""
    global _block_selection_provider
    _block_selection_provider = provider


def get_block_selection_provider() -> Optional[BlockSelectionProvider]:
    """Get the registered block selection provider."""
    return _block_selection_provider
