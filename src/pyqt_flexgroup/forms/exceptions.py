"""Flexible row group exceptions."""


class FlexGroupError(Exception):
    """Base class for flexible row group errors."""


class TemplateNotFound(FlexGroupError, LookupError):
    """Raised when a block template slug is not among the configured templates."""

    def __init__(self, slug: str, available=()):
        self.slug = slug
        self.available = tuple(available)
        super().__init__(f"Unknown block template {slug!r}. Available: {list(self.available)}")


class DuplicateTemplateError(FlexGroupError, ValueError):
    """Raised when two block templates share a slug."""


class RowIndexError(FlexGroupError, IndexError):
    """Raised for out-of-range row operations when strict_indices is enabled."""
