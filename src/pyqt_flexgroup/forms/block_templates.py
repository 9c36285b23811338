"""
Block templates for flexible row groups.

A block template is a named, immutable field schema that a row can be
instantiated from. The set of templates is fixed for the lifetime of an
editor, so the registry is built once and never mutated.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from pyqt_flexgroup.forms.exceptions import DuplicateTemplateError, TemplateNotFound

logger = logging.getLogger(__name__)

BLOCK_TYPE_FIELD = "blockType"
BLOCK_NAME_FIELD = "blockName"


@dataclass(frozen=True)
class FieldDefinition:
    """One field of a block template."""
    name: str
    field_type: str = "text"
    label: Optional[str] = None
    default: Any = None

    @property
    def display_label(self) -> str:
        return self.label or self.name

    @property
    def is_hidden(self) -> bool:
        return self.field_type == "hidden"


@dataclass(frozen=True)
class BlockTemplate:
    """A named schema: slug, display label and ordered field definitions."""
    slug: str
    label: str = ""
    fields: Tuple[FieldDefinition, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept any iterable of fields but store a tuple
        object.__setattr__(self, "fields", tuple(self.fields))

    @property
    def display_label(self) -> str:
        return self.label or self.slug


# Reserved per-row fields appended to every row schema
HIDDEN_ROW_FIELDS: Tuple[FieldDefinition, FieldDefinition] = (
    FieldDefinition(BLOCK_TYPE_FIELD, "hidden"),
    FieldDefinition(BLOCK_NAME_FIELD, "hidden"),
)


class BlockTemplateRegistry:
    """Ordered, immutable slug -> BlockTemplate lookup."""

    def __init__(self, templates: Iterable[BlockTemplate] = ()):
        by_slug: Dict[str, BlockTemplate] = {}
        for template in templates:
            if template.slug in by_slug:
                raise DuplicateTemplateError(f"Duplicate block template slug: {template.slug!r}")
            by_slug[template.slug] = template
        self._templates = by_slug
        logger.debug(f"Block template registry built with slugs {list(by_slug)}")

    def __iter__(self) -> Iterator[BlockTemplate]:
        return iter(self._templates.values())

    def __len__(self) -> int:
        return len(self._templates)

    def __contains__(self, slug: object) -> bool:
        return isinstance(slug, str) and slug in self._templates

    @property
    def slugs(self) -> List[str]:
        return list(self._templates)

    def find(self, slug: Any) -> Optional[BlockTemplate]:
        """Return the template for ``slug`` or None if it is not configured."""
        if not isinstance(slug, str):
            if slug is not None:
                logger.debug(f"Ignoring non-string block type {slug!r}")
            return None
        return self._templates.get(slug)

    def get(self, slug: str) -> BlockTemplate:
        """Return the template for ``slug``; raise TemplateNotFound otherwise."""
        template = self.find(slug)
        if template is None:
            raise TemplateNotFound(slug, self._templates)
        return template
