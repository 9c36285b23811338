"""
pyqt-flexgroup: polymorphic repeating groups ("flexible" fields) for PyQt6.

An ordered list of rows where each row is an instance of one of several
named block templates. Rows can be inserted, removed and reordered by drag
and drop while the field-value store, the per-row collapsed flags and the
row count stay consistent.

Architecture:
- Tier 1 (Core): CollapsibleStateStore reducer, ReorderableListWidget
- Tier 2 (Protocols): Field-store, block-selection and row-renderer contracts; config
- Tier 3 (Services): PositionalFieldStore, RowIdentityResolver, DragReorderAdapter
- Tier 4 (Forms): Block templates, RowCommand, RowOrderController
- Tier 5 (Widgets): FlexibleGroupWidget, RowSectionWidget, AddRowDialog

Rows have no identity beyond their position; every position-keyed store is
edited by the same RowCommand in the same step.
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
