"""
Service layer for flexible row groups.

Field storage, row identity resolution, drag translation and the flag and
signal helpers the controller and widgets share.
"""

from .flag_context_manager import FlagContextManager, ControllerFlag
from .positional_field_store import PositionalFieldStore, StoreChangeEvent
from .row_identity_resolver import RowIdentityResolver, ResolvedRow
from .drag_reorder_adapter import DragReorderAdapter
from .signal_service import SignalService

__all__ = [
    "FlagContextManager",
    "ControllerFlag",
    "PositionalFieldStore",
    "StoreChangeEvent",
    "RowIdentityResolver",
    "ResolvedRow",
    "DragReorderAdapter",
    "SignalService",
]
