"""
Context manager factory for boolean flag management.

Provides a universal context manager for managing temporary boolean flags
on row controllers.

Pattern:
    Instead of:
        self._in_row_operation = True
        try:
            # ... logic
        finally:
            self._in_row_operation = False

    Use:
        with FlagContextManager.manage_flags(self, _in_row_operation=True):
            # ... logic

This eliminates duplicate try/finally patterns and ensures flags are always restored.
"""

from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, Set
import logging

logger = logging.getLogger(__name__)


class ControllerFlag(Enum):
    """
    Registry of valid RowOrderController flags.

    Add new flags here as they're introduced to the codebase.
    """
    IN_ROW_OPERATION = '_in_row_operation'
    IN_HYDRATION = '_in_hydration'


class FlagContextManager:
    """
    Context manager factory for boolean flag management.

    Examples:
        # Single flag:
        with FlagContextManager.manage_flags(self, _in_row_operation=True):
            self._dispatch(command)

        # Convenience method for hydration:
        with FlagContextManager.hydration_context(self):
            # ... reset logic
    """

    VALID_FLAGS: Set[str] = {flag.value for flag in ControllerFlag}

    @staticmethod
    @contextmanager
    def manage_flags(obj: Any, **flags: bool):
        """
        Context manager that sets flags on entry and restores previous values on exit.

        Args:
            obj: Object to set flags on (typically RowOrderController instance)
            **flags: Flag names and values to set (e.g., _in_row_operation=True)

        Raises:
            ValueError: If any flag name is not in VALID_FLAGS registry
        """
        invalid_flags = set(flags.keys()) - FlagContextManager.VALID_FLAGS
        if invalid_flags:
            raise ValueError(
                f"Invalid flags: {invalid_flags}. "
                f"Valid flags: {FlagContextManager.VALID_FLAGS}. "
                f"Add new flags to ControllerFlag enum."
            )

        # No getattr default: every flag must be initialized in __init__
        prev_values: Dict[str, bool] = {}
        for flag_name in flags:
            prev_values[flag_name] = getattr(obj, flag_name)

        for flag_name, flag_value in flags.items():
            setattr(obj, flag_name, flag_value)
            logger.debug(f"Setting flag {flag_name}={flag_value} on {type(obj).__name__}")

        try:
            yield
        finally:
            for flag_name, prev_value in prev_values.items():
                setattr(obj, flag_name, prev_value)
                logger.debug(f"Restoring flag {flag_name}={prev_value} on {type(obj).__name__}")

    @staticmethod
    @contextmanager
    def row_operation_context(obj: Any):
        """Mark ``obj`` as applying a row command until the block exits."""
        with FlagContextManager.manage_flags(obj, **{ControllerFlag.IN_ROW_OPERATION.value: True}):
            yield

    @staticmethod
    @contextmanager
    def hydration_context(obj: Any):
        """Mark ``obj`` as re-initializing from a new snapshot until the block exits."""
        with FlagContextManager.manage_flags(obj, **{ControllerFlag.IN_HYDRATION.value: True}):
            yield

    @staticmethod
    def any_flag_set(obj: Any) -> bool:
        """True if any registered flag is currently set on ``obj``."""
        return any(getattr(obj, flag.value) for flag in ControllerFlag)

    @staticmethod
    def get_flag_state(obj: Any) -> Dict[str, bool]:
        """Get current state of all registered flags (for logging)."""
        return {flag.value: getattr(obj, flag.value) for flag in ControllerFlag}
