"""
Hint registry - binds the calling thread to its active hint manager.

The registry is an explicit object created once by the application and
handed to every HintManager and to the routing engine. Bindings are kept
per thread, so threads never observe each other's hints.
"""

from typing import Optional, TYPE_CHECKING
import logging
import threading

if TYPE_CHECKING:
    from .hint_manager import HintManager

logger = logging.getLogger(__name__)

# Reserved key and column for database-only sharding values
DB_TABLE_NAME = "DB_TABLE_NAME"
DB_COLUMN_NAME = "DB_COLUMN_NAME"


class HintRegistry:
    """
    Per-thread storage of the active hint manager and the
    database-sharding-only flag.
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._local = threading.local()

    def _state(self) -> threading.local:
        # Lazily initialize the binding the first time a thread touches it
        if not hasattr(self._local, "manager"):
            self._local.manager = None
            self._local.database_sharding_only = False
        return self._local

    def set_active(self, manager: "HintManager") -> None:
        """Make the manager the active one for the calling thread."""
        self._state().manager = manager

    def get_active(self) -> Optional["HintManager"]:
        """Get the active manager for the calling thread, or None."""
        return self._state().manager

    def is_use_sharding_hint(self) -> bool:
        """Check whether routing on the calling thread should use hints."""
        return self.get_active() is not None

    def set_database_sharding_only(self, database_sharding_only: bool) -> None:
        """Set the database-sharding-only flag for the calling thread."""
        self._state().database_sharding_only = database_sharding_only

    def is_database_sharding_only(self) -> bool:
        """Get the database-sharding-only flag for the calling thread."""
        return self._state().database_sharding_only

    def clear(self) -> None:
        """Drop the calling thread's manager and reset its flag."""
        state = self._state()
        state.manager = None
        state.database_sharding_only = False
        logger.debug(f"Cleared hint registry for thread {threading.current_thread().name}")
