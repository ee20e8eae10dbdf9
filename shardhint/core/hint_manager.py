"""
Hint manager - lets a caller inject sharding keys directly.

A HintManager is created for one unit of work, registers itself as the
active manager of the calling thread, collects database and table sharding
values, and must be released when the unit of work ends. Use it as a
context manager so release happens on every exit path:

    with HintManager(registry) as hint:
        hint.add_database_sharding_values("t_order", 1, 2, 3)
        hint.add_table_sharding_value("t_order", 5)
        ...
"""

from typing import Any, Dict, Mapping, Optional
from types import MappingProxyType
import logging
import threading

from .exceptions import AlreadyReleasedError
from .hint_registry import HintRegistry, DB_TABLE_NAME, DB_COLUMN_NAME
from .sharding_value import ShardingOperator, ShardingValue, create_sharding_value

logger = logging.getLogger(__name__)


class HintManager:
    """
    Holds hinted sharding values for the current unit of work.

    Values are stored per logical table in two mappings, one for database
    sharding and one for table sharding. Adding a value for a table that
    already has one replaces it. The manager is single-writer: only the
    thread that created it should mutate it.
    """

    def __init__(self, registry: HintRegistry):
        """
        Create a manager and make it active for the calling thread.

        Args:
            registry: Registry the manager binds itself to
        """
        self.registry = registry
        self._database_sharding_values: Dict[str, ShardingValue] = {}
        self._table_sharding_values: Dict[str, ShardingValue] = {}
        self._master_route_only = False
        self._released = False

        previous = registry.get_active()
        if previous is not None:
            logger.warning(
                f"Replacing active hint manager on thread {threading.current_thread().name}; "
                "hint managers should not be nested"
            )
        registry.set_active(self)
        registry.set_database_sharding_only(False)

    @classmethod
    def create(cls, registry: HintRegistry) -> "HintManager":
        """Create a manager bound to the calling thread."""
        return cls(registry)

    def _check_not_released(self) -> None:
        if self._released:
            raise AlreadyReleasedError("Hint manager has already been released")

    def set_database_sharding_value(self, value: Any) -> None:
        """
        Set the sharding value used when only databases are sharded.

        The operator is ``=``. Routing then ignores tables and sends the
        statement to the database this value selects.

        Args:
            value: Database sharding value
        """
        self._add_database_sharding_value(DB_TABLE_NAME, ShardingOperator.EQUAL, value)
        self.registry.set_database_sharding_only(True)

    def add_database_sharding_value(self, logic_table: str, value: Any) -> None:
        """Add an ``=`` database sharding value for a logical table."""
        self._add_database_sharding_value(logic_table, ShardingOperator.EQUAL, value)

    def add_database_sharding_values(self, logic_table: str, *values: Any) -> None:
        """Add ``IN`` database sharding values for a logical table."""
        self._add_database_sharding_value(logic_table, ShardingOperator.IN, *values)

    def add_database_sharding_range(self, logic_table: str, lower: Any, upper: Any) -> None:
        """Add a ``BETWEEN`` database sharding range for a logical table."""
        self._add_database_sharding_value(logic_table, ShardingOperator.BETWEEN, lower, upper)

    def _add_database_sharding_value(self, logic_table: str, operator: ShardingOperator, *values: Any) -> None:
        self._check_not_released()
        sharding_value = create_sharding_value(logic_table, DB_COLUMN_NAME, operator, values)
        self.registry.set_database_sharding_only(False)
        self._database_sharding_values[logic_table] = sharding_value
        logger.debug(f"Database hint for {logic_table}: {operator.expression} {values!r}")

    def add_table_sharding_value(self, logic_table: str, value: Any) -> None:
        """Add an ``=`` table sharding value for a logical table."""
        self._add_table_sharding_value(logic_table, ShardingOperator.EQUAL, value)

    def add_table_sharding_values(self, logic_table: str, *values: Any) -> None:
        """Add ``IN`` table sharding values for a logical table."""
        self._add_table_sharding_value(logic_table, ShardingOperator.IN, *values)

    def add_table_sharding_range(self, logic_table: str, lower: Any, upper: Any) -> None:
        """Add a ``BETWEEN`` table sharding range for a logical table."""
        self._add_table_sharding_value(logic_table, ShardingOperator.BETWEEN, lower, upper)

    def _add_table_sharding_value(self, logic_table: str, operator: ShardingOperator, *values: Any) -> None:
        self._check_not_released()
        sharding_value = create_sharding_value(logic_table, DB_COLUMN_NAME, operator, values)
        self.registry.set_database_sharding_only(False)
        self._table_sharding_values[logic_table] = sharding_value
        logger.debug(f"Table hint for {logic_table}: {operator.expression} {values!r}")

    def get_database_sharding_value(self, logic_table: str) -> Optional[ShardingValue]:
        """Get the database sharding value for a logical table, or None."""
        return self._database_sharding_values.get(logic_table)

    def get_table_sharding_value(self, logic_table: str) -> Optional[ShardingValue]:
        """Get the table sharding value for a logical table, or None."""
        return self._table_sharding_values.get(logic_table)

    @property
    def database_sharding_values(self) -> Mapping[str, ShardingValue]:
        return MappingProxyType(self._database_sharding_values)

    @property
    def table_sharding_values(self) -> Mapping[str, ShardingValue]:
        return MappingProxyType(self._table_sharding_values)

    def set_master_route_only(self) -> None:
        """Force statements of this unit of work to the master database."""
        self._check_not_released()
        self._master_route_only = True

    @property
    def master_route_only(self) -> bool:
        return self._master_route_only

    def is_database_sharding_only(self) -> bool:
        """Check whether only the database-level value should drive routing."""
        if self._released or self.registry.get_active() is not self:
            return False
        return self.registry.is_database_sharding_only()

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        """
        Release the manager and clear its registration.

        Safe to call more than once. The registry entry of the calling
        thread is only cleared when it still points at this manager.
        """
        if self._released:
            return
        self._released = True

        if self.registry.get_active() is self:
            self.registry.clear()
        else:
            logger.warning("Released a hint manager that is not active on the calling thread")

    def close(self) -> None:
        """Alias of release()."""
        self.release()

    def __enter__(self) -> "HintManager":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.release()
