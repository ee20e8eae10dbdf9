"""
Hint route resolver for the routing engine.

Before extracting sharding conditions from a statement, the routing engine
asks the resolver for the calling thread's hints. When a hint manager is
active its values and flags take precedence and the statement text is not
consulted; otherwise routing falls back to the statement router.
"""

from typing import Any, Callable, Dict, Optional
from dataclasses import dataclass
from collections import deque, Counter
import logging
import threading
import time

from ..core.exceptions import HintNotActiveError
from ..core.hint_registry import HintRegistry, DB_TABLE_NAME
from ..core.sharding_value import ShardingValue

logger = logging.getLogger(__name__)

# (logic_table, sql) -> routing result computed from the statement text
StatementRouter = Callable[[str, str], Any]


@dataclass(frozen=True)
class HintRouteDecision:
    """Routing inputs taken from hints instead of the statement."""
    logic_table: str
    database_value: Optional[ShardingValue]
    table_value: Optional[ShardingValue]
    master_route_only: bool
    database_sharding_only: bool


class HintRouteResolver:
    """
    Resolves hinted routing inputs for the calling thread.
    """

    def __init__(
        self,
        registry: HintRegistry,
        statement_router: Optional[StatementRouter] = None,
        history_size: int = 1000
    ):
        """
        Initialize the resolver.

        Args:
            registry: Registry holding the per-thread hint managers
            statement_router: Fallback used when no hint manager is active
            history_size: Number of routing decisions kept for statistics
        """
        self.registry = registry
        self.statement_router = statement_router
        self.routing_history = deque(maxlen=history_size)
        self.lock = threading.Lock()

    def resolve(self, logic_table: str) -> Optional[HintRouteDecision]:
        """
        Get the hinted routing inputs for a logical table.

        Args:
            logic_table: Logical table being routed

        Returns:
            Hint decision, or None when no hint manager is active
        """
        manager = self.registry.get_active()
        # A manager released from another thread can still be bound here
        if manager is None or manager.released:
            return None

        database_sharding_only = self.registry.is_database_sharding_only()
        if database_sharding_only:
            # Whole database acts as a single shard, table values do not apply
            database_value = manager.get_database_sharding_value(DB_TABLE_NAME)
            table_value = None
        else:
            database_value = manager.get_database_sharding_value(logic_table)
            table_value = manager.get_table_sharding_value(logic_table)

        return HintRouteDecision(
            logic_table=logic_table,
            database_value=database_value,
            table_value=table_value,
            master_route_only=manager.master_route_only,
            database_sharding_only=database_sharding_only
        )

    def route(self, logic_table: str, sql: str) -> Any:
        """
        Route a statement, preferring hints over the statement text.

        Args:
            logic_table: Logical table being routed
            sql: Statement to route

        Returns:
            HintRouteDecision when hints are active, otherwise the
            statement router's result

        Raises:
            HintNotActiveError: If no hints are active and no statement
                router is configured
        """
        decision = self.resolve(logic_table)
        if decision is not None:
            logger.debug(f"Routing {logic_table} by hint, statement not inspected")
            self._log_routing_decision(logic_table, decision)
            return decision

        if self.statement_router is None:
            raise HintNotActiveError(f"No active hint manager to route {logic_table}")

        result = self.statement_router(logic_table, sql)
        self._log_routing_decision(logic_table, None)
        return result

    def _log_routing_decision(self, logic_table: str, decision: Optional[HintRouteDecision]) -> None:
        log_entry = {
            "timestamp": time.time(),
            "logic_table": logic_table,
            "source": "hint" if decision is not None else "statement",
            "master_route_only": decision.master_route_only if decision else False,
            "database_sharding_only": decision.database_sharding_only if decision else False
        }
        with self.lock:
            self.routing_history.append(log_entry)

    def get_routing_stats(self) -> Dict[str, Any]:
        """Get routing statistics over the kept history."""
        with self.lock:
            history = list(self.routing_history)

        if not history:
            return {"total_routes": 0}

        sources = Counter(entry["source"] for entry in history)
        return {
            "total_routes": len(history),
            "hint_routes": sources.get("hint", 0),
            "statement_routes": sources.get("statement", 0),
            "master_route_only": sum(1 for entry in history if entry["master_route_only"]),
            "database_sharding_only": sum(1 for entry in history if entry["database_sharding_only"]),
            "table_selections": dict(Counter(entry["logic_table"] for entry in history))
        }
