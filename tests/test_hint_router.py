"""
Tests for hint precedence in routing.
"""

import threading

import pytest
from unittest.mock import Mock

from shardhint.core import HintManager, HintRegistry, HintNotActiveError
from shardhint.routing import HintRouteResolver, HintRouteDecision


@pytest.fixture
def registry():
    return HintRegistry()


class TestHintRouteResolver:
    """Test resolving hinted routing inputs."""

    def test_no_active_manager(self, registry):
        """Test resolve returns None when no hints are active."""
        resolver = HintRouteResolver(registry)

        assert resolver.resolve("t_order") is None

    def test_resolves_table_hints(self, registry):
        """Test per-table database and table values are resolved."""
        resolver = HintRouteResolver(registry)

        with HintManager(registry) as manager:
            manager.add_database_sharding_values("t_order", 1, 2)
            manager.add_table_sharding_value("t_order", 5)
            manager.set_master_route_only()

            decision = resolver.resolve("t_order")
            other = resolver.resolve("t_user")

        assert isinstance(decision, HintRouteDecision)
        assert decision.database_value.values == (1, 2)
        assert decision.table_value.values == (5,)
        assert decision.master_route_only is True
        assert decision.database_sharding_only is False
        assert other.database_value is None
        assert other.table_value is None

    def test_database_only_ignores_tables(self, registry):
        """Test database-only mode uses the database value for every table."""
        resolver = HintRouteResolver(registry)

        with HintManager(registry) as manager:
            manager.set_database_sharding_value(7)
            decision = resolver.resolve("t_any")

        assert decision.database_sharding_only is True
        assert decision.database_value.values == (7,)
        assert decision.table_value is None

    def test_released_manager_no_longer_applies(self, registry):
        """Test hints stop applying once the manager is released."""
        resolver = HintRouteResolver(registry)

        with HintManager(registry) as manager:
            manager.add_table_sharding_value("t_order", 1)

        assert resolver.resolve("t_order") is None

    def test_manager_released_on_another_thread(self, registry):
        """Test hints stop applying once another thread releases the manager."""
        resolver = HintRouteResolver(registry)
        manager = HintManager(registry)
        manager.add_table_sharding_value("t_order", 1)

        thread = threading.Thread(target=manager.release)
        thread.start()
        thread.join()

        assert registry.get_active() is manager
        assert resolver.resolve("t_order") is None
        registry.clear()


class TestHintRouting:
    """Test hint precedence over statement routing."""

    def test_hints_bypass_statement_router(self, registry):
        """Test the statement router is not consulted when hints are active."""
        statement_router = Mock(return_value="statement-route")
        resolver = HintRouteResolver(registry, statement_router=statement_router)

        with HintManager(registry) as manager:
            manager.add_table_sharding_value("t_order", 3)
            result = resolver.route("t_order", "SELECT * FROM t_order WHERE order_id = 10")

        assert isinstance(result, HintRouteDecision)
        assert result.table_value.values == (3,)
        statement_router.assert_not_called()

    def test_falls_back_to_statement_router(self, registry):
        """Test the statement router is used when no hints are active."""
        statement_router = Mock(return_value="statement-route")
        resolver = HintRouteResolver(registry, statement_router=statement_router)

        result = resolver.route("t_order", "SELECT * FROM t_order WHERE order_id = 10")

        assert result == "statement-route"
        statement_router.assert_called_once_with("t_order", "SELECT * FROM t_order WHERE order_id = 10")

    def test_no_hints_and_no_statement_router(self, registry):
        """Test routing without hints or a fallback fails."""
        resolver = HintRouteResolver(registry)

        with pytest.raises(HintNotActiveError):
            resolver.route("t_order", "SELECT 1")

    def test_routing_stats(self, registry):
        """Test routing statistics over the kept history."""
        resolver = HintRouteResolver(registry, statement_router=lambda table, sql: None, history_size=3)
        assert resolver.get_routing_stats() == {"total_routes": 0}

        resolver.route("t_user", "SELECT 1")
        with HintManager(registry) as manager:
            manager.set_database_sharding_value(1)
            manager.set_master_route_only()
            resolver.route("t_order", "SELECT 1")
            resolver.route("t_order", "SELECT 1")
        resolver.route("t_user", "SELECT 1")

        stats = resolver.get_routing_stats()
        assert stats["total_routes"] == 3
        assert stats["hint_routes"] == 2
        assert stats["statement_routes"] == 1
        assert stats["master_route_only"] == 2
        assert stats["database_sharding_only"] == 2
        assert stats["table_selections"] == {"t_order": 2, "t_user": 1}
