"""
Example demonstrating shardhint hint routing and execution hooks.

Shows how a unit of work supplies sharding keys through a HintManager, how
the routing engine picks them up instead of parsing the statement, and how
the execution engine notifies hooks around each routed unit.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

from shardhint.config import ShardHintConfig, build_broadcaster
from shardhint.core import HintManager, HintRegistry
from shardhint.hooks import MetricsExecutionHook, RouteUnit, SQLUnit, DataSourceMetaData
from shardhint.routing import HintRouteResolver

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')


def route_by_statement(logic_table: str, sql: str) -> str:
    """Stand-in for the routing engine's statement based routing."""
    return f"full scan of {logic_table}"


def main():
    """Main example demonstrating hint routing."""

    print("🚀 shardhint Hint Routing Example")
    print("=" * 60)

    registry = HintRegistry()
    resolver = HintRouteResolver(registry, statement_router=route_by_statement)

    metrics_hook = MetricsExecutionHook()
    broadcaster = build_broadcaster(ShardHintConfig(), extra_hooks=[metrics_hook])

    sql = "SELECT * FROM t_order WHERE user_id = ?"

    print("\n📊 Routing without hints...")
    print(f"  {resolver.route('t_order', sql)}")

    print("\n🎯 Routing with hints...")
    with HintManager(registry) as hint:
        hint.add_database_sharding_values("t_order", 1, 2)
        hint.add_table_sharding_value("t_order", 5)
        hint.set_master_route_only()

        decision = resolver.route("t_order", sql)
        print(f"  database: {decision.database_value}")
        print(f"  table: {decision.table_value}")
        print(f"  master only: {decision.master_route_only}")

    print("\n🎯 Database-only routing...")
    with HintManager(registry) as hint:
        hint.set_database_sharding_value(3)
        decision = resolver.route("t_user", "SELECT * FROM t_user")
        print(f"  database: {decision.database_value}")

    print("\n⚙️  Executing routed units...")
    route_units = [
        RouteUnit(data_source_name=f"ds_{i}", sql_unit=SQLUnit(sql="SELECT * FROM t_order_5", parameters=[10]))
        for i in (1, 2)
    ]

    def execute(route_unit: RouteUnit) -> None:
        metadata = DataSourceMetaData(host_name="localhost", port=3306, schema_name=route_unit.data_source_name)
        broadcaster.start(route_unit, metadata, False)
        broadcaster.finish_success()

    with ThreadPoolExecutor(max_workers=2) as executor:
        list(executor.map(execute, route_units))

    summary = metrics_hook.get_summary()
    print(f"\n📈 Executions: {summary['total_executions']}, success rate {summary['success_rate']:.1%}")
    print(f"   Routing stats: {resolver.get_routing_stats()}")


if __name__ == "__main__":
    main()
