"""
CLI interface for shardhint
Provides command-line tools for inspecting hint files and execution hooks.
"""

import click
import json
import logging
import threading
from typing import Any, Dict, Optional

from prometheus_client import CollectorRegistry

from shardhint.config import load_config, load_hint_file, apply_hints, build_broadcaster
from shardhint.core import HintRegistry, HintManager, ShardingValue, ListShardingValue, RangeShardingValue
from shardhint.hooks import MetricsExecutionHook, RouteUnit, SQLUnit, DataSourceMetaData
from shardhint.routing import HintRouteResolver

# Set up logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


@click.group()
@click.option('--config', '-c', type=click.Path(exists=True), help='Configuration file path')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx, config, verbose):
    """shardhint hint routing and execution hook CLI"""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config
    ctx.obj['verbose'] = verbose


def describe_value(value: Optional[ShardingValue]) -> Optional[Dict[str, Any]]:
    """Convert a sharding value to a JSON friendly dict"""
    if value is None:
        return None
    if isinstance(value, RangeShardingValue):
        return {'type': 'range', 'column': value.column_name, 'lower': value.lower, 'upper': value.upper}
    if isinstance(value, ListShardingValue):
        return {'type': 'list', 'column': value.column_name, 'values': list(value.values)}
    return {'type': type(value).__name__, 'column': value.column_name}


@cli.command()
@click.pass_context
def hooks(ctx):
    """List execution hooks in notification order"""
    try:
        config = load_config(ctx.obj['config_path'])
        broadcaster = build_broadcaster(config)
        discovered = broadcaster.hooks

        if not discovered:
            click.echo("No execution hooks configured")
            return

        click.echo("\n🔌 Execution Hooks:")
        click.echo("=" * 30)
        for i, hook in enumerate(discovered, 1):
            click.echo(f"  {i}. {type(hook).__module__}.{type(hook).__name__}")

    except Exception as e:
        click.echo(f"❌ Error listing hooks: {e}", err=True)
        if ctx.obj.get('verbose'):
            raise


@cli.command()
@click.argument('logic_table')
@click.option('--hints', 'hint_file', type=click.Path(exists=True), required=True, help='Hint file path')
@click.option('--output', '-o', type=click.Choice(['json', 'table']), default='table', help='Output format')
@click.pass_context
def resolve(ctx, logic_table, hint_file, output):
    """Resolve the hinted routing inputs for a logical table"""
    try:
        config = load_config(ctx.obj['config_path'])
        registry = HintRegistry()
        resolver = HintRouteResolver(registry, history_size=config.routing_history_size)

        with HintManager(registry) as manager:
            apply_hints(manager, load_hint_file(hint_file))
            decision = resolver.resolve(logic_table)

        result = {
            'logic_table': decision.logic_table,
            'database_value': describe_value(decision.database_value),
            'table_value': describe_value(decision.table_value),
            'master_route_only': decision.master_route_only,
            'database_sharding_only': decision.database_sharding_only
        }

        if output == 'json':
            click.echo(json.dumps(result, indent=2, default=str))
        else:
            click.echo(f"\n🎯 Hint Routing for '{logic_table}'")
            click.echo("=" * 50)
            click.echo(f"Database value: {result['database_value'] or '-'}")
            click.echo(f"Table value: {result['table_value'] or '-'}")
            click.echo(f"Master route only: {'✅' if decision.master_route_only else '❌'}")
            click.echo(f"Database sharding only: {'✅' if decision.database_sharding_only else '❌'}")

    except Exception as e:
        click.echo(f"❌ Error: {e}", err=True)
        if ctx.obj.get('verbose'):
            raise


@cli.command()
@click.argument('data_source')
@click.argument('sql')
@click.option('--fail', is_flag=True, help='Finish executions with a failure')
@click.option('--workers', '-w', default=0, type=click.IntRange(min=0), help='Number of fan-out worker threads')
@click.pass_context
def simulate(ctx, data_source, sql, fail, workers):
    """Run lifecycle notifications for a simulated execution"""
    try:
        config = load_config(ctx.obj['config_path'])
        metrics_hook = MetricsExecutionHook(registry=CollectorRegistry())
        broadcaster = build_broadcaster(config, extra_hooks=[metrics_hook])

        route_unit = RouteUnit(data_source_name=data_source, sql_unit=SQLUnit(sql=sql))
        metadata = DataSourceMetaData(host_name='localhost', port=3306, schema_name=data_source)

        def execute(is_trunk_thread: bool) -> None:
            broadcaster.start(route_unit, metadata, is_trunk_thread)
            if fail:
                broadcaster.finish_failure(RuntimeError('simulated failure'))
            else:
                broadcaster.finish_success()

        execute(True)
        threads = [threading.Thread(target=execute, args=(False,)) for _ in range(workers)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        summary = metrics_hook.get_summary()
        click.echo("\n📈 Execution Summary")
        click.echo("=" * 40)
        click.echo(f"Total Executions: {summary['total_executions']}")
        click.echo(f"Successful: {summary['successful_executions']}")
        click.echo(f"Failed: {summary['failed_executions']}")
        click.echo(f"Success Rate: {summary['success_rate']:.1%}")
        click.echo(f"Average Time: {summary['average_execution_time_ms']:.2f}ms")

    except Exception as e:
        click.echo(f"❌ Error: {e}", err=True)
        if ctx.obj.get('verbose'):
            raise


if __name__ == '__main__':
    cli()
