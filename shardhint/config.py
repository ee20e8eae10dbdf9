"""
Configuration for shardhint.

Loads the hook configuration and hint files from YAML or JSON and validates
them with pydantic models.

Example configuration::

    hooks:
      - mypackage.tracing:TracingHook
    discover_entry_points: true
    enable_logging_hook: true
    enable_metrics_hook: false

Example hint file::

    master_route_only: true
    database:
      t_order: [1, 2, 3]          # IN
      t_order_item: {between: [10, 20]}
    table:
      t_order: 5                  # =
"""

import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, StrictBool

from .core.hint_manager import HintManager
from .hooks import (
    ExecutionHook, ExecutionHookBroadcaster, HookDiscovery, HOOK_ENTRY_POINT_GROUP,
    LoggingExecutionHook, MetricsExecutionHook
)

logger = logging.getLogger(__name__)

# StrictBool first so booleans are not coerced to 1 or 0
HintScalar = Union[StrictBool, int, float, datetime, date, str]


class ShardHintConfig(BaseModel):
    """Hook and routing configuration."""
    hooks: List[str] = Field(default_factory=list, description="Hook import paths in 'module:Class' form")
    discover_entry_points: bool = Field(False, description="Scan installed entry points for hooks")
    entry_point_group: str = Field(HOOK_ENTRY_POINT_GROUP, description="Entry point group to scan")
    enable_logging_hook: bool = True
    enable_metrics_hook: bool = False
    routing_history_size: int = Field(1000, gt=0)


class RangeHintModel(BaseModel):
    between: List[HintScalar] = Field(..., min_length=2, max_length=2)


HintValue = Union[RangeHintModel, List[HintScalar], HintScalar]


class HintFileModel(BaseModel):
    """Hints for one unit of work."""
    database_only: Optional[HintScalar] = Field(None, description="Database-only sharding value")
    master_route_only: bool = False
    database: Dict[str, HintValue] = Field(default_factory=dict)
    table: Dict[str, HintValue] = Field(default_factory=dict)


def _read_file(path: Union[str, Path]) -> Dict[str, Any]:
    path = str(path)
    with open(path, 'r') as f:
        if path.endswith('.yaml') or path.endswith('.yml'):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)
    return data or {}


def load_config(config_path: Optional[str]) -> ShardHintConfig:
    """Load configuration from file, or defaults when no path is given"""
    if not config_path:
        return ShardHintConfig()

    config = ShardHintConfig.model_validate(_read_file(config_path))
    logger.info(f"Loaded configuration from {config_path}")
    return config


def load_hint_file(hint_path: str) -> HintFileModel:
    """Load a hint file"""
    return HintFileModel.model_validate(_read_file(hint_path))


def apply_hints(manager: HintManager, hints: HintFileModel) -> None:
    """
    Apply hints from a hint file to a manager.

    Table entries are applied first and ``database_only`` last, so a file
    that sets ``database_only`` always ends up in database-only mode.

    Args:
        manager: Active hint manager
        hints: Parsed hint file
    """
    for logic_table, value in hints.database.items():
        _apply_value(
            logic_table, value,
            manager.add_database_sharding_value,
            manager.add_database_sharding_values,
            manager.add_database_sharding_range
        )

    for logic_table, value in hints.table.items():
        _apply_value(
            logic_table, value,
            manager.add_table_sharding_value,
            manager.add_table_sharding_values,
            manager.add_table_sharding_range
        )

    if hints.master_route_only:
        manager.set_master_route_only()

    if hints.database_only is not None:
        manager.set_database_sharding_value(hints.database_only)


def _apply_value(logic_table, value, add_equal, add_in, add_range) -> None:
    if isinstance(value, RangeHintModel):
        add_range(logic_table, value.between[0], value.between[1])
    elif isinstance(value, list):
        add_in(logic_table, *value)
    else:
        add_equal(logic_table, value)


def build_broadcaster(
    config: ShardHintConfig,
    extra_hooks: Optional[List[ExecutionHook]] = None,
    metrics_registry=None
) -> ExecutionHookBroadcaster:
    """
    Assemble the hook discovery and broadcaster described by a configuration.

    Built-in hooks come first, then ``extra_hooks``, then configured import
    paths and entry points.

    Args:
        config: Configuration
        extra_hooks: Hook instances registered explicitly
        metrics_registry: Prometheus registry for the metrics hook; a fresh
            registry is created when omitted

    Returns:
        Broadcaster that discovers its hooks on first notification
    """
    discovery = HookDiscovery(
        hook_paths=config.hooks,
        use_entry_points=config.discover_entry_points,
        group=config.entry_point_group
    )

    if config.enable_logging_hook:
        discovery.register(LoggingExecutionHook())

    if config.enable_metrics_hook:
        discovery.register(MetricsExecutionHook(registry=metrics_registry))

    for hook in extra_hooks or []:
        discovery.register(hook)

    return ExecutionHookBroadcaster(discovery=discovery)
