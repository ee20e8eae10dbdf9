"""
shardhint: hint based sharding overrides

Lets callers supply sharding keys directly instead of having them parsed
from statements, and broadcasts execution lifecycle events to pluggable hooks.
"""

__version__ = "0.1.0"
__author__ = "shardhint Team"

from .core.hint_registry import HintRegistry
from .core.hint_manager import HintManager
from .core.sharding_value import ShardingOperator, ListShardingValue, RangeShardingValue
from .hooks.broadcaster import ExecutionHookBroadcaster
from .hooks.base import ExecutionHook

__all__ = [
    "HintRegistry",
    "HintManager",
    "ShardingOperator",
    "ListShardingValue",
    "RangeShardingValue",
    "ExecutionHookBroadcaster",
    "ExecutionHook"
]
