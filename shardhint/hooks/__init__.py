"""
Hooks module - execution lifecycle observers and their broadcaster
"""

from .base import ExecutionHook, RouteUnit, SQLUnit, DataSourceMetaData
from .discovery import HookDiscovery, HOOK_ENTRY_POINT_GROUP, load_hook
from .broadcaster import ExecutionHookBroadcaster
from .logging_hook import LoggingExecutionHook
from .metrics_hook import MetricsExecutionHook, ExecutionEvent

__all__ = [
    'ExecutionHook', 'RouteUnit', 'SQLUnit', 'DataSourceMetaData',
    'HookDiscovery', 'HOOK_ENTRY_POINT_GROUP', 'load_hook',
    'ExecutionHookBroadcaster',
    'LoggingExecutionHook',
    'MetricsExecutionHook', 'ExecutionEvent'
]
