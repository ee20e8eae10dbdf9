"""
Execution hook broadcaster.

Fans each lifecycle notification out to every discovered hook. Hooks are
discovered once, on first use, and always notified in the same order. All
three notifications share one lock, so at most one notification is in
flight per broadcaster; the execution engine is expected to share a single
broadcaster process-wide.

An exception raised by a hook propagates to the caller unchanged and the
remaining hooks of that notification are not called.
"""

from typing import Optional, Sequence, Tuple
import logging
import threading

from .base import ExecutionHook, RouteUnit, DataSourceMetaData
from .discovery import HookDiscovery

logger = logging.getLogger(__name__)


class ExecutionHookBroadcaster(ExecutionHook):
    """Composite hook notifying all discovered hooks in a fixed order."""

    def __init__(
        self,
        hooks: Optional[Sequence[ExecutionHook]] = None,
        discovery: Optional[HookDiscovery] = None
    ):
        """
        Initialize the broadcaster.

        Args:
            hooks: Fixed hooks to notify; skips discovery when given
            discovery: Discovery run on first notification when hooks is None
        """
        self.lock = threading.RLock()
        self._discovery = discovery or HookDiscovery()
        self._hooks: Optional[Tuple[ExecutionHook, ...]] = tuple(hooks) if hooks is not None else None
        self._discovery_error: Optional[Exception] = None

    @property
    def hooks(self) -> Tuple[ExecutionHook, ...]:
        """Hooks in notification order, discovering them on first access."""
        with self.lock:
            if self._hooks is None:
                # A failed discovery is not retried, its error is raised again
                if self._discovery_error is not None:
                    raise self._discovery_error
                try:
                    self._hooks = self._discovery.discover()
                except Exception as e:
                    self._discovery_error = e
                    logger.error(f"Execution hook discovery failed: {e}")
                    raise
                logger.info(f"Execution hook broadcaster initialized with {len(self._hooks)} hooks")
            return self._hooks

    def start(
        self,
        route_unit: RouteUnit,
        data_source_metadata: DataSourceMetaData,
        is_trunk_thread: bool
    ) -> None:
        with self.lock:
            for hook in self.hooks:
                hook.start(route_unit, data_source_metadata, is_trunk_thread)

    def finish_success(self) -> None:
        with self.lock:
            for hook in self.hooks:
                hook.finish_success()

    def finish_failure(self, cause: BaseException) -> None:
        with self.lock:
            for hook in self.hooks:
                hook.finish_failure(cause)
