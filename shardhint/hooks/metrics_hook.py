"""
Metrics Hook - collects execution metrics for routed units.

Exposes Prometheus metrics and keeps in-memory aggregates that can be
summarized without a Prometheus server.
"""

import logging
import time
from typing import Dict, List, Optional, Any
from dataclasses import dataclass
from collections import Counter
import threading

from prometheus_client import CollectorRegistry, Counter as PrometheusCounter, Histogram, Gauge

from .base import ExecutionHook, RouteUnit, DataSourceMetaData

logger = logging.getLogger(__name__)


@dataclass
class ExecutionEvent:
    """A single finished execution"""
    data_source_name: str
    is_trunk_thread: bool
    timestamp: float
    duration_ms: Optional[float]
    success: bool
    error_message: Optional[str] = None


class MetricsExecutionHook(ExecutionHook):
    """
    Records the outcome and duration of each routed unit execution.

    The start of an execution is remembered per thread, so finish_success()
    and finish_failure() are matched with the start() issued on the same
    thread.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None, max_events: int = 10000):
        """
        Initialize the metrics hook.

        Args:
            registry: Prometheus registry the collectors are registered with;
                each hook gets its own registry when omitted
            max_events: Maximum number of in-memory events kept
        """
        self.registry = registry if registry is not None else CollectorRegistry()
        self.max_events = max_events
        self.events: List[ExecutionEvent] = []
        self.lock = threading.RLock()
        self._local = threading.local()

        self.prom_execution_counter = PrometheusCounter(
            'shardhint_executions_total',
            'Total number of routed unit executions',
            ['data_source', 'status', 'thread_kind'],
            registry=self.registry
        )

        self.prom_execution_duration = Histogram(
            'shardhint_execution_duration_seconds',
            'Time spent executing routed units',
            ['data_source'],
            registry=self.registry
        )

        self.prom_active_executions = Gauge(
            'shardhint_active_executions',
            'Number of routed units currently executing',
            ['data_source'],
            registry=self.registry
        )

    def start(
        self,
        route_unit: RouteUnit,
        data_source_metadata: DataSourceMetaData,
        is_trunk_thread: bool
    ) -> None:
        previous = getattr(self._local, "pending", None)
        if previous is not None:
            logger.warning(f"Execution on {previous[0]} started again before finishing on this thread")
            self.prom_active_executions.labels(data_source=previous[0]).dec()

        self._local.pending = (route_unit.data_source_name, is_trunk_thread, time.perf_counter())
        self.prom_active_executions.labels(data_source=route_unit.data_source_name).inc()

    def finish_success(self) -> None:
        self._record(success=True)

    def finish_failure(self, cause: BaseException) -> None:
        self._record(success=False, error_message=f"{type(cause).__name__}: {cause}")

    def _record(self, success: bool, error_message: Optional[str] = None) -> None:
        pending = getattr(self._local, "pending", None)
        self._local.pending = None

        if pending is None:
            logger.warning("Execution finished without a matching start on this thread")
            data_source_name, is_trunk_thread, duration_ms = "unknown", False, None
        else:
            data_source_name, is_trunk_thread, started = pending
            duration_ms = (time.perf_counter() - started) * 1000
            self.prom_active_executions.labels(data_source=data_source_name).dec()
            self.prom_execution_duration.labels(data_source=data_source_name).observe(duration_ms / 1000.0)

        self.prom_execution_counter.labels(
            data_source=data_source_name,
            status='success' if success else 'error',
            thread_kind='trunk' if is_trunk_thread else 'worker'
        ).inc()

        event = ExecutionEvent(
            data_source_name=data_source_name,
            is_trunk_thread=is_trunk_thread,
            timestamp=time.time(),
            duration_ms=duration_ms,
            success=success,
            error_message=error_message
        )

        with self.lock:
            self.events.append(event)
            # Keep only the most recent events
            if len(self.events) > self.max_events:
                self.events = self.events[-self.max_events:]

    def get_summary(self, hours: int = 24) -> Dict[str, Any]:
        """
        Get a summary of executions for the specified time period.

        Args:
            hours: Number of hours to look back

        Returns:
            Dictionary containing the execution summary
        """
        cutoff_time = time.time() - (hours * 3600)

        with self.lock:
            recent_events = [e for e in self.events if e.timestamp >= cutoff_time]

        successful = len([e for e in recent_events if e.success])
        failed = len(recent_events) - successful
        durations = [e.duration_ms for e in recent_events if e.duration_ms is not None]
        usage = Counter(e.data_source_name for e in recent_events)
        errors = Counter(e.error_message.split(':')[0] for e in recent_events if e.error_message)

        return {
            'time_period_hours': hours,
            'total_executions': len(recent_events),
            'successful_executions': successful,
            'failed_executions': failed,
            'success_rate': successful / max(len(recent_events), 1),
            'data_source_usage': dict(usage.most_common(10)),
            'error_types': dict(errors),
            'average_execution_time_ms': sum(durations) / max(len(durations), 1)
        }

    def cleanup_old_events(self, max_age_hours: int = 168) -> int:
        """Drop events older than max_age_hours and return how many were removed."""
        cutoff_time = time.time() - (max_age_hours * 3600)

        with self.lock:
            initial_count = len(self.events)
            self.events = [e for e in self.events if e.timestamp >= cutoff_time]
            removed_count = initial_count - len(self.events)

        if removed_count > 0:
            logger.info(f"Cleaned up {removed_count} old execution events")
        return removed_count
