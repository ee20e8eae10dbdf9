"""
Execution hook that writes lifecycle events to the standard logger.
"""

import logging
import threading

from .base import ExecutionHook, RouteUnit, DataSourceMetaData

logger = logging.getLogger(__name__)


class LoggingExecutionHook(ExecutionHook):
    """Logs start, success and failure of each routed unit."""

    def __init__(self, log_sql: bool = True):
        self.log_sql = log_sql
        self._local = threading.local()

    def start(
        self,
        route_unit: RouteUnit,
        data_source_metadata: DataSourceMetaData,
        is_trunk_thread: bool
    ) -> None:
        self._local.data_source_name = route_unit.data_source_name
        thread_kind = "trunk" if is_trunk_thread else "worker"

        logger.info(
            f"Executing on {route_unit.data_source_name} "
            f"({data_source_metadata.host_name}:{data_source_metadata.port}) in {thread_kind} thread"
        )
        if self.log_sql:
            logger.debug(f"SQL: {route_unit.sql_unit.sql} params={route_unit.sql_unit.parameters}")

    def finish_success(self) -> None:
        logger.info(f"Execution on {self._pop_data_source()} succeeded")

    def finish_failure(self, cause: BaseException) -> None:
        logger.error(f"Execution on {self._pop_data_source()} failed: {cause}")

    def _pop_data_source(self) -> str:
        name = getattr(self._local, "data_source_name", None)
        self._local.data_source_name = None
        return name or "unknown"
