"""
Execution hook contract.

Defines the interface observers implement to be notified around the
physical execution of each routed unit, and the descriptors passed to them.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional
from dataclasses import dataclass, field


@dataclass(frozen=True)
class SQLUnit:
    """A statement and its parameters as sent to one physical target."""
    sql: str
    parameters: List[Any] = field(default_factory=list)


@dataclass(frozen=True)
class RouteUnit:
    """Pairing of a physical data source and the statement to run on it."""
    data_source_name: str
    sql_unit: SQLUnit


@dataclass(frozen=True)
class DataSourceMetaData:
    """Connection level metadata of a physical data source."""
    host_name: str
    port: int
    schema_name: Optional[str] = None


class ExecutionHook(ABC):
    """
    Observer notified at execution lifecycle points.

    Each start() is followed by exactly one of finish_success() or
    finish_failure() on the same thread.
    """

    @abstractmethod
    def start(
        self,
        route_unit: RouteUnit,
        data_source_metadata: DataSourceMetaData,
        is_trunk_thread: bool
    ) -> None:
        """
        Handle the start of a routed unit's execution.

        Args:
            route_unit: Routed unit being executed
            data_source_metadata: Metadata of the target data source
            is_trunk_thread: True on the statement's originating thread,
                False on a fan-out worker thread
        """
        pass

    @abstractmethod
    def finish_success(self) -> None:
        """Handle successful completion of the started execution."""
        pass

    @abstractmethod
    def finish_failure(self, cause: BaseException) -> None:
        """Handle failed completion of the started execution."""
        pass
