"""
Sharding value model for hint based routing.

A sharding value describes one routing predicate for one logical table and
column: either a discrete list of values (``=`` / ``IN``) or a closed range
(``BETWEEN``). Values are immutable once built.
"""

from typing import Any, Sequence, Tuple
from dataclasses import dataclass
from enum import Enum
import logging

from .exceptions import InvalidArgumentError, UnsupportedOperationError

logger = logging.getLogger(__name__)


class ShardingOperator(Enum):
    """Operators a hint can express."""
    EQUAL = "="
    IN = "IN"
    BETWEEN = "BETWEEN"

    @property
    def expression(self) -> str:
        """SQL text of the operator."""
        return self.value


@dataclass(frozen=True)
class ShardingValue:
    """Base class for sharding values."""
    logic_table: str
    column_name: str


@dataclass(frozen=True)
class ListShardingValue(ShardingValue):
    """Discrete sharding values, in the order they were supplied."""
    values: Tuple[Any, ...]

    def __post_init__(self):
        values = tuple(self.values)
        if not values:
            raise InvalidArgumentError(
                f"Sharding values for {self.logic_table}.{self.column_name} must not be empty"
            )
        object.__setattr__(self, "values", values)


@dataclass(frozen=True)
class RangeShardingValue(ShardingValue):
    """Closed range ``[lower, upper]`` of sharding values."""
    lower: Any
    upper: Any

    def __post_init__(self):
        try:
            inverted = self.upper < self.lower
        except TypeError as e:
            raise InvalidArgumentError(
                f"Range bounds {self.lower!r} and {self.upper!r} are not comparable"
            ) from e

        # Inverted input is normalized rather than rejected
        if inverted:
            lower, upper = self.upper, self.lower
            object.__setattr__(self, "lower", lower)
            object.__setattr__(self, "upper", upper)
            logger.debug(f"Normalized inverted range for {self.logic_table}: [{lower!r}, {upper!r}]")

    def contains(self, value: Any) -> bool:
        """Check whether a value falls inside the closed range."""
        return self.lower <= value <= self.upper


def create_sharding_value(
    logic_table: str,
    column_name: str,
    operator: ShardingOperator,
    values: Sequence[Any]
) -> ShardingValue:
    """
    Build a sharding value for the given operator.

    Args:
        logic_table: Logical table name
        column_name: Sharding column name
        operator: Sharding operator
        values: Values supplied by the caller

    Returns:
        ListShardingValue for EQUAL/IN, RangeShardingValue for BETWEEN

    Raises:
        InvalidArgumentError: If values are empty or BETWEEN does not get exactly 2 values
        UnsupportedOperationError: If the operator is not a ShardingOperator
    """
    if values is None or len(values) == 0:
        raise InvalidArgumentError(f"At least one sharding value is required for {logic_table}")

    if operator in (ShardingOperator.EQUAL, ShardingOperator.IN):
        return ListShardingValue(logic_table, column_name, tuple(values))
    elif operator is ShardingOperator.BETWEEN:
        if len(values) != 2:
            raise InvalidArgumentError(
                f"BETWEEN requires exactly 2 values, got {len(values)} for {logic_table}"
            )
        return RangeShardingValue(logic_table, column_name, values[0], values[1])

    raise UnsupportedOperationError(f"Unsupported sharding operator: {operator!r}")
