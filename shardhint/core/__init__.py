"""Core hint routing modules."""

from .exceptions import (
    HintError, InvalidArgumentError, AlreadyReleasedError,
    UnsupportedOperationError, HintNotActiveError
)
from .sharding_value import (
    ShardingOperator, ShardingValue, ListShardingValue,
    RangeShardingValue, create_sharding_value
)
from .hint_registry import HintRegistry, DB_TABLE_NAME, DB_COLUMN_NAME
from .hint_manager import HintManager

__all__ = [
    "HintError",
    "InvalidArgumentError",
    "AlreadyReleasedError",
    "UnsupportedOperationError",
    "HintNotActiveError",
    "ShardingOperator",
    "ShardingValue",
    "ListShardingValue",
    "RangeShardingValue",
    "create_sharding_value",
    "HintRegistry",
    "DB_TABLE_NAME",
    "DB_COLUMN_NAME",
    "HintManager"
]
