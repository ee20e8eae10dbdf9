"""
Tests for the sharding value model.
"""

import pytest
from dataclasses import FrozenInstanceError

from shardhint.core import (
    ShardingOperator, ListShardingValue, RangeShardingValue, create_sharding_value,
    InvalidArgumentError, UnsupportedOperationError
)


class TestListShardingValue:
    """Test EQUAL and IN sharding values."""

    def test_in_preserves_order_and_duplicates(self):
        """Test values read back exactly as supplied."""
        value = create_sharding_value("t_order", "order_id", ShardingOperator.IN, [3, 1, 3, 2])

        assert isinstance(value, ListShardingValue)
        assert value.values == (3, 1, 3, 2)
        assert value.logic_table == "t_order"
        assert value.column_name == "order_id"

    def test_equal_is_single_element_list(self):
        """Test EQUAL produces a one-element list value."""
        value = create_sharding_value("t_order", "order_id", ShardingOperator.EQUAL, [5])

        assert isinstance(value, ListShardingValue)
        assert value.values == (5,)

    def test_empty_values_rejected(self):
        """Test construction from an empty sequence fails."""
        with pytest.raises(InvalidArgumentError):
            create_sharding_value("t_order", "order_id", ShardingOperator.IN, [])

        with pytest.raises(InvalidArgumentError):
            ListShardingValue("t_order", "order_id", ())

    def test_value_is_immutable(self):
        """Test constructed values cannot be modified."""
        value = create_sharding_value("t_order", "order_id", ShardingOperator.IN, [1, 2])

        with pytest.raises(FrozenInstanceError):
            value.values = (9,)

    def test_invalid_argument_is_value_error(self):
        """Test InvalidArgumentError can be handled as ValueError."""
        with pytest.raises(ValueError):
            create_sharding_value("t_order", "order_id", ShardingOperator.EQUAL, ())


class TestRangeShardingValue:
    """Test BETWEEN sharding values."""

    def test_between_creates_closed_range(self):
        """Test BETWEEN builds a range including both bounds."""
        value = create_sharding_value("t_order", "order_id", ShardingOperator.BETWEEN, [10, 20])

        assert isinstance(value, RangeShardingValue)
        assert (value.lower, value.upper) == (10, 20)
        assert value.contains(10)
        assert value.contains(20)
        assert not value.contains(21)

    def test_inverted_range_is_normalized(self):
        """Test inverted bounds are swapped so lower <= upper."""
        value = create_sharding_value("t_order", "order_id", ShardingOperator.BETWEEN, [20, 10])

        assert value.lower == 10
        assert value.upper == 20

    def test_equal_bounds(self):
        """Test a range with equal bounds holds exactly one value."""
        value = create_sharding_value("t_order", "order_id", ShardingOperator.BETWEEN, ["b", "b"])

        assert value.contains("b")
        assert not value.contains("a")

    @pytest.mark.parametrize("values", [[1], [1, 2, 3]])
    def test_between_requires_two_values(self, values):
        """Test BETWEEN with a value count other than 2 fails."""
        with pytest.raises(InvalidArgumentError):
            create_sharding_value("t_order", "order_id", ShardingOperator.BETWEEN, values)

    def test_incomparable_bounds_rejected(self):
        """Test bounds that cannot be ordered are rejected."""
        with pytest.raises(InvalidArgumentError):
            create_sharding_value("t_order", "order_id", ShardingOperator.BETWEEN, [1, "a"])


class TestShardingOperator:
    """Test operator handling."""

    def test_operator_expressions(self):
        """Test SQL expressions of operators."""
        assert ShardingOperator.EQUAL.expression == "="
        assert ShardingOperator.IN.expression == "IN"
        assert ShardingOperator.BETWEEN.expression == "BETWEEN"

    def test_unknown_operator_unsupported(self):
        """Test an operator outside the enumeration is unsupported."""
        with pytest.raises(UnsupportedOperationError):
            create_sharding_value("t_order", "order_id", "LIKE", [1])
