"""
Unit tests for financial helpers.
"""

import math

import pytest

from aether.core.types.financial import (
    FINANCIAL_DECIMALS,
    PERCENTAGE_DECIMALS,
    PRICE_DECIMALS,
    ZERO,
    is_finite_number,
    percentage_of,
    round_amount,
    round_percentage,
    round_price,
    safe_divide,
    to_float,
    trade_cost,
)


class TestFinancialTypeConversions:
    """Test suite for numeric conversions."""

    def test_should_return_float_unchanged(self) -> None:
        """Test that float input is returned unchanged."""
        result = to_float(50000.0)

        assert isinstance(result, float)
        assert result == 50000.0

    def test_should_convert_string_and_int_to_float(self) -> None:
        """Test converting ticker strings and ints."""
        assert to_float("1.5") == 1.5
        assert to_float("42.123456789") == 42.123456789
        assert to_float(100) == 100.0

    def test_should_reject_bool_and_other_types(self) -> None:
        """Test bools and containers are not numbers."""
        with pytest.raises(TypeError):
            to_float(True)

        with pytest.raises(TypeError):
            to_float([1])

    def test_should_raise_on_non_numeric_string(self) -> None:
        """Test invalid numeric strings."""
        with pytest.raises(ValueError):
            to_float("not-a-number")

    def test_should_detect_finite_numbers(self) -> None:
        """Test finite number detection."""
        assert is_finite_number(1)
        assert is_finite_number(-2.5)
        assert not is_finite_number(math.nan)
        assert not is_finite_number(math.inf)
        assert not is_finite_number(False)
        assert not is_finite_number("1")


class TestFinancialCalculations:
    """Test suite for valuation helpers."""

    def test_should_divide_safely(self) -> None:
        """Test safe division guards against zero."""
        assert safe_divide(10.0, 4.0) == 2.5
        assert safe_divide(10.0, 0.0) == ZERO
        assert safe_divide(-10.0, 4.0) == -2.5

    def test_should_compute_percentage_of_positive_whole(self) -> None:
        """Test percentage calculation."""
        assert percentage_of(60.0, 100.0) == pytest.approx(60.0)
        assert percentage_of(995.0, 5005.0) == pytest.approx(19.8801, rel=1e-4)

    def test_should_return_zero_percentage_for_non_positive_whole(self) -> None:
        """Test percentage of zero or negative totals."""
        assert percentage_of(10.0, 0.0) == ZERO
        assert percentage_of(10.0, -5.0) == ZERO

    def test_should_add_fee_for_both_directions(self) -> None:
        """Test fee is added to acquisitions and disposals."""
        assert trade_cost(0.1, 50000.0, 5.0) == pytest.approx(5005.0)
        assert trade_cost(-0.1, 50000.0, 5.0) == pytest.approx(-4995.0)

    def test_should_round_to_configured_precision(self) -> None:
        """Test rounding helpers."""
        assert round_price(123.456) == 123.46
        assert round_amount(0.123456789123) == round(0.123456789123, FINANCIAL_DECIMALS)
        assert round_percentage(19.880119880) == round(19.880119880, PERCENTAGE_DECIMALS)
        assert PRICE_DECIMALS == 2
