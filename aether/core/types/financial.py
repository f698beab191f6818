"""
Financial helpers for portfolio valuation.

All valuation runs on plain floats: inputs come from user entry and from
exchange tickers that are themselves decimal strings parsed to float, and the
derived figures are display values, not settlement amounts. Division helpers
here return 0.0 instead of raising so an empty or unpriced portfolio never
produces NaN.
"""

import math
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from aether.core.constants import HUNDRED

if TYPE_CHECKING:
    from aether.core.models.market import MarketSnapshot

# Financial calculation precision (number of decimal places)
FINANCIAL_DECIMALS = 8  # 8 decimal places (crypto standard)
PERCENTAGE_DECIMALS = 4  # 4 decimal places for percentages
PRICE_DECIMALS = 2  # 2 decimal places for USD prices

ZERO = 0.0

# Symbol -> latest quote; always an immutable mapping when owned by the cache
PriceCache = Mapping[str, "MarketSnapshot"]


def to_float(value: Any) -> float:
    """Convert various numeric types to float.

    Args:
        value: Numeric value or numeric string to convert

    Returns:
        Float representation of the value

    Raises:
        TypeError: If value is a bool or cannot be interpreted as a number
        ValueError: If a string value is not numeric

    Examples:
        >>> to_float(50000)
        50000.0
        >>> to_float('1.5')
        1.5
    """
    if isinstance(value, bool):
        raise TypeError("Boolean is not a numeric value")
    if isinstance(value, float):
        return value
    if isinstance(value, int | str):
        return float(value)
    raise TypeError(f"Expected a number, got {type(value).__name__}")


def is_finite_number(value: Any) -> bool:
    """Check that a value is a real, finite number (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value)


def round_price(price: float) -> float:
    """Round price to display precision."""
    return round(price, PRICE_DECIMALS)


def round_amount(amount: float) -> float:
    """Round amount to crypto precision."""
    return round(amount, FINANCIAL_DECIMALS)


def round_percentage(percentage: float) -> float:
    """Round percentage to display precision."""
    return round(percentage, PERCENTAGE_DECIMALS)


def safe_divide(numerator: float, denominator: float) -> float:
    """Divide, returning 0.0 when the denominator is zero.

    Examples:
        >>> safe_divide(10.0, 4.0)
        2.5
        >>> safe_divide(10.0, 0.0)
        0.0
    """
    if denominator == ZERO:
        return ZERO
    return numerator / denominator


def percentage_of(part: float, whole: float) -> float:
    """Express part as a percentage of whole, 0.0 when whole is not positive."""
    if whole <= ZERO:
        return ZERO
    return (part / whole) * HUNDRED


def trade_cost(amount: float, entry_price: float, fee: float) -> float:
    """Cost contribution of one trade: notional plus fee.

    The fee is added for acquisitions and disposals alike.

    Args:
        amount: Signed trade amount
        entry_price: Price per unit
        fee: Non-negative fee

    Returns:
        amount * entry_price + fee
    """
    return amount * entry_price + fee
