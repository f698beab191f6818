"""
Core type definitions and utilities.
"""

# Re-export financial utilities for easy access
from .financial import (
    FINANCIAL_DECIMALS,
    PERCENTAGE_DECIMALS,
    PRICE_DECIMALS,
    ZERO,
    PriceCache,
    is_finite_number,
    percentage_of,
    round_amount,
    round_percentage,
    round_price,
    safe_divide,
    to_float,
    trade_cost,
)

__all__ = [
    # Utility functions
    "to_float",
    "is_finite_number",
    "round_price",
    "round_amount",
    "round_percentage",
    "safe_divide",
    "percentage_of",
    "trade_cost",
    # Types
    "PriceCache",
    # Constants
    "FINANCIAL_DECIMALS",
    "PERCENTAGE_DECIMALS",
    "PRICE_DECIMALS",
    "ZERO",
]
