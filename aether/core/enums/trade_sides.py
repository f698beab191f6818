"""
Trade direction enumerations.

This module defines whether a trade acquires or disposes of an asset.
"""

from enum import StrEnum


class TradeSide(StrEnum):
    """
    Direction of a trade.

    Derived from the sign of the trade amount: positive amounts are
    acquisitions, negative amounts are disposals.
    """

    BUY = "buy"
    SELL = "sell"

    @classmethod
    def from_amount(cls, amount: float) -> "TradeSide":
        """
        Get the side implied by a signed amount.

        Args:
            amount: Signed trade amount (must be non-zero)

        Returns:
            BUY for positive amounts, SELL for negative amounts
        """
        return cls.BUY if amount > 0 else cls.SELL
