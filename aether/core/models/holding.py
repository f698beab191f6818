"""
Derived portfolio views: per-asset holdings and account statistics.

Neither type is stored; both are recomputed from the ledger and the
market data cache.
"""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class Holding:
    """Aggregated position in one asset."""

    symbol: str
    quantity: float
    total_cost: float
    avg_cost: float
    break_even: float
    current_price: float
    market_value: float
    unrealized_pnl: float
    pnl_percent: float
    allocation_percent: float
    change_24h: float

    @property
    def has_price(self) -> bool:
        """Check if a market price was available for this holding."""
        return self.current_price > 0

    def to_dict(self) -> dict[str, Any]:
        """Convert holding to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class PortfolioStats:
    """Top-level account metrics."""

    total_value: float
    total_cost: float
    total_pnl: float
    pnl_percent: float
    weighted_change_24h: float
    holding_count: int = 0

    @classmethod
    def empty(cls) -> "PortfolioStats":
        """Statistics for an empty ledger."""
        return cls(
            total_value=0.0,
            total_cost=0.0,
            total_pnl=0.0,
            pnl_percent=0.0,
            weighted_change_24h=0.0,
            holding_count=0,
        )
