"""
Market snapshot domain model.
"""

from dataclasses import asdict, dataclass
from typing import Any

from aether.core.constants import STABLE_PRICE
from aether.core.utils.validation import validate_finite, validate_non_negative, validate_symbol


@dataclass(frozen=True)
class MarketSnapshot:
    """Latest 24h quote for one symbol."""

    symbol: str
    price: float
    change_24h: float = 0.0
    high_24h: float = 0.0
    low_24h: float = 0.0
    volume_24h: float = 0.0

    def __post_init__(self) -> None:
        """Validate snapshot data after initialization."""
        object.__setattr__(self, "symbol", validate_symbol(self.symbol))
        object.__setattr__(self, "price", validate_non_negative(self.price, "price"))
        object.__setattr__(self, "change_24h", validate_finite(self.change_24h, "change_24h"))
        object.__setattr__(self, "high_24h", validate_finite(self.high_24h, "high_24h"))
        object.__setattr__(self, "low_24h", validate_finite(self.low_24h, "low_24h"))
        object.__setattr__(self, "volume_24h", validate_finite(self.volume_24h, "volume_24h"))

    @classmethod
    def stable(cls, symbol: str) -> "MarketSnapshot":
        """Fixed snapshot for a stable-value symbol pegged to the quote asset."""
        return cls(
            symbol=symbol,
            price=STABLE_PRICE,
            change_24h=0.0,
            high_24h=STABLE_PRICE,
            low_24h=STABLE_PRICE,
            volume_24h=0.0,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert snapshot to dictionary."""
        return asdict(self)
