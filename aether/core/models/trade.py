"""
Trade domain model.

A trade is a single logged execution. Trades are immutable once created;
the ledger replaces or drops whole records, never edits them.
"""

from dataclasses import dataclass
from typing import Any

from aether.core.constants import DEFAULT_EXCHANGE
from aether.core.enums import TradeSide
from aether.core.exceptions.portfolio import ValidationError
from aether.core.types.financial import trade_cost
from aether.core.utils.validation import (
    validate_non_negative,
    validate_non_zero,
    validate_positive,
    validate_symbol,
    validate_timestamp,
)

# Workspace/storage key -> attribute name
_FIELD_ALIASES = {
    "id": "id",
    "symbol": "symbol",
    "entryPrice": "entry_price",
    "entry_price": "entry_price",
    "amount": "amount",
    "fee": "fee",
    "exchange": "exchange",
    "timestamp": "timestamp",
    "notes": "notes",
}
_REQUIRED_FIELDS = ("id", "symbol", "entry_price", "amount", "timestamp")


def _validate_common(symbol: Any, entry_price: Any, amount: Any, fee: Any) -> tuple:
    """Validate and normalize the fields shared by Trade and TradeInput."""
    return (
        validate_symbol(symbol),
        validate_positive(entry_price, "entry_price"),
        validate_non_zero(amount, "amount"),
        validate_non_negative(fee, "fee"),
    )


@dataclass(frozen=True)
class TradeInput:
    """User-entered trade before the ledger assigns an id and timestamp."""

    symbol: str
    entry_price: float
    amount: float
    fee: float = 0.0
    exchange: str = DEFAULT_EXCHANGE
    notes: str | None = None

    def __post_init__(self) -> None:
        """Validate and normalize input fields."""
        symbol, entry_price, amount, fee = _validate_common(
            self.symbol, self.entry_price, self.amount, self.fee
        )
        object.__setattr__(self, "symbol", symbol)
        object.__setattr__(self, "entry_price", entry_price)
        object.__setattr__(self, "amount", amount)
        object.__setattr__(self, "fee", fee)
        object.__setattr__(self, "exchange", str(self.exchange or DEFAULT_EXCHANGE))

    def to_trade(self, trade_id: str, timestamp: int) -> "Trade":
        """Materialize this input as a ledger record."""
        return Trade(
            id=trade_id,
            symbol=self.symbol,
            entry_price=self.entry_price,
            amount=self.amount,
            fee=self.fee,
            exchange=self.exchange,
            timestamp=timestamp,
            notes=self.notes,
        )


@dataclass(frozen=True)
class Trade:
    """Represents a logged trade."""

    id: str
    symbol: str
    entry_price: float
    amount: float
    fee: float = 0.0
    exchange: str = DEFAULT_EXCHANGE
    timestamp: int = 0
    notes: str | None = None

    def __post_init__(self) -> None:
        """Validate trade data after initialization."""
        if not isinstance(self.id, str) or not self.id:
            raise ValidationError(f"Trade id must be a non-empty string, got {self.id!r}")
        symbol, entry_price, amount, fee = _validate_common(
            self.symbol, self.entry_price, self.amount, self.fee
        )
        object.__setattr__(self, "symbol", symbol)
        object.__setattr__(self, "entry_price", entry_price)
        object.__setattr__(self, "amount", amount)
        object.__setattr__(self, "fee", fee)
        object.__setattr__(self, "timestamp", validate_timestamp(self.timestamp))
        object.__setattr__(self, "exchange", str(self.exchange or DEFAULT_EXCHANGE))
        if self.notes is not None and not isinstance(self.notes, str):
            raise ValidationError(f"notes must be a string, got {type(self.notes).__name__}")

    @property
    def side(self) -> TradeSide:
        """Direction implied by the sign of the amount."""
        return TradeSide.from_amount(self.amount)

    def notional_value(self) -> float:
        """Calculate the notional value of the trade."""
        return abs(self.amount) * self.entry_price

    def cost(self) -> float:
        """Signed cost contribution including the fee."""
        return trade_cost(self.amount, self.entry_price, self.fee)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase record used by storage and workspaces."""
        data: dict[str, Any] = {
            "id": self.id,
            "symbol": self.symbol,
            "entryPrice": self.entry_price,
            "amount": self.amount,
            "fee": self.fee,
            "exchange": self.exchange,
            "timestamp": self.timestamp,
        }
        if self.notes is not None:
            data["notes"] = self.notes
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "Trade":
        """
        Build a Trade from a storage or workspace record.

        Accepts camelCase or snake_case keys, ignores unknown keys and treats
        a missing or null fee as zero.

        Raises:
            ValidationError: If the record is not a mapping or misses fields
        """
        if not isinstance(data, dict):
            raise ValidationError(f"Trade record must be an object, got {type(data).__name__}")

        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            attr = _FIELD_ALIASES.get(key)
            if attr is not None:
                kwargs[attr] = value

        missing = [name for name in _REQUIRED_FIELDS if kwargs.get(name) is None]
        if missing:
            raise ValidationError(f"Trade record missing fields: {', '.join(missing)}")

        if kwargs.get("fee") is None:
            kwargs["fee"] = 0.0
        if kwargs.get("exchange") is None:
            kwargs["exchange"] = DEFAULT_EXCHANGE

        try:
            return cls(**kwargs)
        except TypeError as e:
            raise ValidationError(f"Invalid trade record: {e}") from e
