"""
Pydantic schemas for API request/response models.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from aether.core.constants import DEFAULT_EXCHANGE
from aether.core.models.holding import Holding, PortfolioStats
from aether.core.models.trade import Trade, TradeInput
from aether.core.types.financial import round_amount, round_percentage, round_price
from aether.infrastructure.market_data import SyncResult


class TradeRequest(BaseModel):
    """Request model for logging a trade."""

    model_config = ConfigDict(populate_by_name=True)

    symbol: str = Field(..., min_length=1, description="Asset ticker, e.g. BTC")
    entry_price: float = Field(..., alias="entryPrice", gt=0, description="Price per unit")
    amount: float = Field(..., description="Signed quantity; negative for disposals")
    fee: float = Field(default=0.0, ge=0, description="Fee in quote currency")
    exchange: str = Field(default=DEFAULT_EXCHANGE, description="Venue label")
    notes: str | None = Field(default=None, description="Free-text notes")

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: float) -> float:
        """Validate that amount is non-zero."""
        if v == 0:
            raise ValueError("amount must be non-zero")
        return v

    def to_input(self) -> TradeInput:
        """Convert to the domain entry type."""
        return TradeInput(
            symbol=self.symbol,
            entry_price=self.entry_price,
            amount=self.amount,
            fee=self.fee,
            exchange=self.exchange,
            notes=self.notes,
        )


class TradeResponse(BaseModel):
    """Response model for a stored trade."""

    id: str
    symbol: str
    entry_price: float
    amount: float
    fee: float
    exchange: str
    timestamp: int
    side: str
    notes: str | None = None

    @classmethod
    def from_trade(cls, trade: Trade) -> "TradeResponse":
        return cls(
            id=trade.id,
            symbol=trade.symbol,
            entry_price=trade.entry_price,
            amount=trade.amount,
            fee=trade.fee,
            exchange=trade.exchange,
            timestamp=trade.timestamp,
            side=trade.side.value,
            notes=trade.notes,
        )


class HoldingResponse(BaseModel):
    """Response model for one holding.

    Quote-currency totals are rounded to cents; unit prices and quantities
    keep crypto precision so low-priced assets do not round to zero.
    """

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
    priced: bool

    @classmethod
    def from_holding(cls, holding: Holding) -> "HoldingResponse":
        return cls(
            symbol=holding.symbol,
            quantity=round_amount(holding.quantity),
            total_cost=round_price(holding.total_cost),
            avg_cost=round_amount(holding.avg_cost),
            break_even=round_amount(holding.break_even),
            current_price=round_amount(holding.current_price),
            market_value=round_price(holding.market_value),
            unrealized_pnl=round_price(holding.unrealized_pnl),
            pnl_percent=round_percentage(holding.pnl_percent),
            allocation_percent=round_percentage(holding.allocation_percent),
            change_24h=round_percentage(holding.change_24h),
            priced=holding.has_price,
        )


class StatsResponse(BaseModel):
    """Response model for account statistics."""

    total_value: float
    total_cost: float
    total_pnl: float
    pnl_percent: float
    weighted_change_24h: float
    holding_count: int

    @classmethod
    def from_stats(cls, stats: PortfolioStats) -> "StatsResponse":
        return cls(
            total_value=round_price(stats.total_value),
            total_cost=round_price(stats.total_cost),
            total_pnl=round_price(stats.total_pnl),
            pnl_percent=round_percentage(stats.pnl_percent),
            weighted_change_24h=round_percentage(stats.weighted_change_24h),
            holding_count=stats.holding_count,
        )


class SyncResponse(BaseModel):
    """Response model for a manual price refresh."""

    status: str
    cache_replaced: bool
    priced: list[str]
    missing: list[str]
    error: str | None = None

    @classmethod
    def from_result(cls, result: SyncResult) -> "SyncResponse":
        return cls(
            status=result.status.value,
            cache_replaced=result.status.replaced_cache,
            priced=sorted(result.snapshots),
            missing=sorted(result.missing),
            error=str(result.error) if result.error else None,
        )


class WorkspaceImportResponse(BaseModel):
    """Response model for a workspace import."""

    imported: int
    version: str | None = None


class AdvisoryResponse(BaseModel):
    """Response model for the advisory report; report is null when unavailable."""

    available: bool
    report: dict | None = None


class ErrorResponse(BaseModel):
    """Response model for errors."""

    error: str
    message: str
    details: dict | None = None
