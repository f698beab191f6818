"""
Holdings aggregation.

Combines the trade ledger with the market data cache into a ranked list of
per-asset holdings. Pure: identical inputs always give identical output.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from aether.core.models.holding import Holding
from aether.core.models.market import MarketSnapshot
from aether.core.models.trade import Trade
from aether.core.types.financial import ZERO, percentage_of, safe_divide


@dataclass
class _SymbolTotals:
    """Running totals for one symbol during the accumulation pass."""

    quantity: float = ZERO
    total_cost: float = ZERO


def _accumulate(trades: Iterable[Trade]) -> dict[str, _SymbolTotals]:
    """Group trades by symbol, keeping first-seen order."""
    totals: dict[str, _SymbolTotals] = {}
    for trade in trades:
        symbol = trade.symbol.strip().upper()
        group = totals.setdefault(symbol, _SymbolTotals())
        group.quantity += trade.amount
        group.total_cost += trade.cost()
    return totals


def _value_group(
    symbol: str, totals: _SymbolTotals, snapshot: MarketSnapshot | None
) -> Holding:
    """Value one symbol; allocation is filled in by the normalization pass."""
    current_price = snapshot.price if snapshot is not None else ZERO
    change_24h = snapshot.change_24h if snapshot is not None else ZERO
    market_value = totals.quantity * current_price

    # An unknown price must not show up as a loss of the whole cost basis
    if current_price > ZERO:
        unrealized_pnl = market_value - totals.total_cost
        pnl_percent = percentage_of(unrealized_pnl, totals.total_cost)
    else:
        unrealized_pnl = ZERO
        pnl_percent = ZERO

    avg_cost = safe_divide(totals.total_cost, totals.quantity) if totals.quantity > ZERO else ZERO

    return Holding(
        symbol=symbol,
        quantity=totals.quantity,
        total_cost=totals.total_cost,
        avg_cost=avg_cost,
        break_even=avg_cost,
        current_price=current_price,
        market_value=market_value,
        unrealized_pnl=unrealized_pnl,
        pnl_percent=pnl_percent,
        allocation_percent=ZERO,
        change_24h=change_24h,
    )


def _with_allocation(holding: Holding, total_value: float) -> Holding:
    """Return a copy of holding with its share of total_value."""
    return Holding(
        symbol=holding.symbol,
        quantity=holding.quantity,
        total_cost=holding.total_cost,
        avg_cost=holding.avg_cost,
        break_even=holding.break_even,
        current_price=holding.current_price,
        market_value=holding.market_value,
        unrealized_pnl=holding.unrealized_pnl,
        pnl_percent=holding.pnl_percent,
        allocation_percent=percentage_of(holding.market_value, total_value),
        change_24h=holding.change_24h,
    )


def compute_holdings(
    trades: Iterable[Trade], price_cache: Mapping[str, MarketSnapshot]
) -> list[Holding]:
    """Aggregate trades into holdings valued at cached prices.

    Runs in two passes: every symbol is valued first, then allocations are
    normalized against the summed market value. Zero and negative net
    positions are kept.

    Args:
        trades: Ledger records, any order
        price_cache: Latest snapshot per upper-case symbol

    Returns:
        Holdings sorted by market value, largest first. Ties keep the order in
        which each symbol first appeared in the ledger.
    """
    totals = _accumulate(trades)
    if not totals:
        return []

    valued = [
        _value_group(symbol, group, price_cache.get(symbol)) for symbol, group in totals.items()
    ]

    total_value = sum((holding.market_value for holding in valued), ZERO)
    allocated = [_with_allocation(holding, total_value) for holding in valued]

    # sorted() is stable, which gives the first-seen tie order
    return sorted(allocated, key=lambda holding: holding.market_value, reverse=True)


def find_holding(holdings: Iterable[Holding], symbol: str) -> Holding | None:
    """Look up a holding by symbol (case-insensitive)."""
    wanted = symbol.strip().upper()
    for holding in holdings:
        if holding.symbol == wanted:
            return holding
    return None
