"""
Portfolio statistics.

Reduces holdings (plus the ledger, for cost) into account-level metrics.
Must run on holdings produced from the same ledger and cache.
"""

from collections.abc import Iterable, Sequence

from aether.core.constants import HUNDRED
from aether.core.models.holding import Holding, PortfolioStats
from aether.core.models.trade import Trade
from aether.core.types.financial import ZERO, percentage_of


def total_market_value(holdings: Iterable[Holding]) -> float:
    """Sum of holding market values."""
    return sum((holding.market_value for holding in holdings), ZERO)


def total_ledger_cost(trades: Iterable[Trade]) -> float:
    """Sum of amount * entry_price + fee over every trade."""
    return sum((trade.cost() for trade in trades), ZERO)


def weighted_change_24h(holdings: Iterable[Holding]) -> float:
    """24h change weighted by each holding's allocation."""
    return sum(
        (holding.change_24h * (holding.allocation_percent / HUNDRED) for holding in holdings),
        ZERO,
    )


def compute_stats(holdings: Sequence[Holding], trades: Iterable[Trade]) -> PortfolioStats:
    """Compute account statistics.

    Args:
        holdings: Output of compute_holdings for the same trades
        trades: Ledger records

    Returns:
        PortfolioStats. total_pnl is 0 when nothing is priced, mirroring the
        per-holding unknown-price guard.
    """
    total_value = total_market_value(holdings)
    total_cost = total_ledger_cost(trades)
    total_pnl = total_value - total_cost if total_value > ZERO else ZERO

    return PortfolioStats(
        total_value=total_value,
        total_cost=total_cost,
        total_pnl=total_pnl,
        pnl_percent=percentage_of(total_pnl, total_cost),
        weighted_change_24h=weighted_change_24h(holdings),
        holding_count=len(holdings),
    )
