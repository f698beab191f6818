"""
Main Portfolio class - ties the ledger and market prices to derived views.

Holdings and statistics are recomputed on demand whenever the ledger or the
price source has changed since the last computation, tracked by their
version counters. Nothing derived is ever mutated in place.
"""

from loguru import logger

from aether.core.models.holding import Holding, PortfolioStats
from aether.core.models.ledger import TradeLedger
from aether.core.models.portfolio_holdings import compute_holdings, find_holding
from aether.core.models.portfolio_metrics import compute_stats
from aether.core.models.trade import Trade, TradeInput
from aether.core.protocols import IPriceSource


class Portfolio:
    """Portfolio view over a trade ledger and a price source.

    Mutations go through the ledger; prices are swapped by the synchronizer.
    Reading ``holdings`` or ``stats`` after either change recomputes both.
    """

    def __init__(self, ledger: TradeLedger, prices: IPriceSource) -> None:
        """Initialize with the ledger and price source to observe."""
        self.ledger = ledger
        self.prices = prices
        self._derived_key: tuple[int, int] | None = None
        self._holdings: tuple[Holding, ...] = ()
        self._stats = PortfolioStats.empty()

    @property
    def holdings(self) -> list[Holding]:
        """Holdings ranked by market value."""
        self._refresh()
        return list(self._holdings)

    @property
    def stats(self) -> PortfolioStats:
        """Account-level statistics."""
        self._refresh()
        return self._stats

    @property
    def trades(self) -> tuple[Trade, ...]:
        """Ledger records in insertion order."""
        return self.ledger.list()

    def holding(self, symbol: str) -> Holding | None:
        """Holding for one symbol, None if never traded."""
        return find_holding(self.holdings, symbol)

    def add_trade(self, trade_input: TradeInput) -> Trade:
        """Log a new trade."""
        return self.ledger.add(trade_input)

    def remove_trade(self, trade_id: str) -> bool:
        """Delete a trade; unknown ids are ignored."""
        return self.ledger.remove(trade_id)

    def _current_key(self) -> tuple[int, int]:
        return (self.ledger.version, self.prices.version)

    def _refresh(self) -> None:
        """Recompute holdings, then stats, if either input changed."""
        key = self._current_key()
        if key == self._derived_key:
            return

        trades = self.ledger.list()
        holdings = compute_holdings(trades, self.prices.snapshot())
        self._holdings = tuple(holdings)
        self._stats = compute_stats(holdings, trades)
        self._derived_key = key
        logger.debug(
            f"Recomputed {len(holdings)} holdings (ledger v{key[0]}, prices v{key[1]})"
        )
