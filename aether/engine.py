"""
Portfolio engine assembly.

Wires storage, ledger, market data cache, synchronizer and the portfolio
view together. The API lifespan and the CLI both build one of these.
"""

from dataclasses import dataclass

from loguru import logger

from aether.core.interfaces.advisory import IAdvisoryReportGenerator
from aether.core.interfaces.market_data import IMarketDataProvider
from aether.core.interfaces.storage import ITradeStore
from aether.core.models.config import EngineConfig
from aether.core.models.ledger import TradeLedger
from aether.core.models.portfolio import Portfolio
from aether.core.models.trade import Trade
from aether.infrastructure.advisory import AdvisoryReport, request_advisory_report
from aether.infrastructure.market_data import (
    BinanceMarketDataProvider,
    MarketDataCache,
    MarketDataSynchronizer,
)
from aether.infrastructure.storage import JsonTradeStore


@dataclass
class PortfolioEngine:
    """A running set of engine components."""

    config: EngineConfig
    store: ITradeStore
    ledger: TradeLedger
    cache: MarketDataCache
    portfolio: Portfolio
    synchronizer: MarketDataSynchronizer
    advisor: IAdvisoryReportGenerator | None = None
    owns_provider: bool = False

    async def start(self) -> None:
        """Begin periodic market data sync."""
        self.synchronizer.start()

    async def stop(self) -> None:
        """Stop syncing; late provider results are discarded.

        A provider created by build_engine is closed as well.
        """
        await self.synchronizer.stop()
        if self.owns_provider:
            self.synchronizer.provider.close()
            logger.debug("Closed market data provider")

    async def advisory_report(self) -> AdvisoryReport | None:
        """Advisory report for the current holdings, None when unavailable."""
        if self.advisor is None:
            logger.debug("No advisory generator configured")
            return None
        return await request_advisory_report(self.advisor, self.portfolio.holdings)

    def _on_ledger_change(self, trades: tuple[Trade, ...]) -> None:
        logger.debug(f"Ledger changed ({len(trades)} trades)")
        self.synchronizer.notify_symbols_changed()


def build_engine(
    config: EngineConfig | None = None,
    provider: IMarketDataProvider | None = None,
    store: ITradeStore | None = None,
    advisor: IAdvisoryReportGenerator | None = None,
) -> PortfolioEngine:
    """Assemble an engine, loading the persisted ledger.

    Args:
        config: Engine settings, from the environment if omitted
        provider: Quote provider, Binance if omitted
        store: Ledger storage, a JSON file at config.ledger_path if omitted
        advisor: Optional advisory report generator

    Raises:
        DataError: If the persisted ledger cannot be loaded
    """
    config = config or EngineConfig.from_env()
    store = store or JsonTradeStore(config.ledger_path)
    ledger = TradeLedger(store.load_trades())
    ledger.on_change(store.save_trades)

    owns_provider = provider is None
    if provider is None:
        provider = BinanceMarketDataProvider(
            timeout=config.provider_timeout, cache_ttl=config.ticker_cache_ttl
        )

    cache = MarketDataCache()
    synchronizer = MarketDataSynchronizer(
        provider, cache, symbol_source=ledger.symbols, interval=config.sync_interval
    )

    engine = PortfolioEngine(
        config=config,
        store=store,
        ledger=ledger,
        cache=cache,
        portfolio=Portfolio(ledger, cache),
        synchronizer=synchronizer,
        advisor=advisor,
        owns_provider=owns_provider,
    )
    ledger.on_change(engine._on_ledger_change)
    logger.info(f"Engine ready with {len(ledger)} trades, config={config.to_dict()}")
    return engine
