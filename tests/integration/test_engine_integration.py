"""
Integration tests for the assembled portfolio engine.

Exercises storage, ledger, synchronizer and portfolio together with a real
JSON ledger file and an in-process quote provider.
"""

import asyncio
from collections.abc import Sequence
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

from aether.core.enums import SyncStatus
from aether.core.interfaces.market_data import IMarketDataProvider
from aether.core.models.config import EngineConfig
from aether.core.models.market import MarketSnapshot
from aether.core.models.trade import TradeInput
from aether.engine import build_engine
from aether.infrastructure.market_data import BinanceMarketDataProvider
from aether.infrastructure.storage import dumps_workspace, import_workspace


class StaticProvider(IMarketDataProvider):
    """Quote provider with fixed prices."""

    def __init__(self, prices: dict[str, float]) -> None:
        self.prices = prices
        self.fail = False
        self.closed = False

    async def fetch_quotes(self, symbols: Sequence[str]) -> dict[str, MarketSnapshot]:
        if self.fail:
            raise TimeoutError("provider timed out")
        return {
            symbol: MarketSnapshot(symbol=symbol, price=self.prices[symbol])
            for symbol in symbols
            if symbol in self.prices
        }

    def close(self) -> None:
        self.closed = True


def make_config(tmp_path: Path) -> EngineConfig:
    return EngineConfig(
        ledger_path=tmp_path / "trades.json",
        sync_interval=3600,
        provider_timeout=10,
        ticker_cache_ttl=5,
    )


class TestEngineIntegration:
    """Integration tests for PortfolioEngine."""

    @pytest.mark.asyncio
    async def test_should_value_logged_trades(self, tmp_path: Path) -> None:
        """Test add, sync and valuation end to end."""
        provider = StaticProvider({"BTC": 60000.0})
        engine = build_engine(make_config(tmp_path), provider=provider)

        engine.portfolio.add_trade(
            TradeInput(symbol="btc", entry_price=50000.0, amount=0.1, fee=5.0)
        )
        engine.portfolio.add_trade(TradeInput(symbol="USDT", entry_price=1.0, amount=500.0))
        result = await engine.synchronizer.sync_now()

        assert result.status == SyncStatus.OK
        holdings = engine.portfolio.holdings
        assert [h.symbol for h in holdings] == ["BTC", "USDT"]
        assert holdings[0].unrealized_pnl == pytest.approx(995.0)
        assert holdings[1].market_value == pytest.approx(500.0)
        assert engine.portfolio.stats.total_value == pytest.approx(6500.0)

    @pytest.mark.asyncio
    async def test_should_persist_across_restarts(self, tmp_path: Path) -> None:
        """Test the ledger file survives a new engine."""
        config = make_config(tmp_path)
        first = build_engine(config, provider=StaticProvider({}))
        trade = first.portfolio.add_trade(
            TradeInput(symbol="ETH", entry_price=2000.0, amount=1.5, notes="dip buy")
        )

        second = build_engine(config, provider=StaticProvider({}))

        assert second.ledger.list() == (trade,)

    @pytest.mark.asyncio
    async def test_should_keep_prices_when_provider_fails(self, tmp_path: Path) -> None:
        """Test valuation uses the last good prices during an outage."""
        provider = StaticProvider({"BTC": 60000.0})
        engine = build_engine(make_config(tmp_path), provider=provider)
        engine.portfolio.add_trade(TradeInput(symbol="BTC", entry_price=50000.0, amount=1.0))
        await engine.synchronizer.sync_now()
        value_before = engine.portfolio.stats.total_value

        provider.fail = True
        result = await engine.synchronizer.sync_now()

        assert result.status == SyncStatus.FAILED
        assert engine.portfolio.stats.total_value == value_before

    @pytest.mark.asyncio
    async def test_should_restore_exported_workspace(self, tmp_path: Path) -> None:
        """Test export then import into a fresh ledger."""
        source = build_engine(make_config(tmp_path / "a"), provider=StaticProvider({}))
        source.portfolio.add_trade(TradeInput(symbol="SOL", entry_price=20.0, amount=10.0))
        source.portfolio.add_trade(TradeInput(symbol="SOL", entry_price=30.0, amount=-4.0))
        backup = dumps_workspace(source.ledger.list())

        target = build_engine(make_config(tmp_path / "b"), provider=StaticProvider({}))
        import_workspace(target.ledger, backup)

        assert target.ledger.list() == source.ledger.list()
        assert target.store.load_trades() == list(source.ledger.list())
        assert target.portfolio.holding("SOL").quantity == pytest.approx(6.0)

    @pytest.mark.asyncio
    async def test_should_sync_new_symbols_while_running(self, tmp_path: Path) -> None:
        """Test a trade in a new asset triggers an eager refresh."""
        provider = StaticProvider({"BTC": 100.0, "ETH": 10.0})
        engine = build_engine(make_config(tmp_path), provider=provider)
        engine.portfolio.add_trade(TradeInput(symbol="BTC", entry_price=90.0, amount=1.0))

        await engine.start()
        try:
            for _ in range(100):
                if "BTC" in engine.cache:
                    break
                await asyncio.sleep(0.01)

            engine.portfolio.add_trade(TradeInput(symbol="ETH", entry_price=9.0, amount=1.0))
            for _ in range(100):
                if "ETH" in engine.cache:
                    break
                await asyncio.sleep(0.01)

            assert engine.portfolio.holding("ETH").current_price == 10.0
        finally:
            await engine.stop()


class TestEngineShutdown:
    """Tests for releasing engine resources on stop."""

    @pytest.mark.asyncio
    async def test_should_close_default_provider_session(self, tmp_path: Path) -> None:
        """Test the Binance session created by build_engine is closed on stop."""
        engine = build_engine(make_config(tmp_path))
        provider = engine.synchronizer.provider
        assert isinstance(provider, BinanceMarketDataProvider)
        provider.session = MagicMock(spec=requests.Session)

        await engine.stop()

        provider.session.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_should_leave_injected_provider_open(self, tmp_path: Path) -> None:
        """Test a caller-supplied provider stays under the caller's control."""
        provider = StaticProvider({"BTC": 1.0})
        engine = build_engine(make_config(tmp_path), provider=provider)

        await engine.start()
        await engine.stop()

        assert not provider.closed
