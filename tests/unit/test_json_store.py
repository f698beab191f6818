"""
Unit tests for JSON file ledger storage.
"""

import json
from pathlib import Path

import pytest

from aether.core.exceptions.portfolio import DataError
from aether.core.models.ledger import TradeLedger
from aether.core.models.trade import Trade, TradeInput
from aether.infrastructure.storage.json_store import JsonTradeStore


def make_trade(trade_id: str = "a") -> Trade:
    return Trade(
        id=trade_id, symbol="BTC", entry_price=50000.0, amount=0.1, fee=5.0, timestamp=1
    )


class TestJsonTradeStore:
    """Test suite for JsonTradeStore."""

    def test_should_return_empty_for_missing_file(self, tmp_path: Path) -> None:
        """Test a fresh install starts empty."""
        store = JsonTradeStore(tmp_path / "trades.json")

        assert store.load_trades() == []

    def test_should_save_and_load(self, tmp_path: Path) -> None:
        """Test persisted trades load back equal."""
        store = JsonTradeStore(tmp_path / "nested" / "trades.json")
        trades = [make_trade("a"), make_trade("b")]

        store.save_trades(trades)

        assert store.load_trades() == trades
        assert json.loads(store.path.read_text())[0]["entryPrice"] == 50000.0

    def test_should_not_leave_temp_files(self, tmp_path: Path) -> None:
        """Test atomic write cleans up after itself."""
        store = JsonTradeStore(tmp_path / "trades.json")

        store.save_trades([make_trade()])

        assert [p.name for p in tmp_path.iterdir()] == ["trades.json"]

    def test_should_raise_data_error_on_invalid_json(self, tmp_path: Path) -> None:
        """Test corrupt files are reported."""
        path = tmp_path / "trades.json"
        path.write_text("{broken")

        with pytest.raises(DataError, match="not valid JSON"):
            JsonTradeStore(path).load_trades()

    def test_should_raise_data_error_on_non_array(self, tmp_path: Path) -> None:
        """Test the file must hold an array."""
        path = tmp_path / "trades.json"
        path.write_text('{"trades": []}')

        with pytest.raises(DataError, match="JSON array"):
            JsonTradeStore(path).load_trades()

    def test_should_raise_data_error_on_invalid_record(self, tmp_path: Path) -> None:
        """Test invalid records are reported."""
        path = tmp_path / "trades.json"
        path.write_text('[{"id": "a", "symbol": "BTC"}]')

        with pytest.raises(DataError, match="invalid trade"):
            JsonTradeStore(path).load_trades()

    def test_should_persist_ledger_changes(self, tmp_path: Path) -> None:
        """Test a ledger wired to save_trades writes through on every mutation."""
        store = JsonTradeStore(tmp_path / "trades.json")
        ledger = TradeLedger(store.load_trades())
        ledger.on_change(store.save_trades)

        trade = ledger.add(TradeInput(symbol="ETH", entry_price=2000.0, amount=1.0))
        assert [t.id for t in store.load_trades()] == [trade.id]

        ledger.remove(trade.id)
        assert store.load_trades() == []
