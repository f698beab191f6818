"""
Tabular views of trades and holdings for reports and the CLI.
"""

from collections.abc import Sequence

import pandas as pd

from aether.core.models.holding import Holding
from aether.core.models.trade import Trade

HOLDING_COLUMNS = [
    "symbol",
    "quantity",
    "avg_cost",
    "current_price",
    "market_value",
    "unrealized_pnl",
    "pnl_percent",
    "allocation_percent",
    "change_24h",
]
TRADE_COLUMNS = [
    "timestamp",
    "symbol",
    "side",
    "amount",
    "entry_price",
    "notional",
    "fee",
    "exchange",
    "id",
]


def holdings_to_dataframe(holdings: Sequence[Holding]) -> pd.DataFrame:
    """Holdings as a DataFrame, one row per symbol in ranking order."""
    if not holdings:
        return pd.DataFrame(columns=HOLDING_COLUMNS)
    df = pd.DataFrame([holding.to_dict() for holding in holdings])
    return df[HOLDING_COLUMNS].reset_index(drop=True)


def trades_to_dataframe(trades: Sequence[Trade]) -> pd.DataFrame:
    """Trades as a DataFrame, newest first, with UTC datetimes."""
    if not trades:
        return pd.DataFrame(columns=TRADE_COLUMNS)
    df = pd.DataFrame(
        [
            {
                "timestamp": trade.timestamp,
                "symbol": trade.symbol,
                "side": trade.side.value,
                "amount": trade.amount,
                "entry_price": trade.entry_price,
                "notional": trade.notional_value(),
                "fee": trade.fee,
                "exchange": trade.exchange,
                "id": trade.id,
            }
            for trade in trades
        ]
    )
    df = df.sort_values("timestamp", ascending=False, kind="stable")
    df["timestamp"] = pd.to_datetime(df["timestamp"], unit="ms", utc=True)
    return df[TRADE_COLUMNS].reset_index(drop=True)
