#!/usr/bin/env python3
"""
Portfolio Tracker CLI

Logs trades to a local JSON ledger, refreshes prices from Binance once and
prints holdings and account statistics.
"""

import argparse
import asyncio
import sys
from pathlib import Path

import pandas as pd
from loguru import logger

from aether.core.constants import DEFAULT_EXCHANGE
from aether.core.exceptions.portfolio import AetherException, ValidationError
from aether.core.models.config import EngineConfig
from aether.core.models.portfolio_report import holdings_to_dataframe, trades_to_dataframe
from aether.core.models.trade import TradeInput
from aether.core.utils.logging import setup_logging
from aether.engine import PortfolioEngine, build_engine
from aether.infrastructure.storage.workspace import dumps_workspace, import_workspace


def apply_mutations(engine: PortfolioEngine, args: argparse.Namespace) -> None:
    """Apply the ledger changes requested on the command line."""
    if args.import_file:
        payload = Path(args.import_file).read_text(encoding="utf-8")
        workspace = import_workspace(engine.ledger, payload)
        logger.success(f"Imported {len(workspace.trades)} trades from {args.import_file}")

    if args.add:
        symbol, price, amount = args.add
        try:
            trade_input = TradeInput(
                symbol=symbol,
                entry_price=float(price),
                amount=float(amount),
                fee=args.fee,
                exchange=args.exchange,
                notes=args.notes,
            )
        except ValueError as e:
            raise ValidationError(f"Price and amount must be numbers: {e}") from e
        trade = engine.portfolio.add_trade(trade_input)
        logger.success(
            f"Added trade {trade.id} ({trade.symbol} {trade.amount} @ {trade.entry_price})"
        )

    for trade_id in args.remove or []:
        if engine.portfolio.remove_trade(trade_id):
            logger.success(f"Removed trade {trade_id}")
        else:
            logger.warning(f"No trade with id {trade_id}")


def print_report(engine: PortfolioEngine, show_trades: bool) -> None:
    """Print holdings, statistics and optionally the journal."""
    with pd.option_context("display.width", 160, "display.max_columns", None):
        holdings = holdings_to_dataframe(engine.portfolio.holdings)
        print(holdings.to_string(index=False) if not holdings.empty else "No holdings.")

        stats = engine.portfolio.stats
        print()
        print(f"Total value:   {stats.total_value:,.2f}")
        print(f"Total cost:    {stats.total_cost:,.2f}")
        print(f"Total PnL:     {stats.total_pnl:,.2f} ({stats.pnl_percent:.2f}%)")
        print(f"24h weighted:  {stats.weighted_change_24h:.2f}%")

        if show_trades:
            print()
            print(trades_to_dataframe(engine.portfolio.trades).to_string(index=False))


async def run(args: argparse.Namespace) -> int:
    config = EngineConfig.from_env()
    if args.ledger:
        config.ledger_path = Path(args.ledger)

    engine = build_engine(config)
    try:
        apply_mutations(engine, args)

        if args.export_file:
            payload = dumps_workspace(engine.ledger.list())
            Path(args.export_file).write_text(payload, encoding="utf-8")
            logger.success(f"Exported {len(engine.ledger)} trades to {args.export_file}")

        if not args.no_sync:
            result = await engine.synchronizer.sync(engine.ledger.symbols())
            if result.is_partial:
                logger.warning(f"No price for: {', '.join(sorted(result.missing))}")
            logger.info(f"Price sync: {result.status.value}")

        print_report(engine, args.trades)
    finally:
        await engine.stop()
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Log trades and show live portfolio valuation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Log a purchase of 0.1 BTC at 50000 with a 5 USDT fee
  python track_portfolio.py --add BTC 50000 0.1 --fee 5 --exchange BINANCE

  # Show holdings without contacting Binance
  python track_portfolio.py --no-sync

  # Back up and restore the workspace
  python track_portfolio.py --export backup.json
  python track_portfolio.py --import backup.json
        """,
    )

    parser.add_argument("--ledger", type=str, help="Path to the ledger JSON file")
    parser.add_argument(
        "--add", nargs=3, metavar=("SYMBOL", "PRICE", "AMOUNT"), help="Log a new trade"
    )
    parser.add_argument("--fee", type=float, default=0.0, help="Fee for --add (default: 0)")
    parser.add_argument(
        "--exchange", type=str, default=DEFAULT_EXCHANGE, help="Venue label for --add"
    )
    parser.add_argument("--notes", type=str, help="Notes for --add")
    parser.add_argument("--remove", nargs="+", metavar="ID", help="Delete trades by id")
    parser.add_argument("--import", dest="import_file", help="Replace ledger from a workspace file")
    parser.add_argument("--export", dest="export_file", help="Write the ledger to a workspace file")
    parser.add_argument("--no-sync", action="store_true", help="Skip the price refresh")
    parser.add_argument("--trades", action="store_true", help="Also print the trade journal")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args()
    setup_logging(args.debug)

    try:
        return asyncio.run(run(args))
    except AetherException as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.error(f"File error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
