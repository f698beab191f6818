"""
JSON file ledger storage.
"""

import json
import os
import tempfile
from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from aether.core.exceptions.portfolio import DataError, ValidationError
from aether.core.interfaces.storage import ITradeStore
from aether.core.models.trade import Trade


class JsonTradeStore(ITradeStore):
    """Persists the ledger as a JSON array of trade records."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load_trades(self) -> list[Trade]:
        """Load trades; a missing file is an empty ledger.

        Raises:
            DataError: If the file cannot be read or holds invalid records
        """
        if not self.path.exists():
            logger.info(f"No ledger at {self.path}, starting empty")
            return []

        try:
            with self.path.open(encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise DataError(f"Cannot read ledger {self.path}: {e}") from e
        except json.JSONDecodeError as e:
            raise DataError(f"Ledger {self.path} is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise DataError(f"Ledger {self.path} must contain a JSON array")

        try:
            trades = [Trade.from_dict(record) for record in data]
        except ValidationError as e:
            raise DataError(f"Ledger {self.path} contains an invalid trade: {e}") from e

        logger.info(f"Loaded {len(trades)} trades from {self.path}")
        return trades

    def save_trades(self, trades: Sequence[Trade]) -> None:
        """Write the ledger atomically (temp file, then rename).

        Raises:
            DataError: If the file cannot be written
        """
        records = [trade.to_dict() for trade in trades]
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(records, f, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise DataError(f"Cannot write ledger {self.path}: {e}") from e

        logger.debug(f"Saved {len(records)} trades to {self.path}")
