"""
Trade ledger.

Ordered, append-only record of trades and the single source of truth for
every position. Records are never edited; callers add, remove or replace the
whole set.

Thread Safety:
    Mutations are serialized with an internal RLock. The stored collection is
    an immutable tuple swapped on every change, so readers always see a
    complete snapshot without taking the lock.
"""

import threading
import time
import uuid
from collections.abc import Callable, Iterable, Iterator
from typing import Any

from loguru import logger

from aether.core.constants import MAX_TRADES_PER_LEDGER
from aether.core.exceptions.portfolio import TradeLimitExceededError, ValidationError
from aether.core.models.trade import Trade, TradeInput
from aether.core.utils.decorators import log_ledger_operation

LedgerListener = Callable[[tuple[Trade, ...]], None]


def _now_ms() -> int:
    return int(time.time() * 1000)


def _coerce_trade(record: Any, index: int) -> Trade:
    """Accept a Trade or a trade-shaped mapping."""
    if isinstance(record, Trade):
        return record
    try:
        return Trade.from_dict(record)
    except ValidationError as e:
        raise ValidationError(f"Invalid trade at index {index}: {e}") from e


class TradeLedger:
    """Ordered collection of trades with change notification."""

    def __init__(
        self,
        trades: Iterable[Trade] | None = None,
        max_trades: int = MAX_TRADES_PER_LEDGER,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        """Initialize the ledger.

        Args:
            trades: Initial records, typically from the storage layer
            max_trades: Maximum number of records the ledger accepts
            clock: Millisecond clock used to stamp new trades
        """
        if max_trades <= 0:
            raise ValueError("max_trades must be positive")

        self._max_trades = max_trades
        self._clock = clock
        self._lock = threading.RLock()
        self._listeners: list[LedgerListener] = []
        self._trades: tuple[Trade, ...] = self._validated(list(trades or []))
        self._last_timestamp = max((trade.timestamp for trade in self._trades), default=0)
        self._version = 0

    @property
    def version(self) -> int:
        """Counter bumped after every successful mutation."""
        return self._version

    def on_change(self, listener: LedgerListener) -> None:
        """Register a callback invoked with the new trades after each mutation."""
        with self._lock:
            self._listeners.append(listener)

    @log_ledger_operation
    def add(self, trade_input: TradeInput) -> Trade:
        """Append a new trade.

        Args:
            trade_input: Validated user entry

        Returns:
            The stored trade with its fresh id and timestamp

        Raises:
            ValidationError: If the input is not a TradeInput or the ledger is full
        """
        if not isinstance(trade_input, TradeInput):
            raise ValidationError(
                f"Expected TradeInput, got {type(trade_input).__name__}"
            )

        with self._lock:
            if len(self._trades) >= self._max_trades:
                raise TradeLimitExceededError(self._max_trades)

            # Keep stamps non-decreasing even if the wall clock steps back
            timestamp = max(self._clock(), self._last_timestamp)
            trade = trade_input.to_trade(trade_id=str(uuid.uuid4()), timestamp=timestamp)

            self._trades = (*self._trades, trade)
            self._last_timestamp = timestamp
            self._commit()
            return trade

    @log_ledger_operation
    def remove(self, trade_id: str) -> bool:
        """Delete the trade with the given id.

        Removing an id that is not present is a no-op.

        Returns:
            True if a trade was removed
        """
        with self._lock:
            remaining = tuple(trade for trade in self._trades if trade.id != trade_id)
            if len(remaining) == len(self._trades):
                logger.debug(f"Trade {trade_id} not in ledger, nothing to remove")
                return False

            self._trades = remaining
            self._commit()
            return True

    @log_ledger_operation
    def replace_all(self, trades: Any) -> None:
        """Atomically replace every record.

        Args:
            trades: List of Trade objects or trade-shaped mappings

        Raises:
            ValidationError: If the input is not a list of valid trades. The
                ledger is left untouched.
        """
        if not isinstance(trades, list | tuple):
            raise ValidationError(
                f"Trades must be provided as a list, got {type(trades).__name__}"
            )

        validated = self._validated(list(trades))

        with self._lock:
            self._trades = validated
            self._last_timestamp = max(
                (trade.timestamp for trade in validated), default=self._last_timestamp
            )
            self._commit()

    def sorted_by_timestamp(self) -> list[Trade]:
        """Trades newest first, as shown in journals."""
        return sorted(self._trades, key=lambda trade: trade.timestamp, reverse=True)

    def get(self, trade_id: str) -> Trade | None:
        """Look up a trade by id."""
        for trade in self._trades:
            if trade.id == trade_id:
                return trade
        return None

    def symbols(self) -> frozenset[str]:
        """Distinct symbols currently in the ledger."""
        return frozenset(trade.symbol for trade in self._trades)

    def __len__(self) -> int:
        return len(self._trades)

    def __iter__(self) -> Iterator[Trade]:
        return iter(self._trades)

    def _validated(self, records: list[Any]) -> tuple[Trade, ...]:
        """Convert and check a full record set without touching state."""
        if len(records) > self._max_trades:
            raise TradeLimitExceededError(self._max_trades)

        trades = tuple(_coerce_trade(record, index) for index, record in enumerate(records))

        seen: set[str] = set()
        for trade in trades:
            if trade.id in seen:
                raise ValidationError(f"Duplicate trade id: {trade.id}")
            seen.add(trade.id)
        return trades

    def _commit(self) -> None:
        """Bump the version and notify listeners. Caller holds the lock."""
        self._version += 1
        snapshot = self._trades
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                name = getattr(listener, "__name__", repr(listener))
                logger.error(f"Ledger listener {name} failed: {e}")

    # Must stay last: shadows the builtin for annotations in the class body
    def list(self) -> tuple[Trade, ...]:
        """All trades in insertion order."""
        return self._trades
