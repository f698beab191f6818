"""
Market data cache events.

Every swap, every failed sync that keeps stale quotes and every provider gap
is published as a QuoteEvent. The cache ships with two observers: one keeps
sync counters for health reporting, one writes the events to the log.
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from threading import RLock
from typing import Any, Protocol

from loguru import logger


class QuoteEventKind(StrEnum):
    """What happened to the cached quotes."""

    SWAPPED = "swapped"
    CLEARED = "cleared"
    KEPT_STALE = "kept_stale"
    UNPRICED = "unpriced"


@dataclass(frozen=True)
class QuoteEvent:
    """One notification from the market data cache."""

    kind: QuoteEventKind
    symbols: frozenset[str]
    details: dict[str, Any] = field(default_factory=dict)
    at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def describe(self) -> str:
        """Single-line summary for logs."""
        listed = ", ".join(sorted(self.symbols)) or "-"
        text = f"Quotes {self.kind.value}: {listed}"
        if self.details:
            text += f" ({self.details})"
        return text


class QuoteObserver(Protocol):
    """Receives cache events."""

    def notify(self, event: QuoteEvent) -> None: ...


class QuotePublisher:
    """Fans QuoteEvents out to registered observers.

    The observer list is an immutable tuple replaced under a lock, so
    publishing iterates a stable snapshot without holding the lock.
    """

    def __init__(self) -> None:
        self._observers: tuple[QuoteObserver, ...] = ()
        self._observers_lock = RLock()

    def add_observer(self, observer: QuoteObserver) -> None:
        """Register an observer; registering twice has no effect."""
        with self._observers_lock:
            if observer not in self._observers:
                self._observers = (*self._observers, observer)

    def publish(self, event: QuoteEvent) -> None:
        """Deliver event to every observer. Observer errors are logged."""
        for observer in self._observers:
            try:
                observer.notify(event)
            except Exception as e:
                logger.error(f"{type(observer).__name__} failed on {event.kind.value}: {e}")


class SyncStatsObserver:
    """Counts cache outcomes."""

    def __init__(self) -> None:
        self._counts: Counter[QuoteEventKind] = Counter()
        self._unpriced_symbols = 0
        self._lock = RLock()

    def notify(self, event: QuoteEvent) -> None:
        with self._lock:
            self._counts[event.kind] += 1
            if event.kind == QuoteEventKind.UNPRICED:
                self._unpriced_symbols += len(event.symbols)

    def snapshot(self) -> dict[str, int | float]:
        """Current counters plus the share of sync attempts that swapped quotes."""
        with self._lock:
            swaps = self._counts[QuoteEventKind.SWAPPED]
            stale_keeps = self._counts[QuoteEventKind.KEPT_STALE]
            attempts = swaps + stale_keeps
            return {
                "swaps": swaps,
                "clears": self._counts[QuoteEventKind.CLEARED],
                "stale_keeps": stale_keeps,
                "unpriced_symbols": self._unpriced_symbols,
                "sync_attempts": attempts,
                "success_rate_percent": round(swaps / attempts * 100, 2) if attempts else 0.0,
            }


class QuoteLogObserver:
    """Logs cache events; stale and unpriced outcomes at WARNING."""

    _DEGRADED = frozenset({QuoteEventKind.KEPT_STALE, QuoteEventKind.UNPRICED})

    def notify(self, event: QuoteEvent) -> None:
        if event.kind in self._DEGRADED:
            logger.warning(event.describe())
        else:
            logger.debug(event.describe())


def default_observers() -> tuple[SyncStatsObserver, QuoteLogObserver]:
    """The observers every MarketDataCache starts with."""
    return SyncStatsObserver(), QuoteLogObserver()
