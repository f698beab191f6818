"""
Market data cache.

Holds the latest snapshot per symbol as an immutable mapping. Each sync swaps
in a whole new mapping, so a reader never sees a half-updated cache and no
lock is needed on the read path.
"""

from collections.abc import Iterable
from datetime import UTC, datetime
from types import MappingProxyType

from aether.core.models.market import MarketSnapshot
from aether.core.types.financial import PriceCache

from .events import (
    QuoteEvent,
    QuoteEventKind,
    QuotePublisher,
    SyncStatsObserver,
    default_observers,
)

_EMPTY: PriceCache = MappingProxyType({})


class MarketDataCache(QuotePublisher):
    """Symbol -> MarketSnapshot cache replaced wholesale on each sync."""

    def __init__(self, enable_observers: bool = True) -> None:
        """Initialize an empty cache with optional standard observers."""
        super().__init__()
        self._snapshots: PriceCache = _EMPTY
        self._version = 0
        self._updated_at: datetime | None = None
        self._sync_stats: SyncStatsObserver | None = None

        if enable_observers:
            sync_stats, log_observer = default_observers()
            self._sync_stats = sync_stats
            self.add_observer(sync_stats)
            self.add_observer(log_observer)

    @property
    def version(self) -> int:
        """Counter bumped on every swap."""
        return self._version

    def snapshot(self) -> PriceCache:
        """The current immutable symbol -> snapshot mapping."""
        return self._snapshots

    def replace(self, snapshots: Iterable[MarketSnapshot]) -> PriceCache:
        """Swap in a new mapping built from snapshots.

        Returns:
            The new immutable mapping
        """
        new_map = MappingProxyType({snapshot.symbol: snapshot for snapshot in snapshots})
        previous = self._snapshots

        self._snapshots = new_map
        self._version += 1
        self._updated_at = datetime.now(UTC)

        kind = QuoteEventKind.SWAPPED if new_map else QuoteEventKind.CLEARED
        dropped = sorted(set(previous) - set(new_map))
        self.publish(QuoteEvent(kind, frozenset(new_map), {"dropped": dropped} if dropped else {}))
        return new_map

    def record_retained(self, symbols: Iterable[str], reason: str) -> None:
        """Note that a sync failed and the existing data was kept."""
        self.publish(QuoteEvent(QuoteEventKind.KEPT_STALE, frozenset(symbols), {"reason": reason}))

    def record_missing(self, symbols: Iterable[str]) -> None:
        """Note symbols the provider did not return."""
        missing = frozenset(symbols)
        if missing:
            self.publish(QuoteEvent(QuoteEventKind.UNPRICED, missing))

    def age_seconds(self, now: datetime | None = None) -> float | None:
        """Seconds since the last swap, None if never synced."""
        if self._updated_at is None:
            return None
        now = now or datetime.now(UTC)
        return (now - self._updated_at).total_seconds()

    def is_stale(self, max_age_seconds: float, now: datetime | None = None) -> bool:
        """Check whether the data is older than max_age_seconds (or missing)."""
        age = self.age_seconds(now)
        return age is None or age > max_age_seconds

    def get_stats(self) -> dict[str, int | float]:
        """Get cache statistics."""
        stats: dict[str, int | float] = {"symbols": len(self._snapshots), "version": self._version}
        age = self.age_seconds()
        if age is not None:
            stats["age_seconds"] = round(age, 3)
        if self._sync_stats is not None:
            stats.update(self._sync_stats.snapshot())
        return stats

    def __len__(self) -> int:
        return len(self._snapshots)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._snapshots
