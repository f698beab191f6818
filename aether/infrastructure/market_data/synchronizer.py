"""
Market data synchronization.

Refreshes the market data cache from an external provider, once eagerly when
the ledger's symbol set changes and then on a fixed period. Provider failures
never escape: the previous cache stays in place and the failure is logged.
"""

import asyncio
import contextlib
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from loguru import logger

from aether.core.constants import STABLE_SYMBOLS, SYNC_INTERVAL_SECONDS
from aether.core.enums import SyncStatus
from aether.core.exceptions.portfolio import ProviderFailure
from aether.core.interfaces.market_data import IMarketDataProvider
from aether.core.models.market import MarketSnapshot
from aether.core.types.financial import PriceCache

from .cache import MarketDataCache

SymbolSource = Callable[[], Iterable[str]]


@dataclass(frozen=True)
class SyncResult:
    """Outcome of one sync cycle."""

    status: SyncStatus
    requested: frozenset[str]
    snapshots: PriceCache
    missing: frozenset[str] = field(default_factory=frozenset)
    error: ProviderFailure | None = None

    @property
    def is_partial(self) -> bool:
        """Check if some requested symbols were not priced."""
        return self.status == SyncStatus.PARTIAL


def _normalize_symbols(symbols: Iterable[str]) -> frozenset[str]:
    return frozenset(s.strip().upper() for s in symbols if s and s.strip())


class MarketDataSynchronizer:
    """Drives periodic refresh of a MarketDataCache.

    Overlapping sync calls are not serialized: each one builds a complete
    replacement for the same symbol set, so whichever finishes last wins.
    """

    def __init__(
        self,
        provider: IMarketDataProvider,
        cache: MarketDataCache,
        symbol_source: SymbolSource | None = None,
        interval: float = SYNC_INTERVAL_SECONDS,
    ) -> None:
        """Initialize the synchronizer.

        Args:
            provider: Quote provider
            cache: Cache to replace on each successful sync
            symbol_source: Callable returning the ledger's current symbols,
                required for start() and notify_symbols_changed()
            interval: Seconds between periodic syncs
        """
        if interval <= 0:
            raise ValueError("Sync interval must be positive")

        self.provider = provider
        self.cache = cache
        self.interval = interval
        self._symbol_source = symbol_source
        self._task: asyncio.Task[None] | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._wake: asyncio.Event | None = None
        self._generation = 0
        self._last_symbols: frozenset[str] | None = None
        self._last_result: SyncResult | None = None

    @property
    def is_running(self) -> bool:
        """Check if the periodic task is active."""
        return self._task is not None and not self._task.done()

    @property
    def last_result(self) -> SyncResult | None:
        """Result of the most recent completed sync."""
        return self._last_result

    async def sync(self, symbols: Iterable[str]) -> SyncResult:
        """Refresh the cache for exactly the given symbols.

        Stable-value symbols are priced locally. Symbols the provider does not
        return are left out of the new cache. If the provider call fails the
        current cache is kept and returned.

        Args:
            symbols: Distinct symbols present in the ledger

        Returns:
            SyncResult describing what happened; never raises ProviderFailure
        """
        generation = self._generation
        requested = _normalize_symbols(symbols)

        if not requested:
            snapshots = self.cache.replace(())
            return self._finish(SyncResult(SyncStatus.SKIPPED, requested, snapshots), requested)

        local = {symbol: MarketSnapshot.stable(symbol) for symbol in requested & STABLE_SYMBOLS}
        remote = sorted(requested - STABLE_SYMBOLS)

        fetched: dict[str, MarketSnapshot] = {}
        if remote:
            try:
                fetched = await self.provider.fetch_quotes(remote)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                if self._is_outdated(generation):
                    return self._discarded(requested)
                failure = (
                    e if isinstance(e, ProviderFailure) else ProviderFailure(str(e), remote)
                )
                logger.warning(f"Market data sync failed, keeping previous prices: {failure}")
                self.cache.record_retained(remote, str(failure))
                return self._finish(
                    SyncResult(
                        SyncStatus.FAILED, requested, self.cache.snapshot(), error=failure
                    ),
                    None,
                )

        if self._is_outdated(generation):
            return self._discarded(requested)

        priced = dict(local)
        for symbol in remote:
            snapshot = fetched.get(symbol)
            if snapshot is not None:
                priced[symbol] = snapshot

        missing = frozenset(remote) - frozenset(priced)
        snapshots = self.cache.replace(priced.values())
        self.cache.record_missing(missing)
        if missing:
            logger.info(f"No market data for: {', '.join(sorted(missing))}")

        status = SyncStatus.PARTIAL if missing else SyncStatus.OK
        return self._finish(SyncResult(status, requested, snapshots, missing), requested)

    async def sync_now(self) -> SyncResult:
        """Sync the symbols currently reported by the symbol source."""
        return await self.sync(self._current_symbols())

    def start(self) -> None:
        """Start periodic syncing on the running event loop.

        The first sync happens immediately. Calling start() while running is
        a no-op.
        """
        if self.is_running:
            return
        if self._symbol_source is None:
            raise RuntimeError("A symbol source is required to start periodic sync")

        self._loop = asyncio.get_running_loop()
        wake = self._wake = asyncio.Event()
        self._task = self._loop.create_task(self._run(wake), name="market-data-sync")
        logger.info(f"Market data sync started (every {self.interval:g}s)")

    async def stop(self) -> None:
        """Cancel periodic syncing.

        Any provider call still in flight has its result discarded.
        """
        self._generation += 1
        task, self._task = self._task, None
        if task is None:
            return

        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("Market data sync stopped")

    def notify_symbols_changed(self) -> None:
        """Trigger an eager sync if the ledger's symbol set changed.

        Safe to call from any thread; does nothing while not running.
        """
        if not self.is_running or self._loop is None or self._wake is None:
            return
        if _normalize_symbols(self._current_symbols()) == self._last_symbols:
            return
        self._loop.call_soon_threadsafe(self._wake.set)

    async def _run(self, wake: asyncio.Event) -> None:
        """Periodic loop: sync, then wait for the interval or a wake-up."""
        while True:
            try:
                await self.sync_now()
            except asyncio.CancelledError:
                raise
            except Exception:
                # Keep looping; a broken symbol source must not end periodic sync
                logger.exception("Unexpected error during market data sync")

            with contextlib.suppress(TimeoutError):
                await asyncio.wait_for(wake.wait(), timeout=self.interval)
            wake.clear()

    def _current_symbols(self) -> Iterable[str]:
        if self._symbol_source is None:
            raise RuntimeError("No symbol source configured")
        return self._symbol_source()

    def _is_outdated(self, generation: int) -> bool:
        return generation != self._generation

    def _discarded(self, requested: frozenset[str]) -> SyncResult:
        logger.debug("Discarding market data that arrived after shutdown")
        return SyncResult(SyncStatus.DISCARDED, requested, self.cache.snapshot())

    def _finish(self, result: SyncResult, synced_symbols: frozenset[str] | None) -> SyncResult:
        if synced_symbols is not None:
            self._last_symbols = synced_symbols
        self._last_result = result
        return result
