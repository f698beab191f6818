"""
Core type definitions and protocols.

This module defines the protocols the core valuation code depends on, so that
domain models never import infrastructure classes directly.
"""

from typing import Protocol

from aether.core.types.financial import PriceCache


class IPriceSource(Protocol):
    """Protocol for anything that serves versioned price snapshots.

    Implemented by the market data cache. ``version`` must change whenever
    ``snapshot()`` would return a different mapping.
    """

    @property
    def version(self) -> int:
        """Counter bumped on every snapshot swap."""
        ...

    def snapshot(self) -> PriceCache:
        """Current immutable symbol -> MarketSnapshot mapping."""
        ...
