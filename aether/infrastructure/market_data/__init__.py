"""
Market data infrastructure.

This module provides the quote cache, the periodic synchronizer and the
Binance quote provider.
"""

from .binance_provider import BinanceMarketDataProvider
from .cache import MarketDataCache
from .synchronizer import MarketDataSynchronizer, SyncResult

__all__ = ["BinanceMarketDataProvider", "MarketDataCache", "MarketDataSynchronizer", "SyncResult"]
