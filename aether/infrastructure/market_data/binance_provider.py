"""
Binance quote provider.

Prices every symbol against USDT using the public 24h ticker endpoint. One
request returns every pair, so a whole batch costs a single download.
"""

import asyncio
from collections.abc import Sequence
from threading import RLock
from typing import Any

import requests
from cachetools import TTLCache
from loguru import logger

from aether.core.constants import (
    BINANCE_TICKER_URL,
    PROVIDER_TIMEOUT_SECONDS,
    QUOTE_ASSET,
    TICKER_CACHE_TTL_SECONDS,
)
from aether.core.exceptions.portfolio import ProviderFailure, ValidationError
from aether.core.interfaces.market_data import IMarketDataProvider
from aether.core.models.market import MarketSnapshot
from aether.core.types.financial import to_float

_TICKERS_KEY = "tickers"


def parse_ticker(symbol: str, ticker: dict[str, Any]) -> MarketSnapshot:
    """Convert one Binance 24h ticker into a snapshot for symbol.

    Raises:
        ProviderFailure: If the ticker fields are missing or not numeric
    """
    try:
        return MarketSnapshot(
            symbol=symbol,
            price=to_float(ticker["lastPrice"]),
            change_24h=to_float(ticker["priceChangePercent"]),
            high_24h=to_float(ticker["highPrice"]),
            low_24h=to_float(ticker["lowPrice"]),
            volume_24h=to_float(ticker["quoteVolume"]),
        )
    except (KeyError, TypeError, ValueError, ValidationError) as e:
        raise ProviderFailure(f"Malformed ticker for {symbol}: {e}", [symbol]) from e


class BinanceMarketDataProvider(IMarketDataProvider):
    """Market data provider backed by the Binance public REST API."""

    def __init__(
        self,
        url: str = BINANCE_TICKER_URL,
        timeout: float = PROVIDER_TIMEOUT_SECONDS,
        cache_ttl: float = TICKER_CACHE_TTL_SECONDS,
        quote_asset: str = QUOTE_ASSET,
        session: requests.Session | None = None,
    ):
        self.url = url
        self.timeout = timeout
        self.quote_asset = quote_asset
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        self._tickers: TTLCache[str, dict[str, dict[str, Any]]] = TTLCache(
            maxsize=1, ttl=cache_ttl
        )
        self._cache_lock = RLock()

    async def fetch_quotes(self, symbols: Sequence[str]) -> dict[str, MarketSnapshot]:
        """Fetch snapshots for symbols listed against the quote asset.

        Symbols without a <SYMBOL><QUOTE> pair are omitted. A malformed ticker
        for one symbol is skipped and logged.

        Raises:
            ProviderFailure: If the ticker download or decoding fails
        """
        if not symbols:
            return {}

        loop = asyncio.get_running_loop()
        tickers = await loop.run_in_executor(None, self._load_tickers)

        results: dict[str, MarketSnapshot] = {}
        for raw_symbol in symbols:
            symbol = raw_symbol.strip().upper()
            ticker = tickers.get(f"{symbol}{self.quote_asset}")
            if ticker is None:
                continue
            try:
                results[symbol] = parse_ticker(symbol, ticker)
            except ProviderFailure as e:
                logger.warning(str(e))
        return results

    def _load_tickers(self) -> dict[str, dict[str, Any]]:
        """Return pair -> ticker, downloading at most once per TTL window."""
        with self._cache_lock:
            cached = self._tickers.get(_TICKERS_KEY)
            if cached is not None:
                logger.debug("Using cached Binance tickers")
                return cached

            tickers = self._download_tickers()
            self._tickers[_TICKERS_KEY] = tickers
            return tickers

    def _download_tickers(self) -> dict[str, dict[str, Any]]:
        try:
            logger.debug(f"Requesting {self.url}")
            response = self.session.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.exceptions.RequestException as e:
            raise ProviderFailure(f"Binance request failed: {e}") from e
        except ValueError as e:
            raise ProviderFailure(f"Binance returned invalid JSON: {e}") from e

        if not isinstance(payload, list):
            raise ProviderFailure(
                f"Unexpected Binance payload: expected list, got {type(payload).__name__}"
            )

        return {
            entry["symbol"]: entry
            for entry in payload
            if isinstance(entry, dict) and isinstance(entry.get("symbol"), str)
        }

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()
