"""
Market data access interfaces.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from aether.core.models.market import MarketSnapshot


class IMarketDataProvider(ABC):
    """Abstract interface for quote providers."""

    @abstractmethod
    async def fetch_quotes(self, symbols: Sequence[str]) -> dict[str, MarketSnapshot]:
        """Fetch the latest snapshot for each symbol.

        Symbols the provider does not list are omitted from the result.
        Implementations raise ProviderFailure when the batch cannot be fetched.
        """
        pass

    def close(self) -> None:
        """Release connections held by the provider."""
        pass
