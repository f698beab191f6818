"""
Ledger persistence interfaces.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from aether.core.models.trade import Trade


class ITradeStore(ABC):
    """Abstract interface for ledger storage."""

    @abstractmethod
    def load_trades(self) -> list[Trade]:
        """Load the persisted ledger at startup."""
        pass

    @abstractmethod
    def save_trades(self, trades: Sequence[Trade]) -> None:
        """Persist the full ledger after a mutation."""
        pass
