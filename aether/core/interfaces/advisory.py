"""
Advisory report interfaces.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from aether.core.models.holding import Holding


class IAdvisoryReportGenerator(ABC):
    """Abstract interface for the external portfolio scorer."""

    @abstractmethod
    async def generate_report(self, holdings: Sequence[Holding]) -> dict[str, Any] | None:
        """Produce a report payload, or None when there is not enough data."""
        pass
