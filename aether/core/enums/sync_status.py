"""
Market data synchronization outcomes.
"""

from enum import StrEnum


class SyncStatus(StrEnum):
    """
    Outcome of one sync cycle.

    OK and PARTIAL both replace the cache; FAILED keeps the previous cache;
    DISCARDED means the result arrived after shutdown or was superseded.
    """

    OK = "ok"
    PARTIAL = "partial"
    FAILED = "failed"
    DISCARDED = "discarded"
    SKIPPED = "skipped"

    @property
    def replaced_cache(self) -> bool:
        """Check if this outcome swapped in a fresh cache."""
        return self in (self.OK, self.PARTIAL, self.SKIPPED)
