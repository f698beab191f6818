"""
Advisory risk level enumerations.
"""

from enum import StrEnum


class RiskLevel(StrEnum):
    """Risk buckets reported by the advisory generator."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    EXTREME = "Extreme"

    @classmethod
    def from_string(cls, value: str) -> "RiskLevel":
        """
        Convert a string to a RiskLevel, matching case-insensitively.

        Args:
            value: Risk level as reported by the generator

        Returns:
            Corresponding RiskLevel

        Raises:
            ValueError: If the value is not a known risk level
        """
        normalized = value.strip().lower()
        for level in cls:
            if level.value.lower() == normalized:
                return level
        raise ValueError(
            f"Unsupported risk level: {value}. "
            f"Supported levels: {', '.join([level.value for level in cls])}"
        )
