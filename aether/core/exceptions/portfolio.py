"""
Custom exception hierarchy for the portfolio engine.

This module defines domain-specific exceptions for better error handling.
Only ValidationError is meant to reach the end user; provider and advisory
failures are recovered where they occur.
"""


class AetherException(Exception):
    """Base exception for all portfolio engine errors."""

    pass


class ValidationError(AetherException):
    """Raised when trade input or an import payload is malformed."""

    pass


class DataError(AetherException):
    """Raised when ledger storage cannot be read or written."""

    pass


class ConfigurationError(AetherException):
    """Raised when configuration is invalid."""

    pass


class ProviderFailure(AetherException):
    """Raised by a market data provider when a quote batch cannot be fetched."""

    def __init__(self, message: str, symbols: list[str] | None = None):
        self.symbols = list(symbols or [])
        super().__init__(message)


class AdvisoryUnavailable(AetherException):
    """Raised when the advisory generator fails or returns unusable data."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Advisory report unavailable: {reason}")


class TradeLimitExceededError(ValidationError):
    """Raised when the ledger would grow beyond its record limit."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Maximum trades limit reached ({limit})")
