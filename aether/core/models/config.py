"""
Engine configuration.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from aether.core.constants import (
    DEFAULT_LEDGER_PATH,
    MAX_SYNC_INTERVAL_SECONDS,
    MIN_SYNC_INTERVAL_SECONDS,
    PROVIDER_TIMEOUT_SECONDS,
    SYNC_INTERVAL_SECONDS,
    TICKER_CACHE_TTL_SECONDS,
)
from aether.core.exceptions.portfolio import ConfigurationError

ENV_LEDGER_PATH = "AETHER_LEDGER_PATH"
ENV_SYNC_INTERVAL = "AETHER_SYNC_INTERVAL"
ENV_PROVIDER_TIMEOUT = "AETHER_PROVIDER_TIMEOUT"


def _env_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e


@dataclass
class EngineConfig:
    """Configuration for a running portfolio engine."""

    ledger_path: Path = Path(DEFAULT_LEDGER_PATH)
    sync_interval: float = SYNC_INTERVAL_SECONDS
    provider_timeout: float = PROVIDER_TIMEOUT_SECONDS
    ticker_cache_ttl: float = TICKER_CACHE_TTL_SECONDS

    def is_valid_sync_interval(self) -> bool:
        """Validate sync interval is within reasonable bounds."""
        return MIN_SYNC_INTERVAL_SECONDS <= self.sync_interval <= MAX_SYNC_INTERVAL_SECONDS

    def is_valid_timeout(self) -> bool:
        """Validate provider timeout is positive and shorter than the interval."""
        return 0 < self.provider_timeout <= self.sync_interval

    def is_valid_cache_ttl(self) -> bool:
        """Validate ticker cache TTL does not outlive a sync cycle."""
        return 0 < self.ticker_cache_ttl < self.sync_interval

    def validate(self) -> "EngineConfig":
        """Raise ConfigurationError if any setting is out of range."""
        if not self.is_valid_sync_interval():
            raise ConfigurationError(
                f"sync_interval must be between {MIN_SYNC_INTERVAL_SECONDS} and "
                f"{MAX_SYNC_INTERVAL_SECONDS}, got {self.sync_interval}"
            )
        if not self.is_valid_timeout():
            raise ConfigurationError(
                f"provider_timeout must be in (0, sync_interval], got {self.provider_timeout}"
            )
        if not self.is_valid_cache_ttl():
            raise ConfigurationError(
                f"ticker_cache_ttl must be in (0, sync_interval), got {self.ticker_cache_ttl}"
            )
        return self

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "EngineConfig":
        """Build a validated config from AETHER_* environment variables."""
        env = os.environ if env is None else env
        sync_interval = _env_float(env, ENV_SYNC_INTERVAL, SYNC_INTERVAL_SECONDS)
        return cls(
            ledger_path=Path(env.get(ENV_LEDGER_PATH) or DEFAULT_LEDGER_PATH),
            sync_interval=sync_interval,
            provider_timeout=_env_float(
                env, ENV_PROVIDER_TIMEOUT, min(PROVIDER_TIMEOUT_SECONDS, sync_interval)
            ),
            ticker_cache_ttl=min(TICKER_CACHE_TTL_SECONDS, sync_interval / 2),
        ).validate()

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "ledger_path": str(self.ledger_path),
            "sync_interval": self.sync_interval,
            "provider_timeout": self.provider_timeout,
            "ticker_cache_ttl": self.ticker_cache_ttl,
        }
