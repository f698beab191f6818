"""
Unit tests for engine configuration.
"""

from pathlib import Path

import pytest

from aether.core.exceptions.portfolio import ConfigurationError
from aether.core.models.config import EngineConfig


class TestEngineConfig:
    """Test suite for EngineConfig."""

    def test_should_use_defaults(self) -> None:
        """Test default settings are valid."""
        config = EngineConfig().validate()

        assert config.sync_interval == 30.0
        assert config.provider_timeout == 10.0
        assert config.ticker_cache_ttl == 5.0
        assert config.ledger_path == Path("data/trades.json")

    def test_should_read_environment(self) -> None:
        """Test AETHER_* variables."""
        config = EngineConfig.from_env(
            {
                "AETHER_LEDGER_PATH": "/tmp/ledger.json",
                "AETHER_SYNC_INTERVAL": "60",
                "AETHER_PROVIDER_TIMEOUT": "15",
            }
        )

        assert config.ledger_path == Path("/tmp/ledger.json")
        assert config.sync_interval == 60.0
        assert config.provider_timeout == 15.0

    def test_should_clamp_defaults_to_short_interval(self) -> None:
        """Test derived defaults fit inside a short sync interval."""
        config = EngineConfig.from_env({"AETHER_SYNC_INTERVAL": "4"})

        assert config.provider_timeout == 4.0
        assert config.ticker_cache_ttl == 2.0

    def test_should_ignore_blank_values(self) -> None:
        """Test empty variables fall back to defaults."""
        config = EngineConfig.from_env({"AETHER_SYNC_INTERVAL": " "})

        assert config.sync_interval == 30.0

    def test_should_reject_non_numeric_values(self) -> None:
        """Test malformed numbers."""
        with pytest.raises(ConfigurationError, match="AETHER_SYNC_INTERVAL must be a number"):
            EngineConfig.from_env({"AETHER_SYNC_INTERVAL": "fast"})

    def test_should_reject_out_of_range_interval(self) -> None:
        """Test interval bounds."""
        with pytest.raises(ConfigurationError, match="sync_interval"):
            EngineConfig(sync_interval=0.5).validate()

        with pytest.raises(ConfigurationError, match="sync_interval"):
            EngineConfig(sync_interval=7200).validate()

    def test_should_reject_timeout_longer_than_interval(self) -> None:
        """Test timeout must fit in a cycle."""
        config = EngineConfig(sync_interval=10, provider_timeout=20)

        assert not config.is_valid_timeout()
        with pytest.raises(ConfigurationError, match="provider_timeout"):
            config.validate()

    def test_should_reject_cache_ttl_not_below_interval(self) -> None:
        """Test ticker cache must expire within a cycle."""
        with pytest.raises(ConfigurationError, match="ticker_cache_ttl"):
            EngineConfig(sync_interval=10, provider_timeout=5, ticker_cache_ttl=10).validate()

    def test_should_convert_to_dict(self) -> None:
        """Test dictionary form."""
        assert EngineConfig().to_dict()["ledger_path"] == "data/trades.json"
