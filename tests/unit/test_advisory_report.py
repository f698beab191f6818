"""
Unit tests for advisory report validation.
"""

from collections.abc import Sequence
from typing import Any

import pytest

from aether.core.enums import RiskLevel
from aether.core.interfaces.advisory import IAdvisoryReportGenerator
from aether.core.models.holding import Holding
from aether.core.models.market import MarketSnapshot
from aether.core.models.portfolio_holdings import compute_holdings
from aether.core.models.trade import Trade
from aether.infrastructure.advisory import (
    AdvisoryReport,
    format_portfolio_summary,
    request_advisory_report,
)

REPORT = {
    "riskLevel": "high",
    "concentrationRisk": "BTC is 100% of the portfolio",
    "rebalanceStrategy": "Diversify into ETH",
    "marketOutlook": "Volatile",
    "confidenceScore": 72,
}


class FakeGenerator(IAdvisoryReportGenerator):
    """Generator returning a canned payload."""

    def __init__(self, payload: Any = None, error: Exception | None = None) -> None:
        self.payload = payload
        self.error = error
        self.calls: list[list[Holding]] = []

    async def generate_report(self, holdings: Sequence[Holding]) -> dict[str, Any] | None:
        self.calls.append(list(holdings))
        if self.error is not None:
            raise self.error
        return self.payload


def holdings() -> list[Holding]:
    trades = [Trade(id="1", symbol="BTC", entry_price=50000.0, amount=0.1, fee=5.0, timestamp=1)]
    return compute_holdings(trades, {"BTC": MarketSnapshot(symbol="BTC", price=60000.0)})


class TestAdvisoryReport:
    """Test suite for the report model."""

    def test_should_parse_camel_case_payload(self) -> None:
        """Test aliases and risk level normalization."""
        report = AdvisoryReport.model_validate(REPORT)

        assert report.risk_level == RiskLevel.HIGH
        assert report.confidence_score == 72.0
        assert report.model_dump(by_alias=True)["riskLevel"] == "High"

    def test_should_format_summary_lines(self) -> None:
        """Test the scorer input format."""
        summary = format_portfolio_summary(holdings())

        assert summary == "Asset: BTC | Value: $6000.00 | ROI: 19.88% | Alloc: 100.00%"


class TestRequestAdvisoryReport:
    """Test suite for request_advisory_report."""

    @pytest.mark.asyncio
    async def test_should_return_validated_report(self) -> None:
        """Test the happy path."""
        generator = FakeGenerator(REPORT)

        report = await request_advisory_report(generator, holdings())

        assert report is not None
        assert report.rebalance_strategy == "Diversify into ETH"
        assert len(generator.calls) == 1

    @pytest.mark.asyncio
    async def test_should_skip_empty_holdings(self) -> None:
        """Test the generator is not called without holdings."""
        generator = FakeGenerator(REPORT)

        assert await request_advisory_report(generator, []) is None
        assert generator.calls == []

    @pytest.mark.asyncio
    async def test_should_return_none_on_generator_error(self) -> None:
        """Test failures become None."""
        generator = FakeGenerator(error=TimeoutError("scorer timed out"))

        assert await request_advisory_report(generator, holdings()) is None

    @pytest.mark.asyncio
    async def test_should_return_none_on_malformed_payload(self) -> None:
        """Test unusable payloads become None."""
        bad_payloads = (None, "text", {"riskLevel": "Unknown"}, {**REPORT, "confidenceScore": 150})
        for payload in bad_payloads:
            generator = FakeGenerator(payload)
            assert await request_advisory_report(generator, holdings()) is None
