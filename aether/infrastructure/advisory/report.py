"""
Advisory report handling.

The report generator is an opaque external scorer. Whatever it returns is
validated here; a failure or an unusable payload becomes None, never an
exception, and is never retried automatically.
"""

from collections.abc import Sequence
from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from aether.core.enums import RiskLevel
from aether.core.exceptions.portfolio import AdvisoryUnavailable
from aether.core.interfaces.advisory import IAdvisoryReportGenerator
from aether.core.models.holding import Holding


class AdvisoryReport(BaseModel):
    """Validated advisory report."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    risk_level: RiskLevel = Field(..., alias="riskLevel")
    concentration_risk: str = Field(..., alias="concentrationRisk")
    rebalance_strategy: str = Field(..., alias="rebalanceStrategy")
    market_outlook: str = Field(..., alias="marketOutlook")
    confidence_score: float = Field(..., alias="confidenceScore", ge=0.0, le=100.0)

    @field_validator("risk_level", mode="before")
    @classmethod
    def parse_risk_level(cls, v: Any) -> RiskLevel:
        """Accept risk levels in any letter case."""
        if isinstance(v, RiskLevel):
            return v
        if not isinstance(v, str):
            raise ValueError(f"risk level must be a string, got {type(v).__name__}")
        return RiskLevel.from_string(v)


def format_portfolio_summary(holdings: Sequence[Holding]) -> str:
    """One line per holding, as handed to the scorer."""
    return "\n".join(
        f"Asset: {h.symbol} | Value: ${h.market_value:.2f} | "
        f"ROI: {h.pnl_percent:.2f}% | Alloc: {h.allocation_percent:.2f}%"
        for h in holdings
    )


def _validate_report(payload: Any) -> AdvisoryReport:
    if payload is None:
        raise AdvisoryUnavailable("generator returned no report")
    if not isinstance(payload, dict):
        raise AdvisoryUnavailable(f"expected an object, got {type(payload).__name__}")
    try:
        return AdvisoryReport.model_validate(payload)
    except PydanticValidationError as e:
        raise AdvisoryUnavailable(f"malformed report: {e.error_count()} invalid field(s)") from e


async def request_advisory_report(
    generator: IAdvisoryReportGenerator, holdings: Sequence[Holding]
) -> AdvisoryReport | None:
    """Ask the generator for a report on holdings.

    Returns:
        The validated report, or None when holdings are empty or the
        generator fails or returns unusable data
    """
    if not holdings:
        logger.debug("No holdings, skipping advisory report")
        return None

    try:
        payload = await generator.generate_report(list(holdings))
        return _validate_report(payload)
    except AdvisoryUnavailable as e:
        logger.warning(str(e))
        return None
    except Exception as e:
        logger.warning(str(AdvisoryUnavailable(f"{type(e).__name__}: {e}")))
        return None
