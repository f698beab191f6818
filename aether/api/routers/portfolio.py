"""
Portfolio valuation API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from aether.api.dependencies import get_engine
from aether.api.schemas.api_models import (
    AdvisoryResponse,
    HoldingResponse,
    StatsResponse,
    SyncResponse,
)
from aether.engine import PortfolioEngine

router = APIRouter()


@router.get("/holdings")
async def get_holdings(engine: PortfolioEngine = Depends(get_engine)) -> list[HoldingResponse]:
    """Holdings ranked by market value."""
    return [HoldingResponse.from_holding(h) for h in engine.portfolio.holdings]


@router.get("/holdings/{symbol}")
async def get_holding(
    symbol: str, engine: PortfolioEngine = Depends(get_engine)
) -> HoldingResponse:
    """Holding for one asset."""
    holding = engine.portfolio.holding(symbol)
    if holding is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"No trades for {symbol.upper()}"
        )
    return HoldingResponse.from_holding(holding)


@router.get("/stats")
async def get_stats(engine: PortfolioEngine = Depends(get_engine)) -> StatsResponse:
    """Account statistics."""
    return StatsResponse.from_stats(engine.portfolio.stats)


@router.post("/sync")
async def sync_prices(engine: PortfolioEngine = Depends(get_engine)) -> SyncResponse:
    """Refresh market prices now."""
    result = await engine.synchronizer.sync(engine.ledger.symbols())
    return SyncResponse.from_result(result)


@router.get("/advisory")
async def get_advisory(engine: PortfolioEngine = Depends(get_engine)) -> AdvisoryResponse:
    """Advisory report for current holdings, if one can be produced."""
    report = await engine.advisory_report()
    if report is None:
        return AdvisoryResponse(available=False)
    return AdvisoryResponse(available=True, report=report.model_dump(mode="json"))
