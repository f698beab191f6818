"""
Trade journal API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from aether.api.dependencies import get_engine
from aether.api.schemas.api_models import TradeRequest, TradeResponse
from aether.engine import PortfolioEngine

router = APIRouter()


@router.get("")
async def list_trades(engine: PortfolioEngine = Depends(get_engine)) -> list[TradeResponse]:
    """List trades, newest first."""
    return [TradeResponse.from_trade(trade) for trade in engine.ledger.sorted_by_timestamp()]


@router.get("/{trade_id}")
async def get_trade(trade_id: str, engine: PortfolioEngine = Depends(get_engine)) -> TradeResponse:
    """One journal entry."""
    trade = engine.ledger.get(trade_id)
    if trade is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No trade {trade_id}")
    return TradeResponse.from_trade(trade)


@router.post("", status_code=status.HTTP_201_CREATED)
def add_trade(
    request: TradeRequest, engine: PortfolioEngine = Depends(get_engine)
) -> TradeResponse:
    """Log a new trade."""
    trade = engine.portfolio.add_trade(request.to_input())
    return TradeResponse.from_trade(trade)


@router.delete("/{trade_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_trade(trade_id: str, engine: PortfolioEngine = Depends(get_engine)) -> Response:
    """Delete a trade. Deleting an unknown id also succeeds."""
    engine.portfolio.remove_trade(trade_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
