"""
FastAPI main application for the portfolio engine.
"""

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from aether import __version__
from aether.api.dependencies import get_engine
from aether.api.schemas.api_models import ErrorResponse
from aether.core.constants import PRICE_STALE_AFTER_INTERVALS
from aether.core.exceptions.portfolio import DataError, ValidationError
from aether.engine import PortfolioEngine, build_engine

from .routers import portfolio, trades, workspace

EngineFactory = Callable[[], PortfolioEngine]


def create_app(engine_factory: EngineFactory = build_engine) -> FastAPI:
    """Build the application; the engine is created when the app starts."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        engine = engine_factory()
        app.state.engine = engine
        await engine.start()
        try:
            yield
        finally:
            await engine.stop()

    app = FastAPI(
        title="Aether Portfolio API",
        version=__version__,
        description="Trade journal and live portfolio valuation",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",  # Development frontend
            "http://localhost:5173",  # Vite dev server
        ],
        allow_credentials=False,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["Content-Type", "Accept", "Origin"],
    )

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        logger.info(f"Rejected {request.method} {request.url.path}: {exc}")
        body = ErrorResponse(error="validation_error", message=str(exc))
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=body.model_dump()
        )

    @app.exception_handler(DataError)
    async def data_error_handler(request: Request, exc: DataError) -> JSONResponse:
        logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}")
        body = ErrorResponse(error="storage_error", message=str(exc))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body.model_dump()
        )

    app.include_router(trades.router, prefix="/api/trades", tags=["trades"])
    app.include_router(portfolio.router, prefix="/api/portfolio", tags=["portfolio"])
    app.include_router(workspace.router, prefix="/api/workspace", tags=["workspace"])

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint returning API information."""
        return {"message": "Aether Portfolio API", "version": __version__, "status": "running"}

    @app.get("/health")
    async def health(engine: PortfolioEngine = Depends(get_engine)) -> dict[str, Any]:
        """Health check with market data freshness."""
        max_age = engine.config.sync_interval * PRICE_STALE_AFTER_INTERVALS
        last_sync = engine.synchronizer.last_result
        return {
            "status": "healthy",
            "last_sync": last_sync.status.value if last_sync else None,
            "prices_stale": engine.cache.is_stale(max_age),
            "market_data": engine.cache.get_stats(),
        }

    return app


app = create_app()
