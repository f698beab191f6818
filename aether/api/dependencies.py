"""
Request dependencies.
"""

from fastapi import Request

from aether.engine import PortfolioEngine


def get_engine(request: Request) -> PortfolioEngine:
    """The engine created by the application lifespan."""
    return request.app.state.engine
