"""
Core enumerations for the portfolio engine.

This module provides centralized enumerations for domain concepts
like trade direction, sync outcomes and advisory risk levels.
"""

from .risk_levels import RiskLevel
from .sync_status import SyncStatus
from .trade_sides import TradeSide

__all__ = ["RiskLevel", "SyncStatus", "TradeSide"]
