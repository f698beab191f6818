"""
Aether portfolio engine.

Trade ledger, holdings valuation and market data synchronization.
"""

__version__ = "4.2.0"
