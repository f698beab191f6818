"""Adapters around the core: market data, storage, advisory."""
