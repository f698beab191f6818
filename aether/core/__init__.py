"""Core domain: trades, holdings, statistics and their validation."""
