"""HTTP API for the portfolio engine."""
