"""Domain exceptions for the portfolio engine."""
