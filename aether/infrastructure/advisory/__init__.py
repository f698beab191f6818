"""
Advisory report consumption.
"""

from .report import AdvisoryReport, format_portfolio_summary, request_advisory_report

__all__ = ["AdvisoryReport", "format_portfolio_summary", "request_advisory_report"]
