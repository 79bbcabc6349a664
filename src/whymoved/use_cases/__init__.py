"""Market insight use cases."""

from .service import InsightService, parse_market_status

__all__ = ["InsightService", "parse_market_status"]
