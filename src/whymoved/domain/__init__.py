"""Domain models and event types."""

from .events import RequestEvent
from .models import (
    GenerationResult,
    MarketStatus,
    MarketStatusResult,
    ModelCandidate,
    ModelInfo,
    PortfolioHolding,
    Source,
    UserProfile,
)

__all__ = [
    "GenerationResult",
    "MarketStatus",
    "MarketStatusResult",
    "ModelCandidate",
    "ModelInfo",
    "PortfolioHolding",
    "RequestEvent",
    "Source",
    "UserProfile",
]
