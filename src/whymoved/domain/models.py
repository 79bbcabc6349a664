"""Core market-insight domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Self


class MarketStatus(StrEnum):
    """Trading session state for NSE/BSE on a given date."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class MarketStatusResult:
    """Market status with a free-text reason."""

    status: MarketStatus
    reason: str

    def to_record(self) -> dict[str, str]:
        return {"status": self.status.value, "reason": self.reason}

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Self:
        return cls(status=MarketStatus(str(record["status"])), reason=str(record["reason"]))


@dataclass(frozen=True)
class ModelCandidate:
    """Model identifier paired with its structured-output capability."""

    model_id: str
    structured_output: bool = True


@dataclass(frozen=True)
class Source:
    """Grounding citation returned alongside generated text."""

    title: str
    uri: str

    def to_record(self) -> dict[str, str]:
        return {"title": self.title, "uri": self.uri}


@dataclass(frozen=True)
class GenerationResult:
    """Text and citations returned by a single generate call."""

    text: str
    sources: list[Source] = field(default_factory=list)
    raw: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ModelInfo:
    """Upstream model listing entry."""

    name: str
    display_name: str = ""
    supported_generation_methods: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class UserProfile:
    """Investor profile used for discovery and rebalancing prompts."""

    risk_tolerance: str
    horizon: str


@dataclass(frozen=True)
class PortfolioHolding:
    """Single portfolio line."""

    symbol: str
    quantity: float
    average_price: float

    def to_record(self) -> dict[str, Any]:
        return {
            "symbol": self.symbol,
            "quantity": self.quantity,
            "averagePrice": self.average_price,
        }
