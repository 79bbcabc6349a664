"""Market insight use cases built on the model-fallback client."""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from typing import Any, TypeVar
from uuid import uuid4

from whymoved.domain import schemas
from whymoved.domain.events import RequestEvent
from whymoved.domain.models import (
    MarketStatus,
    MarketStatusResult,
    ModelCandidate,
    PortfolioHolding,
    UserProfile,
)
from whymoved.llm.base import GenerationClient
from whymoved.llm.fallback import generate_with_fallback
from whymoved.llm.request_config import build_generation_config, parse_model_json
from whymoved.logging.event_sink import JsonlEventSink
from whymoved.logging.logger import HumanLogger
from whymoved.state.status_cache import MarketStatusCache
from whymoved.state.store import MemorySessionStore
from whymoved.use_cases import prompts

_STATUS_PATTERN = re.compile(r"STATUS:\s*(OPEN|CLOSED|UNKNOWN)", re.IGNORECASE)
_REASON_PATTERN = re.compile(r"REASON:\s*(.*)", re.IGNORECASE)

T = TypeVar("T")


def parse_market_status(text: str) -> MarketStatusResult:
    """Read `STATUS:` and `REASON:` markers from free text."""
    status_match = _STATUS_PATTERN.search(text or "")
    reason_match = _REASON_PATTERN.search(text or "")
    status = MarketStatus(status_match.group(1).upper()) if status_match else MarketStatus.UNKNOWN
    reason = reason_match.group(1).strip() if reason_match else "Requires verification"
    return MarketStatusResult(status=status, reason=reason)


class InsightService:
    """Six market-insight operations sharing one candidate list and cache."""

    def __init__(
        self,
        client: GenerationClient,
        candidates: Sequence[ModelCandidate],
        status_cache: MarketStatusCache | None = None,
        logger: HumanLogger | None = None,
        event_sink: JsonlEventSink | None = None,
        use_search: bool = True,
        run_id: str | None = None,
    ) -> None:
        self.client = client
        self.candidates = list(candidates)
        self.status_cache = status_cache or MarketStatusCache(MemorySessionStore(), logger=logger)
        self.logger = logger
        self.event_sink = event_sink
        self.use_search = use_search
        self.run_id = run_id or uuid4().hex

    def check_market_status(self, date_str: str) -> MarketStatusResult:
        return self.status_cache.get_or_fetch(lambda: self._fetch_market_status(date_str))

    def fetch_yesterday_pulse(self) -> dict[str, Any]:
        return self._generate_json(
            "yesterday_pulse",
            prompts.yesterday_pulse_prompt(),
            schemas.YESTERDAY_PULSE_SCHEMA,
            prompts.EXPLAINER_SYSTEM_INSTRUCTION,
        )

    def fetch_stock_explanation(self, stock_name: str) -> dict[str, Any]:
        prompt = prompts.stock_explanation_prompt(stock_name)

        def attempt(candidate: ModelCandidate) -> dict[str, Any]:
            response = self.client.generate_content(
                model=candidate.model_id,
                contents=prompt,
                config=self._config(
                    candidate,
                    schemas.STOCK_EXPLANATION_SCHEMA,
                    prompts.EXPLAINER_SYSTEM_INSTRUCTION,
                ),
            )
            data = self._expect_object(parse_model_json(response.text))
            return {**data, "sources": [source.to_record() for source in response.sources]}

        return self._run("stock_explanation", attempt)

    def fetch_comparison(self, stock_a: str, stock_b: str) -> dict[str, Any]:
        prompt = prompts.comparison_prompt(stock_a, stock_b)

        def attempt(candidate: ModelCandidate) -> dict[str, Any]:
            response = self.client.generate_content(
                model=candidate.model_id,
                contents=prompt,
                config=self._config(
                    candidate,
                    schemas.COMPARISON_SCHEMA,
                    prompts.EXPLAINER_SYSTEM_INSTRUCTION,
                ),
            )
            data = self._expect_object(parse_model_json(response.text))
            for key in ("stockA", "stockB"):
                side = data.get(key)
                if not isinstance(side, dict):
                    raise ValueError(f"Comparison response missing '{key}' object")
                side["sources"] = []
            return data

        return self._run("comparison", attempt)

    def fetch_discovery_suggestions(self, profile: UserProfile) -> dict[str, Any]:
        return self._generate_json(
            "discovery",
            prompts.discovery_prompt(profile),
            schemas.DISCOVERY_SCHEMA,
            prompts.REBALANCER_SYSTEM_INSTRUCTION,
        )

    def fetch_rebalancing_suggestions(
        self,
        profile: UserProfile,
        holdings: Sequence[PortfolioHolding],
    ) -> dict[str, Any]:
        return self._generate_json(
            "rebalancing",
            prompts.rebalancing_prompt(profile, holdings),
            schemas.REBALANCING_SCHEMA,
            prompts.REBALANCER_SYSTEM_INSTRUCTION,
        )

    def _fetch_market_status(self, date_str: str) -> MarketStatusResult:
        prompt = prompts.market_status_prompt(date_str)

        def attempt(candidate: ModelCandidate) -> MarketStatusResult:
            # No schema; status and reason come from the STATUS:/REASON: markers.
            response = self.client.generate_content(
                model=candidate.model_id,
                contents=prompt,
                config={"system_instruction": prompts.EXPLAINER_SYSTEM_INSTRUCTION},
            )
            return parse_market_status(response.text)

        return self._run("market_status", attempt)

    def _generate_json(
        self,
        operation: str,
        prompt: str,
        schema: dict[str, Any],
        system_instruction: str,
    ) -> Any:
        def attempt(candidate: ModelCandidate) -> Any:
            response = self.client.generate_content(
                model=candidate.model_id,
                contents=prompt,
                config=self._config(candidate, schema, system_instruction),
            )
            return parse_model_json(response.text)

        return self._run(operation, attempt)

    def _run(self, operation: str, attempt: Callable[[ModelCandidate], T]) -> T:
        if self.logger is not None:
            self.logger.run_started(self.run_id, operation, [c.model_id for c in self.candidates])

        def on_event(event_type: str, payload: dict[str, Any]) -> None:
            if self.event_sink is None:
                return
            self.event_sink.emit(
                RequestEvent(
                    run_id=self.run_id,
                    operation=operation,
                    event_type=event_type,
                    payload=payload,
                )
            )

        return generate_with_fallback(
            self.candidates,
            attempt,
            logger=self.logger,
            on_event=on_event,
        )

    def _config(
        self,
        candidate: ModelCandidate,
        schema: dict[str, Any],
        system_instruction: str,
    ) -> dict[str, Any]:
        return build_generation_config(
            candidate,
            schema,
            system_instruction,
            use_search=self.use_search,
        )

    @staticmethod
    def _expect_object(data: Any) -> dict[str, Any]:
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
        return data
