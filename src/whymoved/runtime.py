"""Runtime wiring for CLI commands."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Any
from uuid import uuid4

from whymoved.config import Settings
from whymoved.domain.models import PortfolioHolding, UserProfile
from whymoved.llm.base import GenerationClient
from whymoved.llm.gemini_client import GeminiRestClient
from whymoved.logging.event_sink import JsonlEventSink, generate_price_report
from whymoved.logging.logger import HumanLogger
from whymoved.portfolio import allocation_frame
from whymoved.state.sqlite_store import SqliteSessionStore
from whymoved.state.status_cache import MarketStatusCache
from whymoved.state.store import MemorySessionStore, SessionStore
from whymoved.use_cases.service import InsightService


def build_client(settings: Settings) -> GeminiRestClient:
    return GeminiRestClient(
        api_key=settings.require_api_key(),
        base_url=settings.gemini_base_url,
        timeout=settings.request_timeout_seconds,
    )


def build_session_store(settings: Settings) -> SessionStore:
    if settings.status_cache_backend == "sqlite":
        return SqliteSessionStore(settings.state_db_path)
    return MemorySessionStore()


def build_service(
    settings: Settings,
    human_logger: HumanLogger,
    store: SessionStore,
    client: GenerationClient | None = None,
) -> InsightService:
    run_id = uuid4().hex
    event_sink: JsonlEventSink | None = None
    if settings.events_dir:
        event_sink = JsonlEventSink(str(Path(settings.events_dir) / run_id / "events.jsonl"))
    cache = MarketStatusCache(
        store,
        ttl_seconds=settings.status_cache_seconds(),
        logger=human_logger,
    )
    return InsightService(
        client=client or build_client(settings),
        candidates=settings.models,
        status_cache=cache,
        logger=human_logger,
        event_sink=event_sink,
        use_search=settings.use_search_grounding,
        run_id=run_id,
    )


def print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def market_status(service: InsightService, date_str: str | None = None) -> int:
    result = service.check_market_status(date_str or date.today().isoformat())
    print_json(result.to_record())
    return 0


def yesterday_pulse(service: InsightService) -> int:
    print_json(service.fetch_yesterday_pulse())
    return 0


def explain(
    service: InsightService,
    stock_name: str,
    report_path: str | None = None,
    human_logger: HumanLogger | None = None,
) -> int:
    explanation = service.fetch_stock_explanation(stock_name)
    print_json(explanation)
    if report_path:
        generate_price_report(explanation, report_path)
        if human_logger is not None:
            human_logger.report_written(report_path)
    return 0


def compare(service: InsightService, stock_a: str, stock_b: str) -> int:
    print_json(service.fetch_comparison(stock_a, stock_b))
    return 0


def discover(service: InsightService, profile: UserProfile) -> int:
    print_json(service.fetch_discovery_suggestions(profile))
    return 0


def rebalance(
    service: InsightService,
    profile: UserProfile,
    holdings: list[PortfolioHolding],
) -> int:
    allocation = allocation_frame(holdings)
    if not allocation.empty:
        print(allocation.to_string(index=False, float_format=lambda value: f"{value:,.2f}"))
    print_json(service.fetch_rebalancing_suggestions(profile, holdings))
    return 0


def list_models(settings: Settings) -> int:
    """Print every upstream model visible to the configured key."""
    client = build_client(settings)
    print(f"Using Key: {HumanLogger.mask_key(settings.gemini_api_key)}")
    print("Fetching models...")
    models = client.list_models()
    print("\n--- AVAILABLE MODELS ---")
    for model in models:
        label = f" (Display: {model.display_name})" if model.display_name else ""
        print(f"- {model.name}{label}")
        print(f"  Supported: {', '.join(model.supported_generation_methods) or '-'}")
    return 0
