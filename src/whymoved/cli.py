"""Command-line interface for market move explanations."""

from __future__ import annotations

import argparse
import sys

from whymoved import runtime
from whymoved.config import Settings, parse_model_candidates
from whymoved.domain.models import UserProfile
from whymoved.errors import ConfigError, WhyMovedError
from whymoved.logging.logger import HumanLogger
from whymoved.portfolio import load_holdings_csv

RISK_CHOICES = ["Low", "Moderate", "High"]
HORIZON_CHOICES = ["Short", "Medium", "Long"]


def _add_profile_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--risk", choices=RISK_CHOICES, default="Moderate", help="Risk tolerance")
    parser.add_argument("--horizon", choices=HORIZON_CHOICES, default="Medium", help="Horizon")


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(description="Explain recent moves of Indian equities")
    parser.add_argument(
        "--models",
        type=str,
        help="Comma-separated model candidates in preference order (model[:json|:text])",
    )
    parser.add_argument("--timeout", type=float, help="Per-request timeout in seconds")
    parser.add_argument("--cache-backend", choices=["memory", "sqlite"], help="Status cache store")
    parser.add_argument("--state-db", type=str, help="SQLite session store path")
    parser.add_argument("--events-dir", type=str, help="Directory for per-run event logs")
    parser.add_argument(
        "--no-search",
        action="store_true",
        help="Do not attach the Google Search grounding tool",
    )
    parser.add_argument("--log-level", type=str, help="Logging level")

    commands = parser.add_subparsers(dest="command", required=True)

    status = commands.add_parser("status", help="Is the market open on a date")
    status.add_argument("--date", type=str, help="Date to check (defaults to today)")

    commands.add_parser("pulse", help="Summary of the last trading session")

    explain = commands.add_parser("explain", help="Why a stock moved recently")
    explain.add_argument("stock", type=str, help="Stock name or NSE/BSE symbol")
    explain.add_argument("--report", type=str, help="Write an HTML price report to this path")

    compare = commands.add_parser("compare", help="Compare two stocks side by side")
    compare.add_argument("stock_a", type=str)
    compare.add_argument("stock_b", type=str)

    discover = commands.add_parser("discover", help="Stocks to study for a profile")
    _add_profile_arguments(discover)

    rebalance = commands.add_parser("rebalance", help="Rebalancing ideas for a holdings CSV")
    rebalance.add_argument("holdings", type=str, help="CSV with symbol, quantity, avg_price")
    _add_profile_arguments(rebalance)

    commands.add_parser("models", help="List upstream models available to the API key")
    return parser


def apply_cli_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Apply CLI values onto environment-derived settings."""
    overrides: dict[str, object] = {}
    if args.models:
        overrides["models"] = parse_model_candidates(args.models)
    if args.timeout is not None:
        overrides["request_timeout_seconds"] = args.timeout
    if args.cache_backend:
        overrides["status_cache_backend"] = args.cache_backend
    if args.state_db:
        overrides["state_db_path"] = args.state_db
    if args.events_dir:
        overrides["events_dir"] = args.events_dir
    if args.no_search:
        overrides["use_search_grounding"] = False
    if args.log_level:
        overrides["log_level"] = args.log_level.strip().upper()
    return settings.with_overrides(**overrides)


def dispatch(settings: Settings, args: argparse.Namespace) -> int:
    """Run the selected command."""
    human_logger = HumanLogger(level=settings.log_level)
    if args.command == "models":
        return runtime.list_models(settings)

    store = runtime.build_session_store(settings)
    try:
        service = runtime.build_service(settings, human_logger, store)
        if args.command == "status":
            return runtime.market_status(service, args.date)
        if args.command == "pulse":
            return runtime.yesterday_pulse(service)
        if args.command == "explain":
            return runtime.explain(service, args.stock, args.report, human_logger)
        if args.command == "compare":
            return runtime.compare(service, args.stock_a, args.stock_b)
        profile = UserProfile(risk_tolerance=args.risk, horizon=args.horizon)
        if args.command == "discover":
            return runtime.discover(service, profile)
        if args.command == "rebalance":
            return runtime.rebalance(service, profile, load_holdings_csv(args.holdings))
        raise ValueError(f"Unknown command '{args.command}'")
    finally:
        store.close()


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = apply_cli_overrides(Settings.from_env(), args)
        return dispatch(settings, args)
    except ConfigError as exc:
        print(f"Configuration error: {exc}")
        return 2
    except WhyMovedError as exc:
        print(f"Request failed: {exc}")
        return 1
    except ValueError as exc:
        print(f"Configuration error: {exc}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
