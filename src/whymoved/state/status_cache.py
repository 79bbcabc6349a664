"""Market-status cache with a fixed freshness window."""

from __future__ import annotations

import json
import math
import time
from collections.abc import Callable

from whymoved.domain.models import MarketStatusResult
from whymoved.logging.logger import HumanLogger
from whymoved.state.store import SessionStore

CACHE_KEY = "wdim_market_status_cache"
CACHE_TIME_KEY = "wdim_market_status_time"
DEFAULT_TTL_SECONDS = 30 * 60


class MarketStatusCache:
    """Single-entry cache over a session store.

    An entry written at ``t`` is fresh while ``now - t < ttl``; afterwards it
    is treated as absent. There is no locking, so concurrent misses may both
    fetch and the later write wins.
    """

    def __init__(
        self,
        store: SessionStore,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
        logger: HumanLogger | None = None,
    ) -> None:
        self.store = store
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self.logger = logger

    def now(self) -> float:
        return float(self.clock())

    def read(self, now: float | None = None) -> MarketStatusResult | None:
        """Return the cached status if it is still fresh."""
        cached_status = self.store.get_item(CACHE_KEY)
        cached_time = self.store.get_item(CACHE_TIME_KEY)
        if not cached_status or not cached_time:
            return None
        current = self.now() if now is None else now
        try:
            written_at = float(cached_time)
        except ValueError:
            self._log_error(f"Failed to parse cached market status time: {cached_time!r}")
            return None
        if not math.isfinite(written_at):
            self._log_error(f"Cached market status time is not finite: {cached_time!r}")
            return None
        if current - written_at >= self.ttl_seconds:
            return None
        try:
            return MarketStatusResult.from_record(json.loads(cached_status))
        except (ValueError, KeyError, TypeError) as exc:
            self._log_error(f"Failed to parse cached market status: {exc}")
            return None

    def write(self, result: MarketStatusResult, written_at: float | None = None) -> None:
        timestamp = self.now() if written_at is None else written_at
        self.store.set_item(CACHE_KEY, json.dumps(result.to_record()))
        self.store.set_item(CACHE_TIME_KEY, repr(timestamp))

    def get_or_fetch(self, fetch: Callable[[], MarketStatusResult]) -> MarketStatusResult:
        """Serve a fresh entry or fetch, store and return a new one."""
        now = self.now()
        cached = self.read(now)
        if cached is not None:
            if self.logger is not None:
                self.logger.cache_hit(cached.status.value)
            return cached
        if self.logger is not None:
            self.logger.cache_miss()
        result = fetch()
        self.write(result, written_at=now)
        return result

    def _log_error(self, message: str) -> None:
        if self.logger is not None:
            self.logger.error(message)
