"""Sequential model fallback over an ordered candidate list."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from whymoved.domain.models import ModelCandidate
from whymoved.errors import AllModelsFailedError
from whymoved.logging.logger import HumanLogger

T = TypeVar("T")

EventCallback = Callable[[str, dict[str, Any]], None]


def generate_with_fallback(
    candidates: Sequence[ModelCandidate],
    generate_fn: Callable[[ModelCandidate], T],
    logger: HumanLogger | None = None,
    on_event: EventCallback | None = None,
) -> T:
    """Try each candidate in order and return the first successful result.

    Failures are collected as ``Model <id> failed: <message>`` lines and raised
    together as :class:`AllModelsFailedError` once the list is exhausted.
    Every failure advances to the next candidate; there is no backoff.
    """
    failures: list[str] = []
    for attempt, candidate in enumerate(candidates, start=1):
        if logger is not None:
            logger.model_attempt(candidate.model_id)
        if on_event is not None:
            on_event("model_attempt", {"model": candidate.model_id, "attempt": attempt})
        try:
            result = generate_fn(candidate)
        except Exception as exc:
            line = f"Model {candidate.model_id} failed: {exc}"
            failures.append(line)
            if logger is not None:
                logger.model_failed(candidate.model_id, str(exc))
            if on_event is not None:
                on_event(
                    "model_failed",
                    {
                        "model": candidate.model_id,
                        "attempt": attempt,
                        "error_type": type(exc).__name__,
                        "error": str(exc),
                    },
                )
            continue
        if logger is not None:
            logger.model_succeeded(candidate.model_id, attempt)
        if on_event is not None:
            on_event("model_succeeded", {"model": candidate.model_id, "attempt": attempt})
        return result
    raise AllModelsFailedError(failures)
