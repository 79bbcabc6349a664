"""Concise human-readable run logger."""

from __future__ import annotations

import logging
from collections.abc import Sequence


class HumanLogger:
    """Console logger with fixed line types."""

    def __init__(self, level: str = "INFO") -> None:
        self._logger = logging.getLogger("whymoved")
        self._logger.setLevel(getattr(logging, level.upper(), logging.INFO))
        self._logger.propagate = False
        if not self._logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter("%(asctime)s | %(message)s", "%Y-%m-%d %H:%M:%S")
            handler.setFormatter(formatter)
            self._logger.addHandler(handler)

    def run_started(self, run_id: str, operation: str, models: Sequence[str]) -> None:
        self._logger.debug(
            "run | %s | %s | candidates %s",
            self._short_id(run_id),
            operation,
            ", ".join(models),
        )

    def model_attempt(self, model_id: str) -> None:
        self._logger.info("attempt | Trying model: %s", model_id)

    def model_failed(self, model_id: str, message: str) -> None:
        self._logger.warning("failed | Model %s failed: %s", model_id, self._one_line(message))

    def model_succeeded(self, model_id: str, attempt: int) -> None:
        self._logger.info("ok | %s | attempt %d", model_id, attempt)

    def cache_hit(self, status: str) -> None:
        self._logger.info("cache | market status hit | %s", status)

    def cache_miss(self) -> None:
        self._logger.info("cache | market status miss")

    def report_written(self, path: str) -> None:
        self._logger.info("report | %s", path)

    def error(self, message: str) -> None:
        self._logger.error("error | %s", message)

    @staticmethod
    def mask_key(value: str, head: int = 5, tail: int = 5) -> str:
        if not value:
            return ""
        if len(value) <= head + tail:
            return "*" * len(value)
        return f"{value[:head]}...{value[-tail:]}"

    @staticmethod
    def _short_id(value: str | None, head: int = 10, tail: int = 6) -> str:
        if not value:
            return ""
        text = str(value)
        if len(text) <= head + tail + 1:
            return text
        return f"{text[:head]}...{text[-tail:]}"

    @staticmethod
    def _one_line(message: str) -> str:
        return " ".join(str(message).split())
