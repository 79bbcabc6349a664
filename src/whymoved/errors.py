"""Custom exceptions for clearer error handling across the package."""

from __future__ import annotations


class WhyMovedError(Exception):
    """Base exception for all package-specific errors."""


class ConfigError(WhyMovedError):
    """Raised when environment configuration is invalid or missing."""


class ModelRequestError(WhyMovedError):
    """Raised when a single model request fails."""


class UnparseableModelOutputError(WhyMovedError, ValueError):
    """Raised when model text cannot be turned into JSON."""

    def __init__(self, message: str, text: str = "") -> None:
        super().__init__(message)
        self.text = text


class AllModelsFailedError(WhyMovedError):
    """Raised when every model candidate failed."""

    def __init__(self, failures: list[str]) -> None:
        self.failures = list(failures)
        super().__init__("All models failed. Details:\n" + "\n".join(self.failures))
