"""Environment and CLI runtime configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Self

from dotenv import load_dotenv

from whymoved.domain.models import ModelCandidate
from whymoved.errors import ConfigError

DEFAULT_MODELS = [
    "gemini-flash-lite-latest",
    "gemini-2.5-flash-lite-preview-09-2025",
    "gemini-2.0-flash-lite-preview-02-05",
    "gemini-2.0-flash",
    "gemini-flash-latest",
    "gemini-pro-latest",
    "gemini-exp-1206",
    "gemini-3-flash-preview",
    "gemini-3-pro-preview",
    "gemini-1.5-flash",
    "gemini-1.5-pro",
]
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"


def parse_bool(value: str | None, default: bool) -> bool:
    """Parse truthy environment strings."""
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def parse_positive_float(value: str | None, default: float, *, field_name: str) -> float:
    """Parse optional positive numbers from env strings."""
    if value is None or not value.strip():
        return default
    parsed = float(value.strip())
    if parsed <= 0:
        raise ValueError(f"{field_name} must be positive")
    return parsed


def supports_structured_output(model_id: str) -> bool:
    """Default capability guess for identifiers without an explicit suffix."""
    return "lite" not in model_id.lower()


def parse_model_candidate(entry: str) -> ModelCandidate:
    """Parse `model`, `model:json` or `model:text` into a candidate."""
    text = entry.strip()
    model_id, _, capability = text.rpartition(":")
    if not model_id:
        return ModelCandidate(model_id=text, structured_output=supports_structured_output(text))
    normalized = capability.strip().lower()
    if normalized == "json":
        return ModelCandidate(model_id=model_id.strip(), structured_output=True)
    if normalized == "text":
        return ModelCandidate(model_id=model_id.strip(), structured_output=False)
    raise ValueError(f"Unknown model capability '{capability}' in '{entry}'. Use :json or :text")


def parse_model_candidates(value: str | None) -> list[ModelCandidate]:
    """Parse a comma-separated candidate list, preserving order."""
    if not value or not value.strip():
        return default_model_candidates()
    candidates: list[ModelCandidate] = []
    seen: set[str] = set()
    for item in value.split(","):
        if not item.strip():
            continue
        candidate = parse_model_candidate(item)
        if candidate.model_id in seen:
            continue
        seen.add(candidate.model_id)
        candidates.append(candidate)
    return candidates or default_model_candidates()


def default_model_candidates() -> list[ModelCandidate]:
    return [
        ModelCandidate(model_id=model_id, structured_output=supports_structured_output(model_id))
        for model_id in DEFAULT_MODELS
    ]


@dataclass(frozen=True)
class Settings:
    """Immutable runtime settings."""

    gemini_api_key: str = ""
    models: list[ModelCandidate] = field(default_factory=default_model_candidates)
    gemini_base_url: str = DEFAULT_BASE_URL
    request_timeout_seconds: float = 60.0
    status_cache_minutes: float = 30.0
    status_cache_backend: str = "memory"
    state_db_path: str = "state/whymoved_session.db"
    events_dir: str = ""
    use_search_grounding: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Self:
        """Create settings from environment variables."""
        load_dotenv()
        api_key = os.getenv("GEMINI_API_KEY") or os.getenv("VITE_GEMINI_API_KEY", "")
        raw = cls(
            gemini_api_key=api_key.strip(),
            models=parse_model_candidates(os.getenv("GEMINI_MODELS")),
            gemini_base_url=str(os.getenv("GEMINI_BASE_URL", DEFAULT_BASE_URL)).strip(),
            request_timeout_seconds=parse_positive_float(
                os.getenv("REQUEST_TIMEOUT_SECONDS"),
                60.0,
                field_name="request_timeout_seconds",
            ),
            status_cache_minutes=parse_positive_float(
                os.getenv("STATUS_CACHE_MINUTES"),
                30.0,
                field_name="status_cache_minutes",
            ),
            status_cache_backend=str(os.getenv("STATUS_CACHE_BACKEND", "memory")).strip().lower(),
            state_db_path=str(os.getenv("STATE_DB_PATH", "state/whymoved_session.db")).strip(),
            events_dir=str(os.getenv("EVENTS_DIR", "")).strip(),
            use_search_grounding=parse_bool(os.getenv("USE_SEARCH_GROUNDING"), True),
            log_level=str(os.getenv("LOG_LEVEL", "INFO")).strip().upper(),
        )
        return raw.validate()

    def with_overrides(self, **kwargs: object) -> Self:
        """Return a new settings object with updated values."""
        updated = replace(self, **kwargs)
        return updated.validate()

    def model_ids(self) -> list[str]:
        return [candidate.model_id for candidate in self.models]

    def status_cache_seconds(self) -> float:
        return self.status_cache_minutes * 60.0

    def require_api_key(self) -> str:
        """Return the API key or fail with a configuration error."""
        if not self.gemini_api_key:
            raise ConfigError("GEMINI_API_KEY is required (VITE_GEMINI_API_KEY is also accepted)")
        return self.gemini_api_key

    def validate(self) -> Self:
        """Validate settings fields."""
        if not self.models:
            raise ValueError("models must contain at least one candidate")
        if self.request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be positive")
        if self.status_cache_minutes <= 0:
            raise ValueError("status_cache_minutes must be positive")
        if self.status_cache_backend not in {"memory", "sqlite"}:
            raise ValueError("status_cache_backend must be one of memory, sqlite")
        if not self.gemini_base_url.startswith(("http://", "https://")):
            raise ValueError("gemini_base_url must be an http(s) URL")
        return self
