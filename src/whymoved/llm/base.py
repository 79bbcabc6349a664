"""Generative-language client contract."""

from __future__ import annotations

from typing import Any, Protocol

from whymoved.domain.models import GenerationResult, ModelInfo


class GenerationClient(Protocol):
    """Interface for text generation backends."""

    def generate_content(
        self,
        model: str,
        contents: str,
        config: dict[str, Any],
    ) -> GenerationResult:
        """Run one generate call against a single model."""

    def list_models(self) -> list[ModelInfo]:
        """Return every model visible to the configured key."""
