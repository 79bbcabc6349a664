"""Generative-language transport and fallback helpers."""

from .base import GenerationClient
from .fallback import generate_with_fallback
from .gemini_client import GeminiRestClient
from .request_config import build_generation_config, clean_json, parse_model_json

__all__ = [
    "GenerationClient",
    "GeminiRestClient",
    "build_generation_config",
    "clean_json",
    "generate_with_fallback",
    "parse_model_json",
]
