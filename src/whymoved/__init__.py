"""Gemini-backed explanations of Indian equity price moves."""

__version__ = "0.1.0"
