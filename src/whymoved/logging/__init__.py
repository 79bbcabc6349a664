"""Logging helpers."""

from .event_sink import JsonlEventSink, generate_price_report
from .logger import HumanLogger

__all__ = ["HumanLogger", "JsonlEventSink", "generate_price_report"]
