"""Utility helpers shared across docforest modules."""

from .helpers import ensure_directory, normalize_whitespace, serialize_json
from .logging import configure_logging, get_logger, log_timing, logging_context

__all__ = [
    "configure_logging",
    "get_logger",
    "logging_context",
    "log_timing",
    "normalize_whitespace",
    "ensure_directory",
    "serialize_json",
]
