"""
Public observability interface for analytics-bridge.

This module exposes stable entrypoints for:
- logging
- tracing
- metrics
- translation instruments

Callers should import from here instead of the underlying modules
to keep the internal implementation swappable.
"""

from .instrumentation import (
    TranslationInstruments,
    get_translation_instruments,
    init_observability,
)
from .logging import JsonTraceFormatter, get_logger, init_logging
from .metrics import get_meter, init_metrics
from .tracing import get_tracer, init_tracing

__all__ = [
    "init_observability",
    "init_logging",
    "init_tracing",
    "init_metrics",
    "get_logger",
    "get_tracer",
    "get_meter",
    "get_translation_instruments",
    "TranslationInstruments",
    "JsonTraceFormatter",
]
