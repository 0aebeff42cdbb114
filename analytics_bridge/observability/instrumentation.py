"""
Observability bootstrap utilities for logging, tracing, and metrics.

This module provides:
- a unified initialization entrypoint (`init_observability`)
- stable metric instruments for event translation
"""

import logging
from functools import lru_cache
from typing import NamedTuple, Optional

from opentelemetry.metrics import Counter, Histogram

from analytics_bridge.observability.logging import init_logging
from analytics_bridge.observability.metrics import get_meter, init_metrics
from analytics_bridge.observability.tracing import init_tracing


def init_observability(
    level: int = logging.INFO,
    *,
    export_otlp: bool = True,
    endpoint: Optional[str] = None,
) -> None:
    """
    Initialize logging, tracing, and metrics for the current process.

    Call once during service startup. With `export_otlp=False` only the
    stdout JSON logger is configured.
    """
    init_logging(level=level, export_otlp=export_otlp, endpoint=endpoint)
    if export_otlp:
        init_tracing(endpoint)
        init_metrics(endpoint)


class TranslationInstruments(NamedTuple):
    translated: Counter
    skipped: Counter
    products_dropped: Counter
    latency: Histogram


@lru_cache(maxsize=1)
def get_translation_instruments() -> TranslationInstruments:
    """
    Create OpenTelemetry instruments for event translation.

    Returns:
        translated: events turned into backend calls, by `kind`
        skipped: events that produced no backend call, by `reason`
        products_dropped: products discarded for lack of an id
        latency: per-event translation latency (ms)
    """
    meter = get_meter()

    translated: Counter = meter.create_counter(
        name="bridge_events_translated",
        description="Count of events translated into backend calls",
        unit="1",
    )

    skipped: Counter = meter.create_counter(
        name="bridge_events_skipped",
        description="Count of events that produced no backend call",
        unit="1",
    )

    products_dropped: Counter = meter.create_counter(
        name="bridge_products_dropped",
        description="Count of ecommerce products dropped for a missing id",
        unit="1",
    )

    latency: Histogram = meter.create_histogram(
        name="bridge_translation_latency_ms",
        description="Event translation latency in milliseconds",
        unit="ms",
    )

    return TranslationInstruments(translated, skipped, products_dropped, latency)
