"""
OpenTelemetry tracing initialization and tracer helper.
"""

from typing import Optional

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Tracer

from analytics_bridge.observability.otlp_exporter import build_trace_exporter
from analytics_bridge.observability.resource import SERVICE_NAME_VALUE, build_resource


def init_tracing(endpoint: Optional[str] = None) -> None:
    """
    Initialize the global TracerProvider and configure the OTLP span exporter.

    Until this is called, `get_tracer()` hands out the API's no-op tracer.
    """
    provider = TracerProvider(resource=build_resource())
    provider.add_span_processor(BatchSpanProcessor(build_trace_exporter(endpoint)))
    trace.set_tracer_provider(provider)


def get_tracer(name: str | None = None) -> Tracer:
    """
    Get a Tracer instance for the given instrumentation scope.

    Args:
        name: Logical scope name for the tracer. If None, the service name is used.
    """
    return trace.get_tracer(name or SERVICE_NAME_VALUE)
