"""
Factory functions for OTLP exporters (gRPC logging, metrics, trace).
"""

import os
from typing import Dict, Optional

from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

DEFAULT_ENDPOINT: str = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4317")
DEFAULT_HEADERS: Optional[str] = os.getenv("OTEL_EXPORTER_OTLP_HEADERS")


def _common_kwargs(endpoint: Optional[str] = None) -> Dict[str, object]:
    """
    Build common keyword arguments for all OTLP exporters.

    Args:
        endpoint: Collector endpoint; falls back to OTEL_EXPORTER_OTLP_ENDPOINT.

    Returns:
        A dictionary containing endpoint, headers and insecure flag.
    """
    headers: Optional[Dict[str, str]] = (
        dict(h.split("=", 1) for h in DEFAULT_HEADERS.split(","))
        if DEFAULT_HEADERS
        else None
    )

    return {
        "endpoint": endpoint or DEFAULT_ENDPOINT,
        "headers": headers,
        "insecure": True,
    }


def build_trace_exporter(endpoint: Optional[str] = None) -> OTLPSpanExporter:
    return OTLPSpanExporter(**_common_kwargs(endpoint))


def build_metric_exporter(endpoint: Optional[str] = None) -> OTLPMetricExporter:
    return OTLPMetricExporter(**_common_kwargs(endpoint))


def build_log_exporter(endpoint: Optional[str] = None) -> OTLPLogExporter:
    return OTLPLogExporter(**_common_kwargs(endpoint))
