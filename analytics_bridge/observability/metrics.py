"""
Metrics initialization and meter provider for OpenTelemetry.

This module initializes a process-wide MeterProvider and exposes
a helper to retrieve the default Meter for the current service.
"""

from typing import Optional

from opentelemetry import metrics
from opentelemetry.metrics import Meter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader

from analytics_bridge.observability.otlp_exporter import build_metric_exporter
from analytics_bridge.observability.resource import SERVICE_NAME_VALUE, build_resource

_provider: Optional[MeterProvider] = None


def init_metrics(endpoint: Optional[str] = None) -> None:
    """
    Initialize the OTel MeterProvider and register an OTLP metric exporter.

    Idempotent: repeated calls keep the first provider.
    """
    global _provider

    if _provider is not None:
        return

    reader = PeriodicExportingMetricReader(build_metric_exporter(endpoint))
    _provider = MeterProvider(resource=build_resource(), metric_readers=[reader])
    metrics.set_meter_provider(_provider)


def get_meter() -> Meter:
    """
    Retrieve the default Meter for the current service.

    Instruments created before `init_metrics()` are proxies that start
    recording once a provider is set.
    """
    return metrics.get_meter(SERVICE_NAME_VALUE)
