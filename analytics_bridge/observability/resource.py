"""
Shared OpenTelemetry resource for logs, traces and metrics.
"""

import os
from typing import Dict

from opentelemetry.sdk.resources import Resource
from opentelemetry.semconv.attributes.service_attributes import SERVICE_NAME

SERVICE_NAME_VALUE: str = os.getenv("OTEL_SERVICE_NAME", "analytics-bridge")
ENVIRONMENT: str = os.getenv(
    "OTEL_RESOURCE_ATTRIBUTES",
    "deployment.environment=local",
)


def build_resource() -> Resource:
    """Resource carrying the service name and OTEL_RESOURCE_ATTRIBUTES pairs."""
    attrs: Dict[str, str] = {
        kv.split("=", 1)[0]: kv.split("=", 1)[1]
        for kv in ENVIRONMENT.split(",")
        if "=" in kv
    }
    return Resource.create({SERVICE_NAME: SERVICE_NAME_VALUE, **attrs})
