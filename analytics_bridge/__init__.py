"""
analytics-bridge package.

This package contains:
- the inbound event model and media heartbeat value objects
- event translators (context data, ecommerce, video) and the dispatcher
- backend client protocols with logging and recording implementations
- observability utilities (logging, tracing, metrics)
"""

from analytics_bridge.models.events import Event, EventType

__all__ = [
    "Event",
    "EventType",
]
