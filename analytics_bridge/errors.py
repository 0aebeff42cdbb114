"""
Exception hierarchy for analytics-bridge.

Configuration and protocol violations are raised to the caller. Data-quality
problems inside an event (missing product id, unparsable numbers) are never
raised: they degrade to defaults and are logged where they happen.
"""

from __future__ import annotations


class BridgeError(Exception):
    """Base class for all analytics-bridge errors."""


class InvalidPathError(BridgeError, ValueError):
    """A configured field path is empty or contains an empty segment."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Invalid field path: {path!r}")
        self.path = path


class UnknownEventError(BridgeError, ValueError):
    """An event name outside a translator's closed set was passed in."""

    kind: str = "event"

    def __init__(self, name: str) -> None:
        super().__init__(f"{name} is not a valid {self.kind} event")
        self.name = name


class UnknownEcommerceEventError(UnknownEventError):
    kind = "ecommerce"


class UnknownVideoEventError(UnknownEventError):
    kind = "video"


class SessionNotStartedError(BridgeError, RuntimeError):
    """A video event arrived while no playback session was active."""

    def __init__(self, event_name: str) -> None:
        super().__init__(
            f"Video session has not started yet (received {event_name!r})."
        )
        self.event_name = event_name
