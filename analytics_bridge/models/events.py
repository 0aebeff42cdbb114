"""
Inbound analytics event model.

Events arrive from an upstream SDK in the common track/screen/identify
shape. The model accepts the wire (camelCase) field names as well as the
Python names, and is frozen: translators never mutate an event, they derive
new dicts from it.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class EventType(str, Enum):
    TRACK = "track"
    SCREEN = "screen"
    IDENTIFY = "identify"
    GROUP = "group"
    ALIAS = "alias"


class Event(BaseModel):
    """
    Typed analytics event.

    `name` holds the event name for track calls and the screen name for
    screen calls; on input it may be given as either `event` or `name`.
    """

    type: EventType = EventType.TRACK
    name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("name", "event"),
    )
    properties: Dict[str, Any] = Field(default_factory=dict)
    user_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("userId", "user_id"),
        serialization_alias="userId",
    )
    anonymous_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("anonymousId", "anonymous_id"),
        serialization_alias="anonymousId",
    )
    context: Dict[str, Any] = Field(default_factory=dict)
    integrations: Dict[str, Any] = Field(default_factory=dict)
    timestamp: Optional[datetime] = None

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        json_schema_extra={
            "example": {
                "type": "track",
                "event": "Order Completed",
                "userId": "u_12",
                "anonymousId": "a-8d1c",
                "context": {"library": "analytics-python"},
                "properties": {
                    "orderId": "A5744855555",
                    "products": [
                        {"name": "shoes", "category": "athletic", "price": 10.0}
                    ],
                },
            }
        },
    )

    def root(self) -> Dict[str, Any]:
        """
        Root-level payload with wire field names.

        Used for absolute field lookups such as `.anonymousId` or
        `.context.library`.
        """
        payload: Dict[str, Any] = {
            "type": self.type.value,
            "userId": self.user_id,
            "anonymousId": self.anonymous_id,
            "context": self.context,
            "integrations": self.integrations,
            "properties": self.properties,
            "timestamp": self.timestamp,
        }
        if self.type == EventType.TRACK:
            payload["event"] = self.name
        else:
            payload["name"] = self.name
        return payload

    def integration_options(self, key: str) -> Dict[str, Any]:
        """Per-destination options from `integrations[key]`, or an empty dict."""
        options = self.integrations.get(key)
        return options if isinstance(options, dict) else {}

    @classmethod
    def track(cls, name: str, properties: Optional[Dict[str, Any]] = None, **kwargs: Any) -> "Event":
        """Convenience constructor for a track event."""
        return cls(type=EventType.TRACK, name=name, properties=properties or {}, **kwargs)

    @classmethod
    def screen(cls, name: str, properties: Optional[Dict[str, Any]] = None, **kwargs: Any) -> "Event":
        """Convenience constructor for a screen event."""
        return cls(type=EventType.SCREEN, name=name, properties=properties or {}, **kwargs)
