"""
Interfaces of the backend collaborators.

The translation core only ever talks to these protocols; the concrete
transport (SDK bindings, HTTP, a log sink) is supplied by the caller.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol, runtime_checkable

from analytics_bridge.models.media import HeartbeatConfig, HeartbeatEvent, MediaObject, QoSInfo


@runtime_checkable
class AnalyticsClient(Protocol):
    """Action/state tracking and identity calls of the analytics backend."""

    def track_action(self, action: str, context_data: Optional[Dict[str, Any]]) -> None: ...

    def track_state(self, state: str, context_data: Optional[Dict[str, Any]]) -> None: ...

    def set_user_identifier(self, identifier: Optional[str]) -> None: ...

    def flush_queue(self) -> None: ...


@runtime_checkable
class MediaHeartbeat(Protocol):
    """Video heartbeat tracker for one playback session."""

    def track_session_start(
        self, media: Optional[MediaObject], context_data: Optional[Dict[str, str]]
    ) -> None: ...

    def track_session_end(self) -> None: ...

    def track_play(self) -> None: ...

    def track_pause(self) -> None: ...

    def track_complete(self) -> None: ...

    def track_event(
        self,
        event: HeartbeatEvent,
        media: Optional[MediaObject],
        context_data: Optional[Dict[str, str]],
    ) -> None: ...


class MediaHeartbeatDelegate(Protocol):
    """Polled by the heartbeat tracker for playhead and quality data."""

    def get_current_playback_time(self) -> float: ...

    def get_qos_object(self) -> Optional[QoSInfo]: ...


class HeartbeatFactory(Protocol):
    def __call__(
        self, delegate: MediaHeartbeatDelegate, config: HeartbeatConfig
    ) -> MediaHeartbeat: ...
