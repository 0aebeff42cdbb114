"""Recording backend sinks for tests and dry runs."""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from analytics_bridge.clients.protocols import MediaHeartbeatDelegate
from analytics_bridge.models.media import HeartbeatConfig

Call = Tuple[str, Tuple[Any, ...]]


class RecordingAnalyticsClient:
    """Records every call as `(method, args)`."""

    def __init__(self) -> None:
        self.calls: List[Call] = []

    def track_action(self, action, context_data) -> None:
        self.calls.append(("track_action", (action, context_data)))

    def track_state(self, state, context_data) -> None:
        self.calls.append(("track_state", (state, context_data)))

    def set_user_identifier(self, identifier) -> None:
        self.calls.append(("set_user_identifier", (identifier,)))

    def flush_queue(self) -> None:
        self.calls.append(("flush_queue", ()))


class RecordingHeartbeat:
    """Records heartbeat calls; keeps the delegate and config it was built with."""

    def __init__(self, delegate: MediaHeartbeatDelegate, config: HeartbeatConfig) -> None:
        self.delegate = delegate
        self.config = config
        self.calls: List[Call] = []

    def track_session_start(self, media, context_data) -> None:
        self.calls.append(("track_session_start", (media, context_data)))

    def track_session_end(self) -> None:
        self.calls.append(("track_session_end", ()))

    def track_play(self) -> None:
        self.calls.append(("track_play", ()))

    def track_pause(self) -> None:
        self.calls.append(("track_pause", ()))

    def track_complete(self) -> None:
        self.calls.append(("track_complete", ()))

    def track_event(self, event, media, context_data) -> None:
        self.calls.append(("track_event", (event, media, context_data)))

    def names(self) -> List[str]:
        return [name for name, _ in self.calls]


class RecordingHeartbeatFactory:
    """Heartbeat factory that remembers every heartbeat it created."""

    def __init__(self) -> None:
        self.created: List[RecordingHeartbeat] = []

    def __call__(
        self, delegate: MediaHeartbeatDelegate, config: HeartbeatConfig
    ) -> RecordingHeartbeat:
        heartbeat = RecordingHeartbeat(delegate, config)
        self.created.append(heartbeat)
        return heartbeat

    @property
    def last(self) -> Optional[RecordingHeartbeat]:
        return self.created[-1] if self.created else None
