"""
Playhead tracking for one video playback session.

The heartbeat tracker polls `get_current_playback_time()` about once per
second and `get_qos_object()` every few seconds, usually from its own timer
thread, while events update the session from the caller's thread. All
reads and writes go through one lock.

Unless paused, the playhead advances by one second per elapsed second of
clock time since the last position update.
"""

from __future__ import annotations

import threading
import time
from typing import Any, Callable, Mapping, Optional

from analytics_bridge.core.values import get_float, get_int
from analytics_bridge.models.media import QoSInfo

Clock = Callable[[], int]


def monotonic_ms() -> int:
    """Default clock: monotonic time in milliseconds."""
    return time.monotonic_ns() // 1_000_000


class PlaybackSession:
    """Playhead and quality-of-service state; acts as the heartbeat delegate."""

    def __init__(self, clock: Clock = monotonic_ms) -> None:
        self._clock = clock
        self._lock = threading.RLock()

        # Clock reading (ms) at the last position update.
        self.playhead_position_time: int = clock()
        # Position in whole seconds at playhead_position_time.
        self.playhead_position: int = 0
        self.paused: bool = False
        self.qos: Optional[QoSInfo] = None

    def _calculate_position(self) -> int:
        delta = (self._clock() - self.playhead_position_time) // 1000
        return self.playhead_position + max(delta, 0)

    def get_current_playback_time(self) -> float:
        with self._lock:
            if self.paused:
                return float(self.playhead_position)
            return float(self._calculate_position())

    def get_qos_object(self) -> Optional[QoSInfo]:
        with self._lock:
            return self.qos

    def pause_playhead(self) -> None:
        """Freeze the playhead at its current computed position."""
        with self._lock:
            if not self.paused:
                self.playhead_position = self._calculate_position()
            self.playhead_position_time = self._clock()
            self.paused = True

    def unpause_playhead(self) -> None:
        """Resume accruing time from the frozen position."""
        with self._lock:
            self.paused = False
            self.playhead_position_time = self._clock()

    def update_playhead_position(self, position: int) -> None:
        """Jump to `position` seconds (seek completed, content started)."""
        with self._lock:
            self.playhead_position = position
            self.playhead_position_time = self._clock()

    def update_qos(self, properties: Mapping[str, Any]) -> QoSInfo:
        """Store a quality snapshot from a Video Quality Updated event."""
        startup_time = get_float(properties, "startupTime")
        if startup_time == 0:
            startup_time = get_float(properties, "startup_time")
        dropped_frames = get_int(properties, "droppedFrames")
        if dropped_frames == 0:
            dropped_frames = get_int(properties, "dropped_frames")

        qos = QoSInfo(
            bitrate=get_int(properties, "bitrate"),
            startup_time=startup_time,
            fps=get_float(properties, "fps"),
            dropped_frames=dropped_frames,
        )
        with self._lock:
            self.qos = qos
        return qos
