from analytics_bridge.models.events import Event, EventType
from analytics_bridge.models.media import (
    AdBreakInfo,
    AdInfo,
    AdMetadataKeys,
    ChapterInfo,
    HeartbeatConfig,
    HeartbeatEvent,
    MediaInfo,
    MediaObject,
    QoSInfo,
    StreamType,
    VideoMetadataKeys,
)

__all__ = [
    "Event",
    "EventType",
    "AdBreakInfo",
    "AdInfo",
    "AdMetadataKeys",
    "ChapterInfo",
    "HeartbeatConfig",
    "HeartbeatEvent",
    "MediaInfo",
    "MediaObject",
    "QoSInfo",
    "StreamType",
    "VideoMetadataKeys",
]
