"""
Media heartbeat call shapes.

These models describe what the video engine hands to the heartbeat sink:
media/chapter/ad/ad-break descriptors, the quality-of-service snapshot and
the per-session tracker configuration. Metadata key strings match the
backend's standard metadata names.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class StreamType(str, Enum):
    VOD = "vod"
    LIVE = "live"


class HeartbeatEvent(str, Enum):
    AD_BREAK_START = "AdBreakStart"
    AD_BREAK_COMPLETE = "AdBreakComplete"
    AD_START = "AdStart"
    AD_COMPLETE = "AdComplete"
    AD_SKIP = "AdSkip"
    CHAPTER_START = "ChapterStart"
    CHAPTER_COMPLETE = "ChapterComplete"
    CHAPTER_SKIP = "ChapterSkip"
    SEEK_START = "SeekStart"
    SEEK_COMPLETE = "SeekComplete"
    BUFFER_START = "BufferStart"
    BUFFER_COMPLETE = "BufferComplete"
    BITRATE_CHANGE = "BitrateChange"


class VideoMetadataKeys:
    ASSET_ID = "a.media.asset"
    SHOW = "a.media.show"
    SEASON = "a.media.season"
    EPISODE = "a.media.episode"
    GENRE = "a.media.genre"
    NETWORK = "a.media.network"
    FIRST_AIR_DATE = "a.media.airDate"
    ORIGINATOR = "a.media.originator"
    RATING = "a.media.rating"
    STREAM_FORMAT = "a.media.format"


class AdMetadataKeys:
    ADVERTISER = "a.media.ad.advertiser"


class MediaObject(BaseModel):
    """Base for every descriptor passed to the heartbeat sink."""

    model_config = ConfigDict(frozen=True)


class MediaInfo(MediaObject):
    """Main content descriptor sent with the session start call."""

    name: Optional[str] = None
    media_id: Optional[str] = None
    length: float = 0.0
    stream_type: StreamType = StreamType.VOD
    standard_metadata: Dict[str, str] = Field(default_factory=dict)


class ChapterInfo(MediaObject):
    name: Optional[str] = None
    position: int = 1
    length: float = 0.0
    start_time: float = 0.0
    standard_metadata: Dict[str, str] = Field(default_factory=dict)


class AdBreakInfo(MediaObject):
    name: Optional[str] = None
    position: int = 1
    start_time: float = 0.0


class AdInfo(MediaObject):
    name: Optional[str] = None
    ad_id: Optional[str] = None
    position: int = 1
    length: float = 0.0
    standard_metadata: Dict[str, str] = Field(default_factory=dict)


class QoSInfo(MediaObject):
    """Quality-of-service snapshot; every field defaults to zero."""

    bitrate: int = 0
    startup_time: float = 0.0
    fps: float = 0.0
    dropped_frames: int = 0


class HeartbeatConfig(BaseModel):
    """
    Per-session configuration for the heartbeat tracker.

    Built from integration settings plus the Playback Started event.
    """

    tracking_server: str
    channel: str = ""
    player_name: str = "unknown"
    app_version: str = "unknown"
    ovp: str = "unknown"
    ssl: bool = False
    debug_logging: bool = False
