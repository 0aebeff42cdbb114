"""
Video event translation.

Translates the video lifecycle events of a single playback into media
heartbeat calls. The engine owns at most one PlaybackSession: it is created
by "Video Playback Started" and dropped by "Video Playback Completed". Any
other video event without an active session is a protocol violation.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from analytics_bridge.clients.protocols import HeartbeatFactory, MediaHeartbeat
from analytics_bridge.core.context_data import ContextDataConfiguration
from analytics_bridge.core.playback import Clock, PlaybackSession, monotonic_ms
from analytics_bridge.core.values import (
    first_present,
    get_bool,
    get_float,
    get_int,
    get_string,
    to_backend_string,
)
from analytics_bridge.errors import SessionNotStartedError, UnknownVideoEventError
from analytics_bridge.models.events import Event
from analytics_bridge.models.media import (
    AdBreakInfo,
    AdInfo,
    AdMetadataKeys,
    ChapterInfo,
    HeartbeatConfig,
    HeartbeatEvent,
    MediaInfo,
    MediaObject,
    StreamType,
    VideoMetadataKeys,
)
from analytics_bridge.observability import get_logger

logger = get_logger(__name__)


class VideoEvent(str, Enum):
    PLAYBACK_STARTED = "Video Playback Started"
    CONTENT_STARTED = "Video Content Started"
    PLAYBACK_PAUSED = "Video Playback Paused"
    PLAYBACK_RESUMED = "Video Playback Resumed"
    CONTENT_COMPLETED = "Video Content Completed"
    PLAYBACK_COMPLETED = "Video Playback Completed"
    PLAYBACK_BUFFER_STARTED = "Video Playback Buffer Started"
    PLAYBACK_BUFFER_COMPLETED = "Video Playback Buffer Completed"
    PLAYBACK_SEEK_STARTED = "Video Playback Seek Started"
    PLAYBACK_SEEK_COMPLETED = "Video Playback Seek Completed"
    AD_BREAK_STARTED = "Video Ad Break Started"
    AD_BREAK_COMPLETED = "Video Ad Break Completed"
    AD_STARTED = "Video Ad Started"
    AD_SKIPPED = "Video Ad Skipped"
    AD_COMPLETED = "Video Ad Completed"
    PLAYBACK_INTERRUPTED = "Video Playback Interrupted"
    QUALITY_UPDATED = "Video Quality Updated"

    @classmethod
    def parse(cls, name: Optional[str]) -> "VideoEvent":
        try:
            return cls(name)
        except ValueError:
            raise UnknownVideoEventError(str(name)) from None

    @classmethod
    def is_video_event(cls, name: Optional[str]) -> bool:
        return name in cls._value2member_map_


VIDEO_METADATA_KEYS: Dict[str, str] = {
    "assetId": VideoMetadataKeys.ASSET_ID,
    "asset_id": VideoMetadataKeys.ASSET_ID,
    "contentAssetId": VideoMetadataKeys.ASSET_ID,
    "content_asset_id": VideoMetadataKeys.ASSET_ID,
    "program": VideoMetadataKeys.SHOW,
    "season": VideoMetadataKeys.SEASON,
    "episode": VideoMetadataKeys.EPISODE,
    "genre": VideoMetadataKeys.GENRE,
    "channel": VideoMetadataKeys.NETWORK,
    "airdate": VideoMetadataKeys.FIRST_AIR_DATE,
    "publisher": VideoMetadataKeys.ORIGINATOR,
    "rating": VideoMetadataKeys.RATING,
}

AD_METADATA_KEYS: Dict[str, str] = {
    "publisher": AdMetadataKeys.ADVERTISER,
}

# Properties that feed the media objects and never become context data.
MEDIA_OBJECT_KEYS = (
    "title",
    "indexPosition",
    "index_position",
    "position",
    "totalLength",
    "total_length",
    "startTime",
    "start_time",
)


def _index_position(properties: Mapping[str, Any]) -> int:
    index = get_int(properties, "indexPosition", 1)
    if index == 1:
        index = get_int(properties, "index_position", 1)
    return index


def _camel_or_snake_float(properties: Mapping[str, Any], camel: str, snake: str) -> float:
    value = get_float(properties, camel)
    if value == 0:
        value = get_float(properties, snake)
    return value


class VideoPayload:
    """
    A video event's properties split into standard metadata, media objects
    and context data.
    """

    def __init__(
        self,
        event: Event,
        context_data: ContextDataConfiguration,
        is_ad: bool = False,
    ) -> None:
        self.event = event
        self._context_data = context_data
        self.properties: Dict[str, Any] = dict(event.properties)
        self.metadata: Dict[str, str] = {}

        table = AD_METADATA_KEYS if is_ad else VIDEO_METADATA_KEYS
        for key, value in event.properties.items():
            if key in table and value is not None:
                self.metadata[table[key]] = to_backend_string(value)
                self.properties.pop(key)

        if not is_ad and "livestream" in self.properties:
            stream = StreamType.LIVE if get_bool(self.properties, "livestream") else StreamType.VOD
            self.metadata[VideoMetadataKeys.STREAM_FORMAT] = stream.value
            self.properties.pop("livestream")

    def context_data(self) -> Dict[str, str]:
        excluded = {"products", *VIDEO_METADATA_KEYS, *AD_METADATA_KEYS, *MEDIA_OBJECT_KEYS}
        mapped = self._context_data.map(
            self.properties,
            self.event,
            exclude=excluded,
            stringify_mapped=True,
            stringify_extras=True,
        )
        return mapped or {}

    def media_info(self) -> MediaInfo:
        source = self.event.properties
        stream = StreamType.LIVE if get_bool(source, "livestream") else StreamType.VOD
        return MediaInfo(
            name=get_string(source, "title"),
            media_id=first_present(source, "contentAssetId", "content_asset_id"),
            length=_camel_or_snake_float(source, "totalLength", "total_length"),
            stream_type=stream,
            standard_metadata=self.metadata,
        )

    def chapter_info(self) -> ChapterInfo:
        source = self.event.properties
        return ChapterInfo(
            name=get_string(source, "title"),
            position=_index_position(source),
            length=_camel_or_snake_float(source, "totalLength", "total_length"),
            start_time=_camel_or_snake_float(source, "startTime", "start_time"),
            standard_metadata=self.metadata,
        )

    def ad_break_info(self) -> AdBreakInfo:
        source = self.event.properties
        return AdBreakInfo(
            name=get_string(source, "title"),
            position=_index_position(source),
            start_time=_camel_or_snake_float(source, "startTime", "start_time"),
        )

    def ad_info(self) -> AdInfo:
        source = self.event.properties
        return AdInfo(
            name=get_string(source, "title"),
            ad_id=first_present(source, "assetId", "asset_id"),
            position=_index_position(source),
            length=_camel_or_snake_float(source, "totalLength", "total_length"),
            standard_metadata=self.metadata,
        )


class VideoSessionEngine:
    """
    Drives one video playback session from video lifecycle events.

    Args:
        heartbeat_factory: Builds the heartbeat tracker for a new session.
        context_data: Context data mapping shared with the other translators.
        tracking_server_url: Heartbeat tracking server; video events are
            ignored when it is not configured.
        app_version: Reported as the player application version.
        ssl: Whether the tracker should use SSL.
        integration_key: Key under `event.integrations` holding per-event
            options such as the OVP name.
        clock: Millisecond clock for the playhead.
    """

    def __init__(
        self,
        heartbeat_factory: HeartbeatFactory,
        context_data: ContextDataConfiguration,
        tracking_server_url: Optional[str],
        *,
        app_version: str = "unknown",
        ssl: bool = False,
        debug_logging: bool = False,
        integration_key: str = "Adobe Analytics",
        clock: Clock = monotonic_ms,
    ) -> None:
        self._heartbeat_factory = heartbeat_factory
        self.context_data = context_data
        self.tracking_server_url = tracking_server_url
        self.app_version = app_version or "unknown"
        self.ssl = ssl
        self.debug_logging = debug_logging
        self.integration_key = integration_key
        self._clock = clock

        self._session: Optional[PlaybackSession] = None
        self._heartbeat: Optional[MediaHeartbeat] = None

    @property
    def session(self) -> Optional[PlaybackSession]:
        return self._session

    @property
    def heartbeat(self) -> Optional[MediaHeartbeat]:
        return self._heartbeat

    def is_session_started(self) -> bool:
        return self._session is not None

    def get_current_playback_time(self) -> float:
        return self._require_session("playhead query").get_current_playback_time()

    def track(self, event: Event) -> bool:
        """
        Translate one video event. Returns False when video tracking is not
        configured and the event was ignored.

        Raises:
            UnknownVideoEventError: `event.name` is not a video event.
            SessionNotStartedError: the event needs an active session.
        """
        video_event = VideoEvent.parse(event.name)

        if not self.tracking_server_url:
            logger.warning(
                "No heartbeat tracking server URL configured, ignoring video event.",
                extra={"event_name": video_event.value},
            )
            return False

        if video_event is not VideoEvent.PLAYBACK_STARTED and self._session is None:
            raise SessionNotStartedError(video_event.value)

        handler = self._HANDLERS[video_event]
        handler(self, event)
        return True

    def _require_session(self, event_name: str) -> PlaybackSession:
        if self._session is None:
            raise SessionNotStartedError(event_name)
        return self._session

    def _track_event(
        self,
        heartbeat_event: HeartbeatEvent,
        media: Optional[MediaObject] = None,
        context_data: Optional[Dict[str, str]] = None,
    ) -> None:
        self._heartbeat.track_event(heartbeat_event, media, context_data)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "heartbeat.track_event",
                extra={
                    "heartbeat_event": heartbeat_event.value,
                    "media": media.model_dump(mode="json") if media is not None else None,
                    "context_data": context_data,
                },
            )

    def _heartbeat_config(self, event: Event) -> HeartbeatConfig:
        properties = event.properties
        options = event.integration_options(self.integration_key)
        return HeartbeatConfig(
            tracking_server=self.tracking_server_url,
            channel=get_string(properties, "channel") or "",
            player_name=first_present(properties, "videoPlayer", "video_player") or "unknown",
            app_version=self.app_version,
            ovp=first_present(options, "ovpName", "ovp_name", "ovp") or "unknown",
            ssl=self.ssl,
            debug_logging=self.debug_logging,
        )

    def _end_session(self) -> None:
        self._session.pause_playhead()
        self._heartbeat.track_session_end()
        logger.debug(
            "heartbeat.track_session_end",
            extra={"playhead": self._session.get_current_playback_time()},
        )
        self._session = None
        self._heartbeat = None

    def _playback_started(self, event: Event) -> None:
        if self._session is not None:
            logger.warning(
                "Video playback started during an active session; ending the active session first.",
                extra={"playhead": self._session.get_current_playback_time()},
            )
            self._end_session()

        config = self._heartbeat_config(event)
        self._session = PlaybackSession(self._clock)
        self._heartbeat = self._heartbeat_factory(self._session, config)

        payload = VideoPayload(event, self.context_data)
        media = payload.media_info()
        context_data = payload.context_data()
        self._heartbeat.track_session_start(media, context_data)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "heartbeat.track_session_start",
                extra={"media": media.model_dump(mode="json"), "context_data": context_data},
            )

    def _playback_paused(self, event: Event) -> None:
        self._session.pause_playhead()
        self._heartbeat.track_pause()
        logger.debug("heartbeat.track_pause")

    def _playback_resumed(self, event: Event) -> None:
        self._session.unpause_playhead()
        self._heartbeat.track_play()
        logger.debug("heartbeat.track_play")

    def _content_started(self, event: Event) -> None:
        payload = VideoPayload(event, self.context_data)
        position = get_int(event.properties, "position")
        if position > 0:
            self._session.update_playhead_position(position)

        self._heartbeat.track_play()
        logger.debug("heartbeat.track_play")
        self._track_event(HeartbeatEvent.CHAPTER_START, payload.chapter_info(), payload.context_data())

    def _content_completed(self, event: Event) -> None:
        self._track_event(HeartbeatEvent.CHAPTER_COMPLETE)
        self._heartbeat.track_complete()
        logger.debug("heartbeat.track_complete")

    def _playback_completed(self, event: Event) -> None:
        self._end_session()

    def _buffer_started(self, event: Event) -> None:
        self._session.pause_playhead()
        self._track_event(HeartbeatEvent.BUFFER_START)

    def _buffer_completed(self, event: Event) -> None:
        self._session.unpause_playhead()
        self._track_event(HeartbeatEvent.BUFFER_COMPLETE)

    def _seek_started(self, event: Event) -> None:
        self._session.pause_playhead()
        self._track_event(HeartbeatEvent.SEEK_START)

    def _seek_completed(self, event: Event) -> None:
        seek_position = get_int(event.properties, "seekPosition")
        if seek_position == 0:
            seek_position = get_int(event.properties, "seek_position")
        self._session.update_playhead_position(seek_position)
        self._session.unpause_playhead()
        self._track_event(HeartbeatEvent.SEEK_COMPLETE)

    def _ad_break_started(self, event: Event) -> None:
        payload = VideoPayload(event, self.context_data, is_ad=True)
        self._track_event(HeartbeatEvent.AD_BREAK_START, payload.ad_break_info(), payload.context_data())

    def _ad_break_completed(self, event: Event) -> None:
        self._track_event(HeartbeatEvent.AD_BREAK_COMPLETE)

    def _ad_started(self, event: Event) -> None:
        payload = VideoPayload(event, self.context_data, is_ad=True)
        self._track_event(HeartbeatEvent.AD_START, payload.ad_info(), payload.context_data())

    def _ad_skipped(self, event: Event) -> None:
        self._track_event(HeartbeatEvent.AD_SKIP)

    def _ad_completed(self, event: Event) -> None:
        self._track_event(HeartbeatEvent.AD_COMPLETE)

    def _playback_interrupted(self, event: Event) -> None:
        self._session.pause_playhead()

    def _quality_updated(self, event: Event) -> None:
        qos = self._session.update_qos(event.properties)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("QoS updated.", extra={"qos": qos.model_dump()})

    _HANDLERS = {
        VideoEvent.PLAYBACK_STARTED: _playback_started,
        VideoEvent.CONTENT_STARTED: _content_started,
        VideoEvent.PLAYBACK_PAUSED: _playback_paused,
        VideoEvent.PLAYBACK_RESUMED: _playback_resumed,
        VideoEvent.CONTENT_COMPLETED: _content_completed,
        VideoEvent.PLAYBACK_COMPLETED: _playback_completed,
        VideoEvent.PLAYBACK_BUFFER_STARTED: _buffer_started,
        VideoEvent.PLAYBACK_BUFFER_COMPLETED: _buffer_completed,
        VideoEvent.PLAYBACK_SEEK_STARTED: _seek_started,
        VideoEvent.PLAYBACK_SEEK_COMPLETED: _seek_completed,
        VideoEvent.AD_BREAK_STARTED: _ad_break_started,
        VideoEvent.AD_BREAK_COMPLETED: _ad_break_completed,
        VideoEvent.AD_STARTED: _ad_started,
        VideoEvent.AD_SKIPPED: _ad_skipped,
        VideoEvent.AD_COMPLETED: _ad_completed,
        VideoEvent.PLAYBACK_INTERRUPTED: _playback_interrupted,
        VideoEvent.QUALITY_UPDATED: _quality_updated,
    }
