"""Unit tests for the video session engine."""

import copy
import logging

import pytest

from analytics_bridge.core import video as video_module
from analytics_bridge.core.context_data import ContextDataConfiguration
from analytics_bridge.core.video import VideoEvent, VideoSessionEngine
from analytics_bridge.errors import SessionNotStartedError, UnknownVideoEventError
from analytics_bridge.models.events import Event
from analytics_bridge.models.media import (
    AdBreakInfo,
    AdInfo,
    AdMetadataKeys,
    ChapterInfo,
    HeartbeatEvent,
    MediaInfo,
    StreamType,
    VideoMetadataKeys,
)

TRACKING_SERVER = "heartbeat.example.com"


def video(name, properties=None, **kwargs):
    return Event.track(name, properties, **kwargs)


def start(engine, properties=None, **kwargs):
    engine.track(video(VideoEvent.PLAYBACK_STARTED.value, properties, **kwargs))
    return engine.heartbeat


class TestVideoEvent:
    """Tests for the video event table."""

    def test_known_names(self):
        assert VideoEvent.is_video_event("Video Playback Started")
        assert VideoEvent.parse("Video Quality Updated") is VideoEvent.QUALITY_UPDATED
        assert len(VideoEvent) == 17

    def test_unknown_name(self):
        assert not VideoEvent.is_video_event("Video Played")
        with pytest.raises(UnknownVideoEventError, match="Video Played is not a valid video event"):
            VideoEvent.parse("Video Played")

    def test_engine_rejects_unknown_name(self, engine):
        with pytest.raises(UnknownVideoEventError):
            engine.track(video("Video Played"))


class TestSessionProtocol:
    """Session lifecycle rules."""

    @pytest.mark.parametrize(
        "name",
        [event.value for event in VideoEvent if event is not VideoEvent.PLAYBACK_STARTED],
    )
    def test_event_without_session_raises(self, engine, name):
        with pytest.raises(SessionNotStartedError):
            engine.track(video(name))

    def test_playhead_query_without_session_raises(self, engine):
        with pytest.raises(SessionNotStartedError):
            engine.get_current_playback_time()

    def test_no_tracking_server_ignores_events(self, heartbeat_factory, clock):
        engine = VideoSessionEngine(heartbeat_factory, ContextDataConfiguration(), None, clock=clock)
        assert engine.track(video("Video Playback Paused")) is False
        assert engine.track(video("Video Playback Started")) is False
        assert heartbeat_factory.created == []
        assert not engine.is_session_started()

    def test_completed_ends_session(self, engine):
        heartbeat = start(engine)
        engine.track(video("Video Playback Completed"))
        assert heartbeat.names()[-1] == "track_session_end"
        assert engine.session is None
        assert engine.heartbeat is None
        with pytest.raises(SessionNotStartedError):
            engine.track(video("Video Playback Paused"))

    def test_restart_ends_previous_session(self, engine, heartbeat_factory, clock):
        first_heartbeat = start(engine)
        first_session = engine.session
        clock.advance(5)
        start(engine)
        assert engine.session is not first_session
        assert len(heartbeat_factory.created) == 2
        assert first_heartbeat.names() == ["track_session_start", "track_session_end"]
        assert first_session.paused
        assert first_session.get_current_playback_time() == 5.0
        assert engine.heartbeat.names() == ["track_session_start"]


class TestPlaybackStarted:
    """Tests for Video Playback Started."""

    def test_heartbeat_config(self, engine, heartbeat_factory):
        start(
            engine,
            {"channel": "Cartoon Network", "video_player": "html5"},
            integrations={"Adobe Analytics": {"ovpName": "brightcove"}},
        )
        config = heartbeat_factory.last.config
        assert config.tracking_server == TRACKING_SERVER
        assert config.channel == "Cartoon Network"
        assert config.player_name == "html5"
        assert config.ovp == "brightcove"
        assert config.app_version == "1.2.3"
        assert heartbeat_factory.last.delegate is engine.session

    def test_heartbeat_config_defaults(self, engine, heartbeat_factory):
        start(engine)
        config = heartbeat_factory.last.config
        assert (config.channel, config.player_name, config.ovp) == ("", "unknown", "unknown")

    def test_session_start(self, engine):
        heartbeat = start(
            engine,
            {
                "contentAssetId": "c1",
                "title": "Pilot",
                "totalLength": 1200,
                "program": "The Show",
                "channel": "net",
                "livestream": False,
                "color": "red",
            },
        )
        name, (media, context_data) = heartbeat.calls[0]
        assert name == "track_session_start"
        assert media == MediaInfo(
            name="Pilot",
            media_id="c1",
            length=1200.0,
            stream_type=StreamType.VOD,
            standard_metadata={
                VideoMetadataKeys.ASSET_ID: "c1",
                VideoMetadataKeys.SHOW: "The Show",
                VideoMetadataKeys.NETWORK: "net",
                VideoMetadataKeys.STREAM_FORMAT: "vod",
            },
        )
        assert context_data == {"color": "red"}

    def test_livestream(self, engine):
        heartbeat = start(engine, {"livestream": True, "total_length": 10})
        media = heartbeat.calls[0][1][0]
        assert media.stream_type is StreamType.LIVE
        assert media.length == 10.0
        assert media.standard_metadata[VideoMetadataKeys.STREAM_FORMAT] == "live"

    def test_mapped_context_data_is_stringified(self, heartbeat_factory, clock):
        engine = VideoSessionEngine(
            heartbeat_factory,
            ContextDataConfiguration(variables={".userId": "myapp.user", "episodeCount": "myapp.count"}),
            TRACKING_SERVER,
            clock=clock,
        )
        heartbeat = start(engine, {"episodeCount": 3, "autoplay": True}, userId="u_9")
        context_data = heartbeat.calls[0][1][1]
        assert context_data == {"myapp.user": "u_9", "myapp.count": "3", "autoplay": "true"}


class TestPlayhead:
    """Playhead arithmetic driven by video events."""

    def test_pause_resume(self, engine, clock):
        start(engine)
        engine.track(video("Video Playback Paused"))
        clock.advance(2)
        engine.track(video("Video Playback Resumed"))
        clock.advance(3)
        assert engine.get_current_playback_time() == 3.0

    def test_seek(self, engine, clock):
        heartbeat = start(engine)
        engine.track(video("Video Playback Seek Started"))
        clock.advance(4)
        engine.track(video("Video Playback Seek Completed", {"seekPosition": 50}))
        clock.advance(6)
        assert engine.get_current_playback_time() == 56.0
        assert heartbeat.names()[-2:] == ["track_event", "track_event"]
        assert heartbeat.calls[-1][1][0] is HeartbeatEvent.SEEK_COMPLETE

    def test_seek_fractional_string(self, engine, clock):
        start(engine)
        clock.advance(30)
        engine.track(video("Video Playback Seek Completed", {"seekPosition": "50.5"}))
        assert engine.get_current_playback_time() == 50.0

    def test_seek_snake_case(self, engine):
        start(engine)
        engine.track(video("Video Playback Seek Completed", {"seek_position": 12}))
        assert engine.get_current_playback_time() == 12.0

    def test_buffer_freezes(self, engine, clock):
        heartbeat = start(engine)
        clock.advance(1)
        engine.track(video("Video Playback Buffer Started"))
        clock.advance(5)
        assert engine.get_current_playback_time() == 1.0
        engine.track(video("Video Playback Buffer Completed"))
        clock.advance(1)
        assert engine.get_current_playback_time() == 2.0
        events = [args[0] for name, args in heartbeat.calls if name == "track_event"]
        assert events == [HeartbeatEvent.BUFFER_START, HeartbeatEvent.BUFFER_COMPLETE]

    def test_interrupted_pauses_without_heartbeat_call(self, engine, clock):
        heartbeat = start(engine)
        clock.advance(2)
        engine.track(video("Video Playback Interrupted"))
        clock.advance(2)
        assert engine.get_current_playback_time() == 2.0
        assert heartbeat.names() == ["track_session_start"]


class TestContent:
    """Tests for content (chapter) events."""

    def test_content_started(self, engine, clock):
        heartbeat = start(engine)
        engine.track(
            video(
                "Video Content Started",
                {"title": "Chapter 1", "position": 30, "indexPosition": 2, "totalLength": 600, "startTime": 30},
            )
        )
        clock.advance(1)
        assert engine.get_current_playback_time() == 31.0
        assert heartbeat.names() == ["track_session_start", "track_play", "track_event"]
        event, chapter, context_data = heartbeat.calls[-1][1]
        assert event is HeartbeatEvent.CHAPTER_START
        assert chapter == ChapterInfo(name="Chapter 1", position=2, length=600.0, start_time=30.0)
        assert context_data == {}

    def test_content_started_with_string_position(self, engine, clock):
        start(engine)
        clock.advance(30)
        engine.track(video("Video Content Started", {"position": "12.5"}))
        assert engine.get_current_playback_time() == 12.0

    def test_content_started_with_float_position(self, engine, clock):
        start(engine)
        clock.advance(30)
        engine.track(video("Video Content Started", {"position": 12.5}))
        assert engine.get_current_playback_time() == 12.0

    def test_content_started_without_position_keeps_playhead(self, engine, clock):
        start(engine)
        clock.advance(3)
        engine.track(video("Video Content Started", {"title": "Chapter 1"}))
        assert engine.get_current_playback_time() == 3.0

    def test_content_completed(self, engine):
        heartbeat = start(engine)
        engine.track(video("Video Content Completed"))
        assert heartbeat.calls[1:] == [
            ("track_event", (HeartbeatEvent.CHAPTER_COMPLETE, None, None)),
            ("track_complete", ()),
        ]


class TestAds:
    """Tests for ad events."""

    def test_ad_break_started(self, engine):
        heartbeat = start(engine)
        engine.track(video("Video Ad Break Started", {"title": "Pre-roll", "index_position": 1, "start_time": 0}))
        event, ad_break, _ = heartbeat.calls[-1][1]
        assert event is HeartbeatEvent.AD_BREAK_START
        assert ad_break == AdBreakInfo(name="Pre-roll", position=1, start_time=0.0)

    def test_ad_started(self, engine):
        heartbeat = start(engine)
        engine.track(
            video(
                "Video Ad Started",
                {"title": "Car ad", "assetId": "ad-1", "publisher": "Carmaker", "totalLength": 15, "campaign": "fall"},
            )
        )
        event, ad, context_data = heartbeat.calls[-1][1]
        assert event is HeartbeatEvent.AD_START
        assert ad == AdInfo(
            name="Car ad",
            ad_id="ad-1",
            position=1,
            length=15.0,
            standard_metadata={AdMetadataKeys.ADVERTISER: "Carmaker"},
        )
        assert context_data == {"campaign": "fall"}

    @pytest.mark.parametrize(
        "name, heartbeat_event",
        [
            ("Video Ad Break Completed", HeartbeatEvent.AD_BREAK_COMPLETE),
            ("Video Ad Skipped", HeartbeatEvent.AD_SKIP),
            ("Video Ad Completed", HeartbeatEvent.AD_COMPLETE),
        ],
    )
    def test_ad_end_events(self, engine, name, heartbeat_event):
        heartbeat = start(engine)
        engine.track(video(name))
        assert heartbeat.calls[-1] == ("track_event", (heartbeat_event, None, None))


class TestQualityUpdated:
    """Tests for Video Quality Updated."""

    def test_updates_delegate_qos(self, engine, heartbeat_factory):
        heartbeat = start(engine)
        engine.track(video("Video Quality Updated", {"bitrate": 500, "fps": 24}))
        qos = heartbeat_factory.last.delegate.get_qos_object()
        assert qos.bitrate == 500
        assert qos.fps == 24.0
        assert heartbeat.names() == ["track_session_start"]


class TestPropertiesUntouched:
    """Translating a video event leaves the event's property bag as it was."""

    def test_playback_started(self, engine):
        properties = {
            "contentAssetId": "c1",
            "title": "Pilot",
            "program": "The Show",
            "livestream": True,
            "color": "red",
            "products": [{"id": "1", "tags": ["a"]}],
        }
        before = copy.deepcopy(properties)
        event = video("Video Playback Started", properties)
        engine.track(event)
        assert properties == before
        assert event.properties == before
        assert engine.heartbeat.calls[0][1][0].standard_metadata[VideoMetadataKeys.SHOW] == "The Show"

    def test_ad_started(self, engine):
        start(engine)
        properties = {"title": "Car ad", "assetId": "ad-1", "publisher": "Carmaker", "extra": {"k": [1]}}
        before = copy.deepcopy(properties)
        event = video("Video Ad Started", properties)
        engine.track(event)
        assert properties == before
        assert event.properties == before


class _QuietLogger:
    """Logger stand-in with DEBUG disabled that records debug calls."""

    def __init__(self):
        self.debug_calls = []

    def isEnabledFor(self, level):
        return level > logging.DEBUG

    def debug(self, msg, *args, **kwargs):
        self.debug_calls.append(msg)

    def info(self, msg, *args, **kwargs):
        pass

    def warning(self, msg, *args, **kwargs):
        pass


class TestDebugLogging:
    """Media objects are only serialized for logging when DEBUG is enabled."""

    def test_media_dumps_skipped_without_debug(self, engine, monkeypatch):
        quiet = _QuietLogger()
        monkeypatch.setattr(video_module, "logger", quiet)
        start(engine, {"title": "Pilot"})
        engine.track(video("Video Content Started", {"title": "Chapter 1"}))
        engine.track(video("Video Quality Updated", {"bitrate": 1}))
        assert "heartbeat.track_session_start" not in quiet.debug_calls
        assert "heartbeat.track_event" not in quiet.debug_calls
        assert "QoS updated." not in quiet.debug_calls
        assert engine.heartbeat.names() == ["track_session_start", "track_play", "track_event"]
