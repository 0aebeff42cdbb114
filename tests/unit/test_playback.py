"""Unit tests for playhead arithmetic."""

import threading

from analytics_bridge.core.playback import PlaybackSession


class TestPlayhead:
    """Tests for PlaybackSession with an injected clock."""

    def test_starts_at_zero(self, clock):
        session = PlaybackSession(clock)
        assert session.get_current_playback_time() == 0.0

    def test_advances_with_clock(self, clock):
        session = PlaybackSession(clock)
        clock.advance(5)
        assert session.get_current_playback_time() == 5.0

    def test_whole_seconds_only(self, clock):
        session = PlaybackSession(clock)
        clock.advance(2.9)
        assert session.get_current_playback_time() == 2.0

    def test_pause_freezes(self, clock):
        session = PlaybackSession(clock)
        clock.advance(4)
        session.pause_playhead()
        clock.advance(10)
        assert session.get_current_playback_time() == 4.0

    def test_pause_resume(self, clock):
        session = PlaybackSession(clock)
        session.pause_playhead()
        clock.advance(2)
        session.unpause_playhead()
        clock.advance(3)
        assert session.get_current_playback_time() == 3.0

    def test_repeated_pause_does_not_accrue(self, clock):
        session = PlaybackSession(clock)
        clock.advance(1)
        session.pause_playhead()
        clock.advance(5)
        session.pause_playhead()
        assert session.get_current_playback_time() == 1.0

    def test_update_position(self, clock):
        session = PlaybackSession(clock)
        clock.advance(7)
        session.update_playhead_position(50)
        clock.advance(2)
        assert session.get_current_playback_time() == 52.0

    def test_clock_going_backwards_does_not_rewind(self, clock):
        session = PlaybackSession(clock)
        clock.advance(-5)
        assert session.get_current_playback_time() == 0.0

    def test_concurrent_reads(self, clock):
        session = PlaybackSession(clock)
        results = []

        def poll():
            for _ in range(100):
                results.append(session.get_current_playback_time())

        threads = [threading.Thread(target=poll) for _ in range(4)]
        for thread in threads:
            thread.start()
        for _ in range(50):
            session.pause_playhead()
            session.unpause_playhead()
        for thread in threads:
            thread.join()

        assert len(results) == 400
        assert all(value == 0.0 for value in results)


class TestQoS:
    """Tests for quality-of-service snapshots."""

    def test_no_qos_by_default(self, clock):
        assert PlaybackSession(clock).get_qos_object() is None

    def test_camel_case(self, clock):
        session = PlaybackSession(clock)
        session.update_qos({"bitrate": 12000, "startupTime": 1.5, "fps": 30, "droppedFrames": 2})
        qos = session.get_qos_object()
        assert (qos.bitrate, qos.startup_time, qos.fps, qos.dropped_frames) == (12000, 1.5, 30.0, 2)

    def test_snake_case_fallback(self, clock):
        session = PlaybackSession(clock)
        qos = session.update_qos({"startup_time": 0.5, "dropped_frames": 4})
        assert qos.startup_time == 0.5
        assert qos.dropped_frames == 4
        assert qos.bitrate == 0

    def test_bad_values_default(self, clock):
        qos = PlaybackSession(clock).update_qos({"bitrate": "fast", "fps": None})
        assert qos.bitrate == 0
        assert qos.fps == 0.0
