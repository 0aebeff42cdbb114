"""
Log-only backend sink.

Writes every backend call as a structured log line. Used by the replay
service when no real transport is wired in.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from analytics_bridge.clients.protocols import MediaHeartbeatDelegate
from analytics_bridge.models.media import HeartbeatConfig, HeartbeatEvent, MediaObject
from analytics_bridge.observability import get_logger

logger = get_logger("analytics_bridge.sink")


def _dump(media: Optional[MediaObject]) -> Optional[Dict[str, Any]]:
    return media.model_dump(mode="json") if media is not None else None


class LoggingAnalyticsClient:
    def track_action(self, action: str, context_data: Optional[Dict[str, Any]]) -> None:
        logger.info("trackAction", extra={"action": action, "context_data": context_data})

    def track_state(self, state: str, context_data: Optional[Dict[str, Any]]) -> None:
        logger.info("trackState", extra={"state": state, "context_data": context_data})

    def set_user_identifier(self, identifier: Optional[str]) -> None:
        logger.info("setUserIdentifier", extra={"identifier": identifier})

    def flush_queue(self) -> None:
        logger.info("flushQueue")


class LoggingHeartbeat:
    """
    Heartbeat sink that logs each call together with the current playhead.
    """

    def __init__(self, delegate: MediaHeartbeatDelegate, config: HeartbeatConfig) -> None:
        self._delegate = delegate
        self._config = config
        logger.info("Heartbeat created.", extra={"config": config.model_dump()})

    def _log(self, call: str, **fields: Any) -> None:
        fields["playhead"] = self._delegate.get_current_playback_time()
        logger.info(call, extra=fields)

    def track_session_start(
        self, media: Optional[MediaObject], context_data: Optional[Dict[str, str]]
    ) -> None:
        self._log("trackSessionStart", media=_dump(media), context_data=context_data)

    def track_session_end(self) -> None:
        self._log("trackSessionEnd")

    def track_play(self) -> None:
        self._log("trackPlay")

    def track_pause(self) -> None:
        self._log("trackPause")

    def track_complete(self) -> None:
        self._log("trackComplete")

    def track_event(
        self,
        event: HeartbeatEvent,
        media: Optional[MediaObject],
        context_data: Optional[Dict[str, str]],
    ) -> None:
        self._log(
            "trackEvent",
            heartbeat_event=event.value,
            media=_dump(media),
            context_data=context_data,
        )


def logging_heartbeat_factory(
    delegate: MediaHeartbeatDelegate, config: HeartbeatConfig
) -> LoggingHeartbeat:
    return LoggingHeartbeat(delegate, config)
