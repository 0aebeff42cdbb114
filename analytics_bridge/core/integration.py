"""
Event dispatcher for the analytics destination.

Routes incoming events to the video engine, the ecommerce translator or the
custom action mapping, and forwards screens and user identity to the
analytics client. Every event runs inside a `translate_event` span and is
counted as either translated (by kind) or skipped (by reason).
"""

from __future__ import annotations

import time
from typing import Dict, Optional

from analytics_bridge.clients.protocols import AnalyticsClient, HeartbeatFactory
from analytics_bridge.config import IntegrationSettings
from analytics_bridge.core.ecommerce import EcommerceEvent, EcommerceTranslator
from analytics_bridge.core.playback import Clock, monotonic_ms
from analytics_bridge.core.video import VideoEvent, VideoSessionEngine
from analytics_bridge.models.events import Event, EventType
from analytics_bridge.observability import get_logger, get_tracer, get_translation_instruments

logger = get_logger(__name__)
tracer = get_tracer("analytics_bridge.integration")


class AdobeIntegration:
    """
    Translates events into analytics client and media heartbeat calls.

    Args:
        settings: Destination settings.
        client: Analytics backend client.
        heartbeat_factory: Builds a media heartbeat per video session.
        clock: Millisecond clock for video playheads.
        debug_logging: Passed to the heartbeat configuration.
    """

    def __init__(
        self,
        settings: IntegrationSettings,
        client: AnalyticsClient,
        heartbeat_factory: HeartbeatFactory,
        *,
        clock: Clock = monotonic_ms,
        debug_logging: bool = False,
    ) -> None:
        self.settings = settings
        self.client = client
        self.context_data = settings.context_data_configuration()
        self.events_mapping: Dict[str, str] = dict(settings.events_v2)

        self.ecommerce = EcommerceTranslator(
            client,
            self.context_data,
            product_identifier=settings.product_identifier,
        )
        self.video = VideoSessionEngine(
            heartbeat_factory,
            self.context_data,
            settings.heartbeat_tracking_server_url,
            app_version=settings.app_version,
            ssl=settings.ssl,
            debug_logging=debug_logging,
            integration_key=settings.integration_key,
            clock=clock,
        )
        self._instruments = get_translation_instruments()

    def dispatch(self, event: Event) -> Optional[str]:
        """
        Route an event by type.

        Returns the kind of backend call made ("video", "ecommerce",
        "action", "state", "identify"), or None when the event was skipped.
        """
        with tracer.start_as_current_span("translate_event") as span:
            span.set_attribute("event.type", event.type.value)
            if event.name:
                span.set_attribute("event.name", event.name)

            start = time.perf_counter()
            try:
                if event.type is EventType.TRACK:
                    kind = self.track(event)
                elif event.type is EventType.SCREEN:
                    kind = self.screen(event)
                elif event.type is EventType.IDENTIFY:
                    kind = self.identify(event)
                else:
                    logger.debug(
                        "Event type not handled by the destination.",
                        extra={"event_type": event.type.value},
                    )
                    kind = None
                    self._skip("unsupported_type")
            finally:
                self._instruments.latency.record(
                    (time.perf_counter() - start) * 1000,
                    {"type": event.type.value},
                )

            span.set_attribute("bridge.kind", kind or "skipped")
            return kind

    def track(self, event: Event) -> Optional[str]:
        name = event.name

        if VideoEvent.is_video_event(name):
            if not self.video.track(event):
                self._skip("no_tracking_server")
                return None
            return self._translated("video")

        if EcommerceEvent.is_ecommerce_event(name):
            if name in self.events_mapping:
                logger.info(
                    "Ecommerce events cannot be mapped to custom actions, skipping.",
                    extra={"event_name": name},
                )
                self._skip("mapped_ecommerce")
                return None
            self.ecommerce.track(event)
            return self._translated("ecommerce")

        if name not in self.events_mapping:
            logger.info(
                "Event is neither a configured custom action nor a reserved "
                "ecommerce or video event, skipping.",
                extra={"event_name": name},
            )
            self._skip("unmapped")
            return None

        action = str(self.events_mapping[name])
        context_data = self.context_data.map_by_key(event.properties)
        self.client.track_action(action, context_data)
        logger.debug(
            "track_action",
            extra={"action": action, "context_data": context_data},
        )
        return self._translated("action")

    def screen(self, event: Event) -> str:
        context_data = self.context_data.map_by_key(event.properties)
        self.client.track_state(event.name, context_data)
        logger.debug(
            "track_state",
            extra={"state": event.name, "context_data": context_data},
        )
        return self._translated("state")

    def identify(self, event: Event) -> Optional[str]:
        user_id = event.user_id
        if not user_id:
            self._skip("missing_user_id")
            return None
        self.client.set_user_identifier(user_id)
        logger.debug("set_user_identifier", extra={"user_id": user_id})
        return self._translated("identify")

    def flush(self) -> None:
        self.client.flush_queue()
        logger.debug("flush_queue")

    def reset(self) -> None:
        self.client.set_user_identifier(None)
        logger.debug("set_user_identifier", extra={"user_id": None})

    def _translated(self, kind: str) -> str:
        self._instruments.translated.add(1, {"kind": kind})
        return kind

    def _skip(self, reason: str) -> None:
        self._instruments.skipped.add(1, {"reason": reason})
