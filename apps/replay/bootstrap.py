"""
Bootstrap wiring for the replay service.

Responsible for:
- Choosing the backend sinks
- Constructing the AdobeIntegration with its dependencies
"""

from typing import Final, Tuple

from analytics_bridge.clients import (
    AnalyticsClient,
    HeartbeatFactory,
    LoggingAnalyticsClient,
    RecordingAnalyticsClient,
    RecordingHeartbeatFactory,
    logging_heartbeat_factory,
)
from analytics_bridge.config import AppConfig, IntegrationSettings
from analytics_bridge.core.integration import AdobeIntegration
from apps.replay.config import ReplaySettings, SinkKind


def build_sinks(sink: SinkKind) -> Tuple[AnalyticsClient, HeartbeatFactory]:
    if sink is SinkKind.RECORD:
        return RecordingAnalyticsClient(), RecordingHeartbeatFactory()
    return LoggingAnalyticsClient(), logging_heartbeat_factory


def build_integration(config: AppConfig, replay: ReplaySettings) -> AdobeIntegration:
    """
    Build a fully wired AdobeIntegration instance.

    Returns:
        AdobeIntegration: Ready-to-dispatch integration.
    """
    settings: Final[IntegrationSettings] = config.integration
    client, heartbeat_factory = build_sinks(replay.sink)

    return AdobeIntegration(
        settings,
        client,
        heartbeat_factory,
        debug_logging=config.service.debug,
    )
