from analytics_bridge.clients.fake import (
    RecordingAnalyticsClient,
    RecordingHeartbeat,
    RecordingHeartbeatFactory,
)
from analytics_bridge.clients.logging_client import (
    LoggingAnalyticsClient,
    LoggingHeartbeat,
    logging_heartbeat_factory,
)
from analytics_bridge.clients.protocols import (
    AnalyticsClient,
    HeartbeatFactory,
    MediaHeartbeat,
    MediaHeartbeatDelegate,
)

__all__ = [
    "AnalyticsClient",
    "HeartbeatFactory",
    "MediaHeartbeat",
    "MediaHeartbeatDelegate",
    "LoggingAnalyticsClient",
    "LoggingHeartbeat",
    "logging_heartbeat_factory",
    "RecordingAnalyticsClient",
    "RecordingHeartbeat",
    "RecordingHeartbeatFactory",
]
