"""Shared fixtures for analytics-bridge unit tests."""

import pytest

from analytics_bridge.clients import RecordingAnalyticsClient, RecordingHeartbeatFactory
from analytics_bridge.config import IntegrationSettings
from analytics_bridge.core.context_data import ContextDataConfiguration
from analytics_bridge.core.integration import AdobeIntegration
from analytics_bridge.core.video import VideoSessionEngine

TRACKING_SERVER = "heartbeat.example.com"


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, start_ms: int = 1_000_000) -> None:
        self.now_ms = start_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, seconds: float) -> None:
        self.now_ms += int(seconds * 1000)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def client() -> RecordingAnalyticsClient:
    return RecordingAnalyticsClient()


@pytest.fixture
def heartbeat_factory() -> RecordingHeartbeatFactory:
    return RecordingHeartbeatFactory()


@pytest.fixture
def context_data() -> ContextDataConfiguration:
    """Mapping used by most translator tests."""
    return ContextDataConfiguration(
        variables={"title": "myapp.title", ".userId": "myapp.user"},
        prefix="",
    )


@pytest.fixture
def engine(heartbeat_factory, clock) -> VideoSessionEngine:
    return VideoSessionEngine(
        heartbeat_factory,
        ContextDataConfiguration(),
        TRACKING_SERVER,
        app_version="1.2.3",
        clock=clock,
    )


@pytest.fixture
def settings() -> IntegrationSettings:
    return IntegrationSettings.from_raw(
        {
            "heartbeatTrackingServerUrl": TRACKING_SERVER,
            "productIdentifier": "name",
            "contextValues": {"myapp.section": "myapp.section"},
            "customDataPrefix": "extra.",
            "eventsV2": {"Look At Me": "lookAtMe", "Order Completed": "purchaseMapped"},
        }
    )


@pytest.fixture
def integration(settings, client, heartbeat_factory, clock) -> AdobeIntegration:
    return AdobeIntegration(settings, client, heartbeat_factory, clock=clock)
