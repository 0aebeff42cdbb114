"""
Configuration for analytics-bridge.

Provides:
- Destination integration settings (variable mapping, product identifier,
  heartbeat tracking server, custom event mapping)
- OTEL settings
- Generic service-level runtime settings

Values come from the environment (e.g. `ADOBE__PRODUCT_IDENTIFIER=name`,
`SERVICE__LOG_LEVEL=DEBUG`) or from an optional `.env` file at the project
root. Destination settings delivered as a raw camelCase mapping
are parsed with `IntegrationSettings.from_raw`.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from analytics_bridge.core.context_data import ContextDataConfiguration

PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
DEFAULT_ENV_PATH: Path = PROJECT_ROOT / ".env"

# Raw destination setting name -> IntegrationSettings field.
RAW_SETTING_FIELDS: Dict[str, str] = {
    "heartbeatTrackingServerUrl": "heartbeat_tracking_server_url",
    "productIdentifier": "product_identifier",
    "ssl": "ssl",
    "contextValues": "context_values",
    "customDataPrefix": "custom_data_prefix",
    "eventsV2": "events_v2",
}


class IntegrationSettings(BaseSettings):
    """Settings of the analytics destination."""

    heartbeat_tracking_server_url: Optional[str] = Field(default=None)
    product_identifier: Optional[str] = Field(default=None)
    ssl: bool = Field(default=False)

    context_values: Dict[str, str] = Field(
        default_factory=dict,
        description="Event field path -> backend context data variable.",
    )
    custom_data_prefix: Optional[str] = Field(
        default=None,
        description="Prefix for properties missing from context_values.",
    )
    events_v2: Dict[str, str] = Field(
        default_factory=dict,
        description="Custom event name -> backend action name.",
    )

    app_version: str = Field(default="unknown")
    integration_key: str = Field(default="Adobe Analytics")

    model_config = SettingsConfigDict(env_prefix="ADOBE__", extra="ignore")

    @classmethod
    def from_raw(cls, settings: Optional[Mapping[str, Any]]) -> "IntegrationSettings":
        """
        Parse destination settings delivered in their raw camelCase form.

        Unknown keys are ignored; null mappings become empty mappings.
        """
        values: Dict[str, Any] = {}
        for raw_key, field in RAW_SETTING_FIELDS.items():
            if settings is None or raw_key not in settings:
                continue
            value = settings[raw_key]
            if value is None and field in ("context_values", "events_v2"):
                value = {}
            values[field] = value
        try:
            return cls(**values)
        except ValidationError as exc:
            raise RuntimeError("Invalid integration settings.") from exc

    def context_data_configuration(self) -> ContextDataConfiguration:
        return ContextDataConfiguration(
            variables=self.context_values,
            prefix=self.custom_data_prefix,
        )


class OTELConfig(BaseSettings):
    """OpenTelemetry configuration."""

    otlp_endpoint: str = Field(default="http://localhost:4317")
    export_enabled: bool = Field(default=False)

    model_config = SettingsConfigDict(extra="ignore")


class ServiceConfig(BaseSettings):
    """Generic service-level config."""

    log_level: str = Field(default="INFO")
    debug: bool = Field(default=False)
    environment: str = Field(default="local")

    model_config = SettingsConfigDict(extra="ignore")


class AppConfig(BaseSettings):
    """Root configuration object."""

    integration: IntegrationSettings = Field(default_factory=IntegrationSettings)
    otel: OTELConfig = Field(default_factory=OTELConfig)
    service: ServiceConfig = Field(default_factory=ServiceConfig)

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        extra="ignore",
    )

    @classmethod
    @lru_cache(maxsize=1)
    def load(cls) -> "AppConfig":
        try:
            env_file = str(DEFAULT_ENV_PATH) if DEFAULT_ENV_PATH.exists() else None
            return cls(_env_file=env_file)
        except ValidationError as exc:
            raise RuntimeError("Invalid configuration values.") from exc
