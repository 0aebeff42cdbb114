"""
Service-specific configuration for the replay service.

It reads from the ROOT .env (or the environment) using namespaced keys:

    REPLAY__INPUT_PATH=data/events.jsonl
    REPLAY__SINK=log

Destination settings are read by `analytics_bridge.config` (`ADOBE__*`).
"""

from enum import Enum
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SinkKind(str, Enum):
    LOG = "log"
    RECORD = "record"


class ReplaySettings(BaseSettings):
    """
    Settings controlling a replay run.

    Values come from environment variables prefixed with `REPLAY__`.
    """

    input_path: Optional[str] = Field(
        default=None,
        description="JSON-lines file of events; stdin when unset.",
    )
    sink: SinkKind = Field(
        default=SinkKind.LOG,
        description="`log` writes backend calls to the JSON logger, `record` keeps them in memory.",
    )

    model_config = SettingsConfigDict(env_prefix="REPLAY__", case_sensitive=False, extra="ignore")


@lru_cache()
def get_replay_settings() -> ReplaySettings:
    """
    Cached accessor for ReplaySettings.
    """
    return ReplaySettings()
