"""
BaseService: standard base class for analytics-bridge services.

Provides:
- Logger
- Tracer
- Meter
- OTel bootstrap
- Standardized service lifecycle hooks
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional

from analytics_bridge.config import AppConfig
from analytics_bridge.observability import (
    get_logger,
    get_meter,
    get_tracer,
    init_observability,
)


class BaseService(ABC):
    """
    Abstract base class for bridge services (e.g. the replay service).

    Subclasses automatically receive:
    - `self.config`: Central AppConfig
    - `self.logger`: structured JSON logger
    - `self.tracer`: OpenTelemetry tracer
    - `self.meter`: OpenTelemetry metrics instance

    Subclasses must implement:
        async def start(self) -> None
        async def shutdown(self) -> None
    """

    def __init__(self, service_name: str, config: Optional[AppConfig] = None):
        """
        Args:
            service_name: Logical name of the service (e.g. "replay").
            config: Configuration override; defaults to `AppConfig.load()`.
        """
        self.config = config if config is not None else AppConfig.load()

        init_observability(
            level=self._resolve_log_level(),
            export_otlp=self.config.otel.export_enabled,
            endpoint=self.config.otel.otlp_endpoint,
        )

        self.logger = get_logger(service_name)
        self.tracer = get_tracer(service_name)
        self.meter = get_meter()

        self.logger.info(
            "Service initialized",
            extra={"service_name": service_name, "environment": self.config.service.environment},
        )

    def _resolve_log_level(self) -> int:
        """Convert config log level string to numeric logging constant."""
        if self.config.service.debug:
            return logging.DEBUG
        level_str = self.config.service.log_level.upper()
        return getattr(logging, level_str, logging.INFO)

    @abstractmethod
    async def start(self) -> None:
        """Start the service."""
        raise NotImplementedError

    @abstractmethod
    async def shutdown(self) -> None:
        """Flush pending work and release resources."""
        raise NotImplementedError

    def run_sync(self) -> None:
        """
        Run the async lifecycle (`start` then `shutdown`) in an event loop.
        """
        try:
            asyncio.run(self._run())
        except Exception as exc:
            self.logger.error("Service crashed", exc_info=True)
            raise RuntimeError("Uncaught service failure") from exc

    async def _run(self) -> None:
        try:
            await self.start()
        finally:
            await self.shutdown()
