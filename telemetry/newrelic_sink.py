"""Telemetry sink backed by the New Relic Python agent."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol

import newrelic.agent

from services.errors import TelemetryConnectionError

logger = logging.getLogger(__name__)

TRANSACTION_GROUP = "SwitchBotRelay"


class TelemetrySink(Protocol):
    def wait_ready(self, timeout: float) -> None:
        ...

    def record_event(self, event_type: str, payload: Dict[str, Any]) -> None:
        ...

    def flush(self, timeout: float) -> None:
        ...


class NewRelicSink:
    """Owns the agent lifecycle for one process.

    Each event is recorded inside its own background transaction. In
    serverless mode the agent harvests when that transaction closes, so the
    agent stays registered across warm invocations and ``flush`` never shuts
    it down. Outside serverless mode ``flush`` shuts the agent down and the
    sink cannot be used again; that only suits one-shot processes such as
    the local CLI.

    The agent keeps process-global state, so only one sink should exist per
    process; ``handler.build_default_sink`` caches it.
    """

    def __init__(self, app_name: str, license_key: str, serverless: bool = False) -> None:
        self.app_name = app_name
        self.serverless = serverless
        settings = newrelic.agent.global_settings()
        settings.app_name = app_name
        settings.license_key = license_key
        settings.distributed_tracing.enabled = True
        settings.serverless_mode.enabled = serverless
        newrelic.agent.initialize()
        self._application: Optional[Any] = None
        self._shut_down = False

    def wait_ready(self, timeout: float) -> None:
        if self._shut_down:
            raise TelemetryConnectionError(
                f"New Relic agent for {self.app_name!r} was shut down by an earlier flush"
            )
        application = newrelic.agent.register_application(
            name=self.app_name, timeout=timeout
        )
        self._application = application
        if application is None or not application.active:
            raise TelemetryConnectionError(
                f"New Relic application {self.app_name!r} not connected after {timeout}s"
            )

    def record_event(self, event_type: str, payload: Dict[str, Any]) -> None:
        application = self._application or newrelic.agent.application(self.app_name)
        with newrelic.agent.BackgroundTask(application, name=event_type, group=TRANSACTION_GROUP):
            newrelic.agent.record_custom_event(event_type, payload)

    def flush(self, timeout: float) -> None:
        if self.serverless:
            # Harvested when the event's transaction closed.
            logger.info("New Relic serverless harvest already complete", extra={"timeout": timeout})
            return
        logger.info("Shutting down New Relic agent", extra={"timeout": timeout})
        newrelic.agent.shutdown_agent(timeout=timeout)
        self._shut_down = True
