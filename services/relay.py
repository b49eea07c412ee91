"""Relay pipeline: SwitchBot status in, one New Relic custom event out."""

from __future__ import annotations

import logging
from typing import Optional

from models.records import EVENT_TYPE, SensorReading
from secretstore.ssm import SecretResolver
from services.deadline import Deadline
from services.decoder import decode_reading
from services.errors import (
    APIError,
    ConfigurationError,
    DecodeError,
    SecretError,
    TransportError,
)
from services.switchbot import SwitchBotClient
from settings import Settings
from telemetry.newrelic_sink import TelemetrySink

logger = logging.getLogger(__name__)

READY_TIMEOUT = 5.0
FLUSH_TIMEOUT = 10.0
SUCCESS_MESSAGE = "Processing completed successfully."


class RelayPipeline:
    """Runs resolve → fetch → decode → emit once per call to :meth:`run`.

    Every collaborator is injected; the pipeline itself reads no environment
    and keeps no state between runs.
    """

    def __init__(
        self,
        settings: Settings,
        secrets: SecretResolver,
        sink: TelemetrySink,
        client: SwitchBotClient,
    ) -> None:
        self.settings = settings
        self.secrets = secrets
        self.sink = sink
        self.client = client

    def run(self, deadline: Optional[Deadline] = None) -> str:
        deadline = deadline or Deadline()
        logger.info("Starting SwitchBot relay run")

        try:
            self._wait_for_sink(deadline)
            device_id = self._validate_configuration()
            token = self._resolve_token(deadline)
            reading = self._fetch_reading(device_id, token, deadline)
            self._emit(reading)
        finally:
            logger.info("Flushing telemetry sink", extra={"timeout": FLUSH_TIMEOUT})
            self.sink.flush(FLUSH_TIMEOUT)

        logger.info("SwitchBot relay run finished", extra={"device_id": reading.device_id})
        return SUCCESS_MESSAGE

    def _wait_for_sink(self, deadline: Deadline) -> None:
        timeout = deadline.bound(READY_TIMEOUT)
        logger.info("Waiting for telemetry sink connection", extra={"timeout": timeout})
        try:
            self.sink.wait_ready(timeout)
        except Exception as exc:
            logger.warning(
                "Telemetry sink not ready, continuing anyway",
                extra={"reason": str(exc)},
            )
            return
        logger.info("Telemetry sink connected")

    def _validate_configuration(self) -> str:
        device_id = self.settings.device_id
        if not device_id:
            raise ConfigurationError("environment variable SWITCHBOT_DEVICE_ID is not set")
        if not self.settings.token_parameter and not self.settings.token:
            raise ConfigurationError(
                "environment variable SWITCHBOT_TOKEN_PARAMETER is not set"
            )
        return device_id

    def _resolve_token(self, deadline: Deadline) -> str:
        token_parameter = self.settings.token_parameter
        if not token_parameter:
            return self.settings.token or ""
        try:
            return self.secrets.resolve(token_parameter, decrypt=True, deadline=deadline)
        except SecretError as exc:
            raise SecretError(f"failed to resolve SwitchBot token: {exc}") from exc

    def _fetch_reading(self, device_id: str, token: str, deadline: Deadline) -> SensorReading:
        try:
            result = self.client.fetch(device_id, token, deadline=deadline)
        except TransportError as exc:
            raise TransportError(f"SwitchBot API request failed: {exc}") from exc

        logger.info(
            "SwitchBot API response: %s",
            result.text,
            extra={"device_id": device_id, "status_code": result.status_code},
        )
        if result.status_code != 200:
            raise APIError(
                f"SwitchBot API returned an error: {result.text}",
                status_code=result.status_code,
                body=result.text,
            )

        try:
            reading = decode_reading(result.body)
        except DecodeError as exc:
            raise DecodeError(f"failed to parse SwitchBot response: {exc}") from exc
        logger.info("Parsed SwitchBot reading: %s", reading, extra={"device_id": device_id})
        return reading

    def _emit(self, reading: SensorReading) -> None:
        payload = reading.to_event()
        logger.info(
            "Recording custom event: %s",
            payload,
            extra={"event_type": EVENT_TYPE, "device_id": reading.device_id},
        )
        self.sink.record_event(EVENT_TYPE, payload)
