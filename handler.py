"""AWS Lambda entry point for the SwitchBot relay."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Optional

from logging_config import configure_logging
from secretstore.ssm import SSMSecretResolver
from services.deadline import Deadline
from services.errors import ConfigurationError
from services.relay import RelayPipeline
from services.switchbot import SwitchBotClient
from settings import get_settings
from telemetry.newrelic_sink import NewRelicSink

logger = logging.getLogger(__name__)


@lru_cache
def build_default_resolver() -> SSMSecretResolver:
    return SSMSecretResolver(region=get_settings().region)


@lru_cache
def build_default_sink() -> NewRelicSink:
    """Create the process-wide New Relic sink on cold start.

    A missing or unresolvable license key is fatal for the process, not for a
    single invocation. Under Lambda the agent runs in serverless mode, which
    keeps this one sink usable for every warm invocation.
    """
    settings = get_settings()
    if not settings.license_key_parameter:
        raise ConfigurationError(
            "environment variable NEW_RELIC_LICENSE_KEY_PARAMETER is not set"
        )
    license_key = build_default_resolver().resolve(
        settings.license_key_parameter, decrypt=True
    )
    return NewRelicSink(
        app_name=settings.app_name,
        license_key=license_key,
        serverless=settings.serverless_mode,
    )


def lambda_handler(event: Any, context: Optional[Any] = None) -> str:
    configure_logging()
    settings = get_settings()
    sink = build_default_sink()
    deadline = Deadline.from_lambda_context(context)
    request_id = getattr(context, "aws_request_id", None)
    logger.info("Invocation received", extra={"request_id": request_id})

    with SwitchBotClient(settings.api_base_url, timeout=settings.http_timeout) as client:
        pipeline = RelayPipeline(
            settings=settings,
            secrets=build_default_resolver(),
            sink=sink,
            client=client,
        )
        return pipeline.run(deadline)
