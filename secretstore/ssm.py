"""Secret resolution against AWS Systems Manager Parameter Store."""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from services.deadline import Deadline
from services.errors import ConfigurationError, SecretError
from settings import DEFAULT_REGION

logger = logging.getLogger(__name__)

_DEFAULT_CONNECT_TIMEOUT = 5.0
_DEFAULT_READ_TIMEOUT = 10.0


class SecretResolver(Protocol):
    def resolve(
        self, name: str, decrypt: bool, deadline: Optional[Deadline] = None
    ) -> str:
        ...


class SSMSecretResolver:
    """Reads one parameter per call; nothing is cached between calls."""

    def __init__(self, region: str = DEFAULT_REGION) -> None:
        self.region = region

    def resolve(
        self, name: str, decrypt: bool, deadline: Optional[Deadline] = None
    ) -> str:
        if not name:
            raise ConfigurationError("SSM parameter name is empty")

        logger.info(
            "Fetching SSM parameter",
            extra={"parameter_name": name, "region": self.region},
        )
        client = self._client(deadline)
        try:
            result = client.get_parameter(Name=name, WithDecryption=decrypt)
        except ClientError as exc:
            message = exc.response.get("Error", {}).get("Message") or str(exc)
            raise SecretError(f"failed to fetch SSM parameter {name}: {message}") from exc
        except BotoCoreError as exc:
            raise SecretError(f"failed to fetch SSM parameter {name}: {exc}") from exc

        logger.info("Fetched SSM parameter", extra={"parameter_name": name})
        return result["Parameter"]["Value"]

    def _client(self, deadline: Optional[Deadline]) -> Any:
        connect_timeout = _DEFAULT_CONNECT_TIMEOUT
        read_timeout = _DEFAULT_READ_TIMEOUT
        if deadline is not None:
            if deadline.expired:
                raise SecretError("SSM request cancelled: invocation deadline reached")
            connect_timeout = deadline.bound(connect_timeout)
            read_timeout = deadline.bound(read_timeout)
        config = Config(
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
            retries={"max_attempts": 1, "mode": "standard"},
        )
        return boto3.client("ssm", region_name=self.region, config=config)
