"""HTTP client for the SwitchBot device status API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from services.deadline import Deadline
from services.errors import TransportError

logger = logging.getLogger(__name__)

STATUS_PATH = "/v1.1/devices/{device_id}/status"


@dataclass(frozen=True)
class FetchResult:
    body: bytes
    status_code: int

    @property
    def text(self) -> str:
        """The body as text, or its bytes literal when it is not valid UTF-8."""
        try:
            return self.body.decode("utf-8")
        except UnicodeDecodeError:
            return repr(self.body)


class SwitchBotClient:
    """Issues the single status request of a relay run.

    ``transport`` is handed to ``httpx.Client`` so tests can substitute an
    ``httpx.MockTransport``.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._timeout = timeout
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> "SwitchBotClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def fetch(
        self,
        device_id: str,
        token: str,
        deadline: Optional[Deadline] = None,
    ) -> FetchResult:
        timeout = self._timeout
        if deadline is not None:
            if deadline.expired:
                raise TransportError("cancelled: invocation deadline reached")
            timeout = deadline.bound(timeout)

        path = STATUS_PATH.format(device_id=device_id)
        headers = {
            "Authorization": token,
            "Content-Type": "application/json",
        }
        logger.info("Requesting SwitchBot device status", extra={"device_id": device_id})
        try:
            response = self._client.get(path, headers=headers, timeout=timeout)
        except httpx.TimeoutException as exc:
            if deadline is not None and deadline.cancelled:
                raise TransportError("cancelled: invocation deadline reached") from exc
            raise TransportError(f"timed out: {exc}") from exc
        except httpx.TransportError as exc:
            raise TransportError(f"{type(exc).__name__}: {exc}") from exc

        # A cancel during the request is only seen once the response is back.
        if deadline is not None and deadline.cancelled:
            raise TransportError("cancelled: invocation deadline reached")
        return FetchResult(body=response.content, status_code=response.status_code)
