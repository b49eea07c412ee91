"""Error taxonomy for the relay pipeline."""

from __future__ import annotations


class RelayError(Exception):
    """Base class for every failure the relay reports to its caller."""


class ConfigurationError(RelayError):
    """A required configuration value is missing; no network call was made."""


class SecretError(RelayError):
    """The secret store could not be reached or the parameter is absent."""


class TransportError(RelayError):
    """The SwitchBot API call failed below HTTP, or was cancelled."""


class APIError(RelayError):
    """The SwitchBot API answered with a non-200 status."""

    def __init__(self, message: str, status_code: int, body: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class DecodeError(RelayError):
    """A 200 response carried a body that is not a status envelope."""


class TelemetryConnectionError(RelayError):
    """The telemetry sink did not become ready in time."""
