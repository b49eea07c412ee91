"""Pydantic schemas for the SwitchBot status API wire format."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


def _drop_nulls(data: Any) -> Any:
    if isinstance(data, dict):
        return {key: value for key, value in data.items() if value is not None}
    return data


class SwitchBotStatusBody(BaseModel):
    """Measurement object nested under the envelope's ``body`` key.

    Missing or ``null`` fields fall back to zero values and unknown fields are
    ignored. Values are never coerced: ``"60"`` is not a humidity and ``true``
    is not a battery level. Integers are accepted for ``temperature``.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    device_id: str = Field(default="", alias="deviceId", strict=True)
    device_type: str = Field(default="", alias="deviceType", strict=True)
    hub_device_id: str = Field(default="", alias="hubDeviceId", strict=True)
    humidity: int = Field(default=0, strict=True)
    temperature: float = Field(default=0.0, strict=True)
    version: str = Field(default="", strict=True)
    battery: int = Field(default=0, strict=True)
    temperature_scale: str = Field(default="", alias="temperatureScale", strict=True)

    @model_validator(mode="before")
    @classmethod
    def _nulls_are_defaults(cls, data: Any) -> Any:
        return _drop_nulls(data)


class SwitchBotStatusResponse(BaseModel):
    """Outer envelope returned by ``GET /v1.1/devices/{deviceId}/status``."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    status_code: int = Field(default=0, alias="statusCode", strict=True)
    message: str = Field(default="", strict=True)
    body: SwitchBotStatusBody = Field(default_factory=SwitchBotStatusBody)

    @model_validator(mode="before")
    @classmethod
    def _nulls_are_defaults(cls, data: Any) -> Any:
        return _drop_nulls(data)


class EventIngestAck(BaseModel):
    """Acknowledgement returned by the mock event ingest endpoint."""

    success: bool = True
