"""Decoding of SwitchBot status envelopes into sensor readings."""

from __future__ import annotations

import json

from pydantic import ValidationError

from app.schemas import SwitchBotStatusResponse
from models.records import SensorReading
from services.errors import DecodeError


def decode_envelope(body: bytes) -> SwitchBotStatusResponse:
    try:
        payload = json.loads(body)
    except json.JSONDecodeError as exc:
        raise DecodeError(
            f"invalid JSON at line {exc.lineno} column {exc.colno}: {exc.msg}"
        ) from exc
    except UnicodeDecodeError as exc:
        raise DecodeError(f"response body is not valid UTF-8: {exc.reason}") from exc

    try:
        return SwitchBotStatusResponse.model_validate(payload)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}"
            for error in exc.errors()
        )
        raise DecodeError(f"unexpected envelope shape: {problems}") from exc


def decode_reading(body: bytes) -> SensorReading:
    """Parse a 200 response body into a :class:`SensorReading`.

    Only syntax and type errors fail; missing measurement fields read as zero
    and values are not range checked.
    """
    envelope = decode_envelope(body)
    measurement = envelope.body
    return SensorReading(
        device_id=measurement.device_id,
        temperature=measurement.temperature,
        humidity=measurement.humidity,
        battery=measurement.battery,
    )
