from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_DEVICE_ID_ENV = "SWITCHBOT_DEVICE_ID"
_TOKEN_PARAMETER_ENV = "SWITCHBOT_TOKEN_PARAMETER"
_TOKEN_ENV = "SWITCHBOT_TOKEN"
_API_BASE_URL_ENV = "SWITCHBOT_API_BASE_URL"
_HTTP_TIMEOUT_ENV = "SWITCHBOT_HTTP_TIMEOUT"
_APP_NAME_ENV = "NEW_RELIC_APP_NAME"
_LICENSE_KEY_PARAMETER_ENV = "NEW_RELIC_LICENSE_KEY_PARAMETER"
_SERVERLESS_MODE_ENV = "NEW_RELIC_SERVERLESS_MODE_ENABLED"
_LAMBDA_FUNCTION_ENV = "AWS_LAMBDA_FUNCTION_NAME"
_REGION_ENV = "AWS_REGION"
_LOG_LEVEL_ENV = "LOG_LEVEL"
_MOCK_TEMPERATURE_ENV = "MOCK_TEMPERATURE"
_MOCK_HUMIDITY_ENV = "MOCK_HUMIDITY"
_MOCK_BATTERY_ENV = "MOCK_BATTERY"
_MOCK_PORT_ENV = "MOCK_PORT"

DEFAULT_API_BASE_URL = "https://api.switch-bot.com"
DEFAULT_REGION = "ap-northeast-1"


@dataclass(frozen=True)
class Settings:
    device_id: Optional[str]
    token_parameter: Optional[str]
    token: Optional[str]
    api_base_url: str
    http_timeout: float
    app_name: str
    license_key_parameter: Optional[str]
    serverless_mode: bool
    region: str
    log_level: str
    mock_temperature: float
    mock_humidity: int
    mock_battery: int
    mock_port: int


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_optional_env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    candidate = value.strip()
    return candidate or None


def _read_float_env(name: str, default: float, positive: bool = False) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    if positive and parsed <= 0:
        return default
    return parsed


def _read_int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        return int(candidate)
    except ValueError:
        return default


def _read_bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip().lower()
    if candidate in ("1", "true", "yes", "on"):
        return True
    if candidate in ("0", "false", "no", "off"):
        return False
    return default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        device_id=_read_optional_env(_DEVICE_ID_ENV),
        token_parameter=_read_optional_env(_TOKEN_PARAMETER_ENV),
        token=_read_optional_env(_TOKEN_ENV),
        api_base_url=_read_str_env(_API_BASE_URL_ENV, DEFAULT_API_BASE_URL).rstrip("/"),
        http_timeout=_read_float_env(_HTTP_TIMEOUT_ENV, 10.0, positive=True),
        app_name=_read_str_env(_APP_NAME_ENV, "switchbot-relay"),
        license_key_parameter=_read_optional_env(_LICENSE_KEY_PARAMETER_ENV),
        serverless_mode=_read_bool_env(
            _SERVERLESS_MODE_ENV, default=_read_optional_env(_LAMBDA_FUNCTION_ENV) is not None
        ),
        region=_read_str_env(_REGION_ENV, DEFAULT_REGION),
        log_level=_read_log_level("INFO"),
        mock_temperature=_read_float_env(_MOCK_TEMPERATURE_ENV, 25.5),
        mock_humidity=_read_int_env(_MOCK_HUMIDITY_ENV, 60),
        mock_battery=_read_int_env(_MOCK_BATTERY_ENV, 100),
        mock_port=_read_int_env(_MOCK_PORT_ENV, 8080),
    )
