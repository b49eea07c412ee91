"""Process-wide logging for the relay, the mock server and the CLI."""

from __future__ import annotations

import logging
import time
from logging.config import dictConfig
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from settings import get_settings

CONTEXT_KEYS = (
    "request_id",
    "device_id",
    "parameter_name",
    "region",
    "status_code",
    "event_type",
    "timeout",
    "reason",
)

SDK_LOGGERS = ("boto3", "botocore", "urllib3", "httpx", "httpcore", "newrelic")

LOG_FORMAT = "%(asctime)sZ | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

_configured_level: Optional[Union[str, int]] = None


class ContextualFormatter(logging.Formatter):
    """Render UTC records with their ``extra=`` context as ``key=value`` pairs.

    Values containing whitespace are quoted so a line stays splittable on
    spaces.
    """

    converter = time.gmtime

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: str = "%",
        context_keys: Iterable[str] | None = None,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt, style=style)
        self.context_keys: Tuple[str, ...] = tuple(context_keys or CONTEXT_KEYS)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = " ".join(
            f"{key}={_render(value)}"
            for key, value in ((key, getattr(record, key, None)) for key in self.context_keys)
            if value is not None
        )
        return f"{message} | {context}" if context else message


def _render(value: Any) -> str:
    text = str(value)
    if not text or any(char.isspace() for char in text):
        return repr(text)
    return text


def build_logging_config(level: Union[str, int]) -> Dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "contextual": {
                "()": "logging_config.ContextualFormatter",
                "fmt": LOG_FORMAT,
                "datefmt": DATE_FORMAT,
                "context_keys": list(CONTEXT_KEYS),
            }
        },
        "handlers": {
            "stderr": {
                "class": "logging.StreamHandler",
                "formatter": "contextual",
            }
        },
        "loggers": {name: {"level": "WARNING"} for name in SDK_LOGGERS},
        # Replaces whatever the Lambda runtime installed on the root logger.
        "root": {"handlers": ["stderr"], "level": level},
    }


def configure_logging(level: str | int | None = None) -> None:
    """Install the relay's logging setup.

    Repeated calls are no-ops unless they ask for a different level, so the
    warm Lambda path costs nothing while ``--log-level`` still takes effect.
    """
    global _configured_level
    log_level = level if level is not None else get_settings().log_level
    if _configured_level == log_level:
        return
    dictConfig(build_logging_config(log_level))
    _configured_level = log_level
