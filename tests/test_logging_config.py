from __future__ import annotations

import logging
from typing import Any, Dict, List

import pytest

import logging_config
from logging_config import SDK_LOGGERS, ContextualFormatter, build_logging_config


def _record(**extra: Any) -> logging.LogRecord:
    record = logging.LogRecord(
        name="services.relay",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Telemetry sink not ready",
        args=None,
        exc_info=None,
    )
    record.created = 0.0
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_appends_context_in_key_order() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")

    line = formatter.format(_record(timeout=5.0, device_id="D1", request_id=None))

    assert line == "Telemetry sink not ready | device_id=D1 timeout=5.0"


def test_formatter_quotes_values_with_spaces() -> None:
    formatter = ContextualFormatter(fmt="%(message)s", context_keys=["reason"])

    line = formatter.format(_record(reason="connection failed"))

    assert line == "Telemetry sink not ready | reason='connection failed'"


def test_formatter_without_context_leaves_message_alone() -> None:
    formatter = ContextualFormatter(fmt="%(levelname)s %(message)s")

    assert formatter.format(_record()) == "WARNING Telemetry sink not ready"


def test_timestamps_are_utc() -> None:
    formatter = ContextualFormatter(
        fmt=logging_config.LOG_FORMAT, datefmt=logging_config.DATE_FORMAT
    )

    assert formatter.format(_record()).startswith("1970-01-01T00:00:00Z | WARNING")


def test_config_quiets_sdk_loggers() -> None:
    config = build_logging_config("DEBUG")

    assert config["root"]["level"] == "DEBUG"
    assert {name: spec["level"] for name, spec in config["loggers"].items()} == {
        name: "WARNING" for name in SDK_LOGGERS
    }


@pytest.fixture()
def applied(monkeypatch) -> List[Dict[str, Any]]:
    calls: List[Dict[str, Any]] = []
    monkeypatch.setattr(logging_config, "dictConfig", calls.append)
    monkeypatch.setattr(logging_config, "_configured_level", None)
    return calls


def test_configure_logging_runs_once_per_level(applied: List[Dict[str, Any]]) -> None:
    logging_config.configure_logging("INFO")
    logging_config.configure_logging("INFO")
    logging_config.configure_logging("DEBUG")

    assert [config["root"]["level"] for config in applied] == ["INFO", "DEBUG"]
