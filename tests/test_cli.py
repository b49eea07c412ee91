from __future__ import annotations

from typing import Any, Dict, Iterator, List

import httpx
import pytest
from typer.testing import CliRunner

from cli.app import app
from services.switchbot import SwitchBotClient
from settings import get_settings
from telemetry.mock_sink import InMemorySink

SUCCESS_BODY = (
    b'{"statusCode":100,"body":{"temperature":25.5,"humidity":60,"battery":100,'
    b'"deviceId":"D1"},"message":"success"}'
)


@pytest.fixture()
def runner(monkeypatch) -> Iterator[CliRunner]:
    for key in ("SWITCHBOT_DEVICE_ID", "SWITCHBOT_TOKEN_PARAMETER", "SWITCHBOT_TOKEN"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr("cli.app.configure_logging", lambda level=None: None)
    get_settings.cache_clear()
    yield CliRunner()
    get_settings.cache_clear()


def _install_upstream(monkeypatch, status_code: int, body: bytes) -> List[httpx.Request]:
    requests: List[httpx.Request] = []

    def respond(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status_code, content=body)

    def factory(base_url: str, timeout: float) -> SwitchBotClient:
        return SwitchBotClient(base_url, timeout=timeout, transport=httpx.MockTransport(respond))

    monkeypatch.setattr("cli.app.SwitchBotClient", factory)
    return requests


def test_run_dry_run_prints_event(monkeypatch, runner: CliRunner) -> None:
    requests = _install_upstream(monkeypatch, 200, SUCCESS_BODY)

    result = runner.invoke(
        app,
        ["--base-url", "http://mock.local:8080/", "run", "--device-id", "D1", "--token", "T1"],
    )

    assert result.exit_code == 0, result.output
    assert "Processing completed successfully." in result.output
    assert "SwitchBotSensor" in result.output
    assert "deviceId: D1" in result.output
    assert "temperature: 25.5" in result.output
    assert str(requests[0].url) == "http://mock.local:8080/v1.1/devices/D1/status"
    assert requests[0].headers["Authorization"] == "T1"


def test_run_reports_api_error(monkeypatch, runner: CliRunner) -> None:
    _install_upstream(monkeypatch, 400, b'{"statusCode":400,"message":"Bad Request"}')

    result = runner.invoke(app, ["run", "--device-id", "D1", "--token", "T1"])

    assert result.exit_code == 1
    assert "APIError" in result.output
    assert '{"statusCode":400,"message":"Bad Request"}' in result.output
    assert "status_code: 400" in result.output


def test_run_without_device_id_fails(monkeypatch, runner: CliRunner) -> None:
    requests = _install_upstream(monkeypatch, 200, SUCCESS_BODY)

    result = runner.invoke(app, ["run", "--token", "T1"])

    assert result.exit_code == 1
    assert "SWITCHBOT_DEVICE_ID" in result.output
    assert requests == []


def test_run_live_uses_process_sink(monkeypatch, runner: CliRunner) -> None:
    _install_upstream(monkeypatch, 200, SUCCESS_BODY)
    sink = InMemorySink()
    monkeypatch.setattr("cli.app.build_default_sink", lambda: sink)

    result = runner.invoke(
        app, ["run", "--no-dry-run", "--device-id", "D1", "--token", "T1"]
    )

    assert result.exit_code == 0, result.output
    assert len(sink.events) == 1
    assert sink.flush_calls == [10.0]


def test_serve_mock_starts_uvicorn(monkeypatch, runner: CliRunner) -> None:
    calls: List[Dict[str, Any]] = []

    def fake_run(target: str, **kwargs: Any) -> None:
        calls.append({"target": target, **kwargs})

    monkeypatch.setattr("cli.app.uvicorn.run", fake_run)

    result = runner.invoke(app, ["serve-mock", "--port", "9001"])

    assert result.exit_code == 0, result.output
    assert calls == [{"target": "app.main:app", "host": "127.0.0.1", "port": 9001}]
