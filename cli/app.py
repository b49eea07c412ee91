from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Optional

import typer
import uvicorn

from handler import build_default_sink
from logging_config import configure_logging
from secretstore.ssm import SSMSecretResolver
from services.errors import RelayError
from services.relay import RelayPipeline
from services.switchbot import SwitchBotClient
from settings import Settings, get_settings
from telemetry.mock_sink import InMemorySink
from telemetry.newrelic_sink import TelemetrySink
from cli.render import render_events, render_failure


@dataclass
class CLIState:
    settings: Settings


app = typer.Typer(
    help="Relay SwitchBot sensor readings to New Relic, or serve a mock upstream.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


def _build_sink(dry_run: bool) -> TelemetrySink:
    if dry_run:
        return InMemorySink()
    return build_default_sink()


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="SwitchBot API base URL (defaults to SWITCHBOT_API_BASE_URL env or the public API).",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (defaults to LOG_LEVEL env or INFO).",
    ),
) -> None:
    """Entry point for the CLI."""
    configure_logging(log_level.upper() if log_level else None)
    settings = get_settings()
    if base_url:
        settings = dataclasses.replace(settings, api_base_url=base_url.rstrip("/"))
    ctx.obj = CLIState(settings=settings)


@app.command("run")
def run_command(
    ctx: typer.Context,
    device_id: Optional[str] = typer.Option(
        None, "--device-id", "-d", help="Override SWITCHBOT_DEVICE_ID."
    ),
    token: Optional[str] = typer.Option(
        None,
        "--token",
        help="Use this SwitchBot token directly instead of reading it from SSM.",
    ),
    dry_run: bool = typer.Option(
        True,
        "--dry-run/--no-dry-run",
        help="Record the event locally instead of sending it to New Relic.",
    ),
) -> None:
    """Run the relay pipeline once."""
    state = _get_state(ctx)
    settings = state.settings
    if device_id:
        settings = dataclasses.replace(settings, device_id=device_id)
    if token:
        settings = dataclasses.replace(settings, token=token, token_parameter=None)

    resolver = SSMSecretResolver(region=settings.region)
    try:
        sink = _build_sink(dry_run)
        with SwitchBotClient(settings.api_base_url, timeout=settings.http_timeout) as client:
            pipeline = RelayPipeline(
                settings=settings, secrets=resolver, sink=sink, client=client
            )
            message = pipeline.run()
    except RelayError as exc:
        render_failure(exc)
        raise typer.Exit(code=1) from exc

    typer.secho(message, fg=typer.colors.GREEN)
    if isinstance(sink, InMemorySink):
        render_events(sink.events)


@app.command("serve-mock")
def serve_mock_command(
    ctx: typer.Context,
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind."),
    port: Optional[int] = typer.Option(
        None, "--port", "-p", help="Port to bind (defaults to MOCK_PORT env or 8080)."
    ),
) -> None:
    """Serve the mock SwitchBot API and New Relic ingest endpoints."""
    state = _get_state(ctx)
    bind_port = port if port is not None else state.settings.mock_port
    typer.echo(f"Mock SwitchBot API: http://{host}:{bind_port}/v1.1/devices/{{deviceId}}/status")
    uvicorn.run("app.main:app", host=host, port=bind_port)
