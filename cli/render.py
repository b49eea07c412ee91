from __future__ import annotations

from typing import Any, Iterable, Sequence

import typer

from services.errors import APIError
from telemetry.mock_sink import RecordedEvent


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_events(events: Sequence[RecordedEvent]) -> None:
    typer.echo()
    echo_heading("Recorded Events")
    if not events:
        typer.echo("No events recorded.")
        return
    for event in events:
        typer.echo(f"- {event.event_type}")
        echo_key_values((f"  {key}", value) for key, value in event.payload.items())


def render_failure(exc: Exception) -> None:
    typer.secho(f"{type(exc).__name__}: {exc}", fg=typer.colors.RED, err=True)
    if isinstance(exc, APIError):
        typer.secho(f"status_code: {exc.status_code}", fg=typer.colors.RED, err=True)
