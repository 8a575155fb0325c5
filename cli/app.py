from __future__ import annotations

from dataclasses import dataclass
from typing import NoReturn, Optional

import typer

from cli.client import ApiClient, ApiError
from cli.config import CLIConfig, load_config
from cli.dashboard import DashboardSession
from cli.render import render_actions, render_dashboard, render_latest, render_readings
from logging_config import configure_logging
from services.temperature import TemperatureControl


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for interacting with the greenhouse sensor simulator.",
    context_settings={"help_option_names": ["-h", "--help"]},
)

_MENU = "[g]enerate  [r]efresh  [+] increase  [-] decrease  [q]uit"


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1, message="CLI state is uninitialized.")
    return state


def _fail(exc: ApiError) -> NoReturn:
    typer.secho(str(exc), fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Service base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for each HTTP request.",
    ),
    log_level: str = typer.Option("WARNING", "--log-level", help="Client log level."),
) -> None:
    """Entry point for the CLI."""
    configure_logging(log_level.upper())
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("generate")
def generate_command(ctx: typer.Context) -> None:
    """Generate one reading and show the recommended actions."""
    state = _get_state(ctx)
    try:
        payload = state.client.generate_data()
    except ApiError as exc:
        _fail(exc)
    typer.secho(payload.get("message", "Sensor data generated"), fg=typer.colors.GREEN)
    typer.echo()
    render_latest(payload.get("data"))
    typer.echo()
    render_actions(payload.get("actions") or [])


@app.command("latest")
def latest_command(ctx: typer.Context) -> None:
    """Show the most recent reading."""
    state = _get_state(ctx)
    try:
        reading = state.client.get_latest()
    except ApiError as exc:
        _fail(exc)
    render_latest(reading)


@app.command("all")
def all_command(ctx: typer.Context) -> None:
    """Show every reading, newest first."""
    state = _get_state(ctx)
    try:
        readings = state.client.get_all()
    except ApiError as exc:
        _fail(exc)
    render_readings(readings)


@app.command("dashboard")
def dashboard_command(
    ctx: typer.Context,
    interactive: bool = typer.Option(
        False,
        "--interactive/--once",
        help="Keep the dashboard open and act on keyboard commands.",
    ),
    setpoint: Optional[float] = typer.Option(
        None,
        "--setpoint",
        help="Initial local temperature setpoint (defaults to DASHBOARD_SETPOINT or 22).",
    ),
) -> None:
    """Generate a reading, then show latest data, actions and history."""
    state = _get_state(ctx)
    initial = setpoint if setpoint is not None else state.config.setpoint
    session = DashboardSession(state.client, TemperatureControl(setpoint=initial))
    session.initialize()
    render_dashboard(session.state, session.control)
    if not interactive:
        return

    while True:
        typer.echo()
        choice = typer.prompt(_MENU, default="q").strip().lower()
        if choice == "q":
            break
        if choice == "g":
            session.generate()
        elif choice == "r":
            session.refresh()
        elif choice == "+":
            session.control.increase()
        elif choice == "-":
            session.control.decrease()
        else:
            typer.secho(f"Unknown command {choice!r}.", fg=typer.colors.YELLOW)
            continue
        typer.echo()
        render_dashboard(session.state, session.control)
