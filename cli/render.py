from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Sequence

import typer

from cli.dashboard import DashboardState
from services.temperature import ControlAdvice, TemperatureControl

_COLORS = {
    "red": typer.colors.RED,
    "blue": typer.colors.BLUE,
    "green": typer.colors.GREEN,
}


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_reading(reading: Dict[str, Any]) -> None:
    echo_key_values(
        [
            ("Temperature", f"{reading.get('temperature')}°C"),
            ("Humidity", f"{reading.get('humidity')}%"),
            ("Soil Moisture", f"{reading.get('soilMoisture')}%"),
            ("Daylight", reading.get("daylight")),
            ("Created At", reading.get("createdAt")),
        ]
    )


def render_latest(reading: Optional[Dict[str, Any]]) -> None:
    echo_heading("Latest Data")
    if reading:
        render_reading(reading)
    else:
        typer.echo("No data available")


def render_actions(actions: Sequence[str]) -> None:
    echo_heading("Actions")
    if actions:
        for action in actions:
            typer.echo(f"  - {action}")
    else:
        typer.echo("No actions to display")


def render_readings(readings: Sequence[Dict[str, Any]]) -> None:
    echo_heading("All Data")
    if not readings:
        typer.echo("No data available")
        return
    for index, reading in enumerate(readings):
        if index:
            typer.echo()
        render_reading(reading)


def render_temperature(control: TemperatureControl, latest: Optional[Dict[str, Any]]) -> None:
    observed = latest.get("temperature") if latest else None
    shown = observed if observed is not None else control.setpoint
    echo_heading(f"Temperature: {shown}°C")
    advice = control.advise(observed)
    if advice is None:
        return
    if advice is ControlAdvice.normal:
        typer.secho("Temperature is Normal", fg=typer.colors.GREEN)
        return
    label = "Increase" if advice is ControlAdvice.increase else "Decrease"
    typer.secho(
        f"[{label}] setpoint {control.setpoint}°C",
        fg=_COLORS[control.color],
    )


def render_dashboard(state: DashboardState, control: TemperatureControl) -> None:
    echo_heading("Sensor Data Dashboard")
    typer.echo()
    render_temperature(control, state.latest)
    typer.echo()
    render_latest(state.latest)
    typer.echo()
    render_actions(state.actions)
    typer.echo()
    render_readings(state.readings)
