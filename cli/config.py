from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_BASE_URL = "http://localhost:8000"
DEFAULT_TIMEOUT = 10.0
DEFAULT_SETPOINT = 22.0

_BASE_URL_ENV = "API_BASE_URL"
_TIMEOUT_ENV = "CLI_HTTP_TIMEOUT"
_SETPOINT_ENV = "DASHBOARD_SETPOINT"


@dataclass(frozen=True)
class CLIConfig:
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    setpoint: float = DEFAULT_SETPOINT


def _read_float(value: Optional[str], default: float, positive: bool = True) -> float:
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


def load_config(
    base_url: Optional[str] = None,
    timeout: Optional[float] = None,
    setpoint: Optional[float] = None,
) -> CLIConfig:
    url = base_url or os.getenv(_BASE_URL_ENV) or DEFAULT_BASE_URL
    if timeout is None:
        timeout = _read_float(os.getenv(_TIMEOUT_ENV), DEFAULT_TIMEOUT)
    if setpoint is None:
        setpoint = _read_float(os.getenv(_SETPOINT_ENV), DEFAULT_SETPOINT, positive=False)
    return CLIConfig(
        base_url=url.rstrip("/"),
        timeout=timeout,
        setpoint=setpoint,
    )
