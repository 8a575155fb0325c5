"""Local temperature setpoint control shown beside the latest reading."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

DEFAULT_SETPOINT = 22.0
HOT_LIMIT = 30.0
COLD_LIMIT = 20.0


class ControlAdvice(str, Enum):
    normal = "normal"
    increase = "increase"
    decrease = "decrease"


@dataclass
class TemperatureControl:
    """Setpoint held by the viewer only; it is never sent to the server."""

    setpoint: float = DEFAULT_SETPOINT

    def increase(self) -> float:
        self.setpoint += 1
        return self.setpoint

    def decrease(self) -> float:
        self.setpoint -= 1
        return self.setpoint

    @property
    def color(self) -> str:
        if self.setpoint > HOT_LIMIT:
            return "red"
        if self.setpoint < COLD_LIMIT:
            return "blue"
        return "green"

    def advise(self, observed: Optional[float]) -> Optional[ControlAdvice]:
        if observed is None:
            return None
        if observed == self.setpoint:
            return ControlAdvice.normal
        if observed > self.setpoint:
            return ControlAdvice.increase
        return ControlAdvice.decrease
