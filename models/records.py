"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Daylight(str, Enum):
    """Ambient light level reported by the simulated light sensor."""

    HIGH = "HIGH"
    LOW = "LOW"


@dataclass(frozen=True, slots=True)
class SensorSample:
    """A freshly generated reading that has not been stored yet."""

    temperature: float
    humidity: float
    soil_moisture: float
    daylight: Daylight
