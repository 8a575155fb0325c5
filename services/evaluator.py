"""Threshold rules mapping a reading to recommended actions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Protocol

from models.records import Daylight

FAN_ACTION = "Fan motor activated for cooling"
IRRIGATION_ACTION = "Irrigation system triggered"
LIGHTING_ACTION = "Artificial lighting turned on"


class _Observation(Protocol):
    temperature: float
    humidity: float
    daylight: Daylight


@dataclass(frozen=True)
class Thresholds:
    max_temperature: float = 30.0
    min_humidity: float = 40.0
    lighting_daylight: Daylight = Daylight.LOW


DEFAULT_THRESHOLDS = Thresholds()


class ThresholdEvaluator:
    """Pure rule evaluation; every rule is checked independently."""

    def __init__(self, thresholds: Thresholds = DEFAULT_THRESHOLDS) -> None:
        self.thresholds = thresholds

    def evaluate(self, reading: _Observation) -> List[str]:
        actions: List[str] = []
        if reading.temperature > self.thresholds.max_temperature:
            actions.append(FAN_ACTION)
        if reading.humidity < self.thresholds.min_humidity:
            actions.append(IRRIGATION_ACTION)
        if reading.daylight == self.thresholds.lighting_daylight:
            actions.append(LIGHTING_ACTION)
        return actions
