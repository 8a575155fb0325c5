"""Synthetic sensor sample generation."""

from __future__ import annotations

import random
from typing import Optional

from models.records import Daylight, SensorSample

TEMPERATURE_RANGE = (20.0, 35.0)
HUMIDITY_RANGE = (30.0, 70.0)
SOIL_MOISTURE_RANGE = (50.0, 100.0)


class SampleGenerator:
    """Produces random readings; deterministic when given a seeded ``Random``."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def generate(self) -> SensorSample:
        return SensorSample(
            temperature=self._uniform(*TEMPERATURE_RANGE),
            humidity=self._uniform(*HUMIDITY_RANGE),
            soil_moisture=self._uniform(*SOIL_MOISTURE_RANGE),
            daylight=Daylight.HIGH if self._rng.random() < 0.5 else Daylight.LOW,
        )

    def _uniform(self, low: float, high: float) -> float:
        return round(self._rng.uniform(low, high), 2)
