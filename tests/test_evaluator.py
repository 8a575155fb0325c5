"""Unit tests for the threshold rules."""

from __future__ import annotations

from datetime import datetime, timezone

from app.schemas import Reading
from models.records import Daylight, SensorSample
from services.evaluator import (
    FAN_ACTION,
    IRRIGATION_ACTION,
    LIGHTING_ACTION,
    ThresholdEvaluator,
    Thresholds,
)


def _sample(temperature: float, humidity: float, daylight: Daylight) -> SensorSample:
    return SensorSample(
        temperature=temperature,
        humidity=humidity,
        soil_moisture=60.0,
        daylight=daylight,
    )


def test_hot_reading_activates_fan_only() -> None:
    actions = ThresholdEvaluator().evaluate(_sample(31, 50, Daylight.HIGH))

    assert actions == ["Fan motor activated for cooling"]


def test_dry_and_dark_reading_triggers_irrigation_then_lighting() -> None:
    actions = ThresholdEvaluator().evaluate(_sample(25, 35, Daylight.LOW))

    assert actions == ["Irrigation system triggered", "Artificial lighting turned on"]


def test_comfortable_reading_emits_nothing() -> None:
    assert ThresholdEvaluator().evaluate(_sample(25, 50, Daylight.HIGH)) == []


def test_all_rules_can_fire_together_in_order() -> None:
    actions = ThresholdEvaluator().evaluate(_sample(34.5, 31.0, Daylight.LOW))

    assert actions == [FAN_ACTION, IRRIGATION_ACTION, LIGHTING_ACTION]


def test_thresholds_are_strict_comparisons() -> None:
    assert ThresholdEvaluator().evaluate(_sample(30.0, 40.0, Daylight.HIGH)) == []


def test_evaluation_is_repeatable() -> None:
    evaluator = ThresholdEvaluator()
    sample = _sample(32.1, 33.3, Daylight.LOW)

    assert evaluator.evaluate(sample) == evaluator.evaluate(sample)


def test_accepts_stored_readings() -> None:
    reading = Reading.model_validate(
        {
            "id": "abc",
            "temperature": 25.0,
            "humidity": 50.0,
            "soilMoisture": 60.0,
            "daylight": "LOW",
            "createdAt": datetime(2024, 1, 1, tzinfo=timezone.utc).isoformat(),
        }
    )

    assert ThresholdEvaluator().evaluate(reading) == [LIGHTING_ACTION]


def test_custom_thresholds() -> None:
    evaluator = ThresholdEvaluator(Thresholds(max_temperature=20.0, min_humidity=60.0))

    actions = evaluator.evaluate(_sample(25, 50, Daylight.HIGH))

    assert actions == [FAN_ACTION, IRRIGATION_ACTION]
