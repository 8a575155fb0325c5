"""Coordinates sample generation, storage and rule evaluation."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List

from app.schemas import Reading
from datastore.readings import ReadingTable, build_default_table
from logging_config import reading_context
from services.evaluator import ThresholdEvaluator
from services.generator import SampleGenerator
from settings import get_settings

logger = logging.getLogger(__name__)


class ReadingNotFound(KeyError):
    """Raised when a query needs a reading but the store is empty."""


@dataclass
class GenerationResult:
    reading: Reading
    actions: List[str] = field(default_factory=list)


class MonitorService:
    """Owns the reading table for the lifetime of the application."""

    def __init__(
        self,
        table: ReadingTable,
        generator: SampleGenerator,
        evaluator: ThresholdEvaluator,
    ) -> None:
        self.table = table
        self.generator = generator
        self.evaluator = evaluator

    def generate_reading(self) -> GenerationResult:
        """Generate a sample, store it, and evaluate the stored value."""
        sample = self.generator.generate()
        reading = self.table.insert(sample)
        actions = self.evaluator.evaluate(reading)
        logger.info(
            "Generated sensor reading",
            extra=reading_context(reading, actions),
        )
        return GenerationResult(reading=reading, actions=actions)

    def fetch_latest(self) -> Reading:
        reading = self.table.get_latest()
        if reading is None:
            raise ReadingNotFound("No data found")
        return reading

    def fetch_all(self) -> List[Reading]:
        return self.table.get_all()

    def shutdown(self) -> None:
        """Close the reading table during application shutdown."""
        self.table.close()


@lru_cache
def build_default_monitor() -> MonitorService:
    """Factory that wires the monitor with the configured table."""
    settings = get_settings()
    table = build_default_table()
    generator = SampleGenerator(random.Random(settings.generator_seed))
    return MonitorService(table=table, generator=generator, evaluator=ThresholdEvaluator())
