from __future__ import annotations

import random
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from datastore.readings import ReadingTable
from services.evaluator import ThresholdEvaluator
from services.generator import SampleGenerator
from services.monitor import MonitorService


@pytest.fixture
def monitor(tmp_path) -> MonitorService:
    table = ReadingTable(name="test", persistence_path=tmp_path / "readings.json")
    return MonitorService(
        table=table,
        generator=SampleGenerator(random.Random(1234)),
        evaluator=ThresholdEvaluator(),
    )


@pytest.fixture
def api_client(monitor: MonitorService) -> Iterator[TestClient]:
    app = create_app(monitor=monitor)
    with TestClient(app) as client:
        yield client
