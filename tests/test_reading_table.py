"""Unit tests for the append-only reading table."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from typing import Iterator

import pytest

from datastore.readings import ReadingTable, StorageError, StorageUnavailable
from models.records import Daylight, SensorSample


def _sample(temperature: float = 25.0, daylight: Daylight = Daylight.HIGH) -> SensorSample:
    return SensorSample(
        temperature=temperature,
        humidity=45.5,
        soil_moisture=72.25,
        daylight=daylight,
    )


def _ticking_clock(start: datetime, step: timedelta = timedelta(seconds=1)):
    def ticks() -> Iterator[datetime]:
        current = start
        while True:
            yield current
            current += step

    iterator = ticks()
    return lambda: next(iterator)


def test_insert_assigns_id_and_timestamp() -> None:
    table = ReadingTable(name="readings")

    reading = table.insert(_sample())

    assert reading.id
    assert reading.created_at.tzinfo is not None
    assert reading.temperature == 25.0
    assert reading.humidity == 45.5
    assert reading.soil_moisture == 72.25
    assert reading.daylight is Daylight.HIGH
    assert len(table) == 1


def test_ids_are_unique() -> None:
    table = ReadingTable(name="readings")

    ids = {table.insert(_sample()).id for _ in range(20)}

    assert len(ids) == 20


def test_latest_and_all_follow_creation_order() -> None:
    clock = _ticking_clock(datetime(2024, 1, 1, tzinfo=timezone.utc))
    table = ReadingTable(name="readings", clock=clock)

    first = table.insert(_sample(21.0))
    second = table.insert(_sample(22.0))

    assert second.created_at > first.created_at
    assert table.get_latest() == second
    assert table.get_all() == [second, first]


def test_ordering_uses_created_at_not_insert_position() -> None:
    stamps = iter(
        [
            datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),
            datetime(2024, 1, 1, 11, 0, tzinfo=timezone.utc),
        ]
    )
    table = ReadingTable(name="readings", clock=lambda: next(stamps))

    newer = table.insert(_sample(21.0))
    older = table.insert(_sample(22.0))

    assert table.get_latest() == newer
    assert table.get_all() == [newer, older]


def test_equal_timestamps_prefer_later_insert() -> None:
    stamp = datetime(2024, 1, 1, tzinfo=timezone.utc)
    table = ReadingTable(name="readings", clock=lambda: stamp)

    first = table.insert(_sample(21.0))
    second = table.insert(_sample(22.0))

    assert table.get_latest() == second
    assert table.get_all() == [second, first]


def test_empty_table_has_no_latest() -> None:
    table = ReadingTable(name="readings")

    assert table.get_latest() is None
    assert table.get_all() == []


def test_insert_persists_to_disk_and_reloads(tmp_path) -> None:
    path = tmp_path / "nested" / "readings.json"
    table = ReadingTable(name="readings", persistence_path=path)
    reading = table.insert(_sample(daylight=Daylight.LOW))

    payload = json.loads(path.read_text())
    assert payload[0]["soilMoisture"] == 72.25
    assert payload[0]["daylight"] == "LOW"
    assert "createdAt" in payload[0]

    reloaded = ReadingTable(name="readings", persistence_path=path)
    assert reloaded.get_all() == [reading]
    assert reloaded.get_latest() == reading


def test_corrupt_file_is_set_aside_and_table_starts_empty(tmp_path) -> None:
    path = tmp_path / "readings.json"
    path.write_text("{not json")

    table = ReadingTable(name="readings", persistence_path=path)
    table.insert(_sample())

    assert table.get_all() != []
    (aside,) = tmp_path.glob("readings.json.corrupt-*")
    assert aside.read_text() == "{not json"
    assert len(json.loads(path.read_text())) == 1


def test_malformed_record_does_not_erase_history(tmp_path) -> None:
    path = tmp_path / "readings.json"
    table = ReadingTable(name="readings", persistence_path=path)
    kept = [table.insert(_sample(21.0 + offset)) for offset in range(3)]
    records = json.loads(path.read_text())
    del records[1]["createdAt"]
    path.write_text(json.dumps(records))

    reopened = ReadingTable(name="readings", persistence_path=path)
    assert {reading.id for reading in reopened.get_all()} == {kept[0].id, kept[2].id}
    reopened.insert(_sample(30.0))

    on_disk = json.loads(path.read_text())
    assert len(on_disk) == 3
    assert {record["id"] for record in on_disk} >= {kept[0].id, kept[2].id}
    (aside,) = tmp_path.glob("readings.json.corrupt-*")
    assert len(json.loads(aside.read_text())) == 3


def test_successful_writes_leave_no_staging_file(tmp_path) -> None:
    path = tmp_path / "readings.json"
    table = ReadingTable(name="readings", persistence_path=path)

    table.insert(_sample())
    table.insert(_sample())

    assert sorted(p.name for p in tmp_path.iterdir()) == ["readings.json"]


def test_failed_write_raises_and_keeps_collection_unchanged(tmp_path) -> None:
    path = tmp_path / "readings.json"
    table = ReadingTable(name="readings", persistence_path=path)
    table.insert(_sample())
    path.unlink()
    path.mkdir()

    with pytest.raises(StorageUnavailable):
        table.insert(_sample(30.5))

    assert len(table) == 1


def test_closed_table_rejects_operations() -> None:
    table = ReadingTable(name="readings")
    table.close()
    table.close()

    assert table.closed is True
    with pytest.raises(StorageError):
        table.insert(_sample())
    with pytest.raises(StorageUnavailable):
        table.get_latest()
    with pytest.raises(StorageUnavailable):
        table.get_all()
