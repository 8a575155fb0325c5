from __future__ import annotations
import json
import logging
import os
from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path
from threading import Lock
from typing import Callable, List, Optional

from pydantic import ValidationError

from app.schemas import Reading
from models.records import SensorSample
from settings import get_settings

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """Base class for reading store failures."""


class StorageUnavailable(StorageError):
    """Raised when the table is closed or its backing file cannot be written."""


class ReadingTable:
    """Append-only collection of readings, optionally mirrored to a JSON file."""

    def __init__(
        self,
        name: str,
        persistence_path: Optional[Path] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.name = name
        self._items: List[Reading] = []
        self.persistence_path = persistence_path
        self._clock = clock
        self._lock = Lock()
        self._closed = False
        if persistence_path:
            persistence_path.parent.mkdir(parents=True, exist_ok=True)
            self._load_from_disk()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    @property
    def closed(self) -> bool:
        return self._closed

    def insert(self, sample: SensorSample) -> Reading:
        created_at = self._clock() if self._clock else None
        reading = Reading.stamp(sample, created_at=created_at)
        with self._lock:
            self._ensure_open()
            self._items.append(reading)
            try:
                self._persist()
            except OSError as exc:
                self._items.pop()
                raise StorageUnavailable(
                    f"Could not persist reading to table {self.name!r}."
                ) from exc
        return reading

    def get_latest(self) -> Optional[Reading]:
        with self._lock:
            self._ensure_open()
            if not self._items:
                return None
            # Later inserts win ties on created_at.
            _, latest = max(
                enumerate(self._items), key=lambda pair: (pair[1].created_at, pair[0])
            )
            return latest

    def get_all(self) -> List[Reading]:
        """Return every stored reading, newest first."""

        with self._lock:
            self._ensure_open()
            ordered = sorted(
                enumerate(self._items),
                key=lambda pair: (pair[1].created_at, pair[0]),
                reverse=True,
            )
            return [reading for _, reading in ordered]

    def close(self) -> None:
        with self._lock:
            self._closed = True

    def _ensure_open(self) -> None:
        if self._closed:
            raise StorageUnavailable(f"Table {self.name!r} is closed.")

    def _persist(self) -> None:
        if not self.persistence_path:
            return
        payload = [item.model_dump(mode="json", by_alias=True) for item in self._items]
        staging = self.persistence_path.with_name(self.persistence_path.name + ".tmp")
        try:
            staging.write_text(json.dumps(payload, indent=2, sort_keys=True))
            os.replace(staging, self.persistence_path)
        except OSError:
            staging.unlink(missing_ok=True)
            raise

    def _load_from_disk(self) -> None:
        if not self.persistence_path or not self.persistence_path.exists():
            return

        try:
            raw = self.persistence_path.read_text() or "[]"
            data = json.loads(raw)
        except (OSError, json.JSONDecodeError) as exc:
            self._quarantine(reason=str(exc))
            return

        if not isinstance(data, list):
            self._quarantine(reason="expected a JSON list of readings")
            return

        skipped = 0
        for payload in data:
            try:
                self._items.append(Reading.model_validate(payload))
            except ValidationError:
                skipped += 1
        if skipped:
            self._quarantine(reason=f"{skipped} invalid record(s) skipped")
            try:
                self._persist()
            except OSError as exc:
                raise StorageUnavailable(
                    f"Could not rewrite readable records for table {self.name!r}."
                ) from exc

    def _quarantine(self, reason: str) -> None:
        """Move the unreadable file aside so later writes cannot replace it."""
        assert self.persistence_path is not None
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%f")
        target = self.persistence_path.with_name(
            f"{self.persistence_path.name}.corrupt-{stamp}"
        )
        try:
            self.persistence_path.replace(target)
        except OSError as exc:
            raise StorageUnavailable(
                f"Could not set aside unreadable file for table {self.name!r}."
            ) from exc
        logger.warning(
            "Moved unreadable reading table file aside",
            extra={
                "path": str(target),
                "reason": reason,
                "reading_count": len(self._items),
            },
        )


@lru_cache
def build_default_table(
    name: Optional[str] = None,
    path: Optional[str] = None,
) -> ReadingTable:
    settings = get_settings()
    table_name = settings.table_name if name is None else name
    table_path = settings.table_persistence_path if path is None else path
    persistence = Path(table_path) if table_path else None
    return ReadingTable(name=table_name, persistence_path=persistence)
