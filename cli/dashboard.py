"""Client-side dashboard state, refreshed only when explicitly asked to."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from cli.client import ApiClient, ApiError
from services.temperature import TemperatureControl

logger = logging.getLogger(__name__)


@dataclass
class DashboardState:
    latest: Optional[Dict[str, Any]] = None
    readings: List[Dict[str, Any]] = field(default_factory=list)
    actions: List[str] = field(default_factory=list)


class DashboardSession:
    """Holds the last fetched view; failed fetches leave it untouched."""

    def __init__(self, client: ApiClient, control: Optional[TemperatureControl] = None) -> None:
        self.client = client
        self.control = control or TemperatureControl()
        self.state = DashboardState()

    def initialize(self) -> None:
        """Run once at startup: generate a reading, then load latest and history."""
        self.generate()
        self.refresh_all()

    def generate(self) -> None:
        try:
            payload = self.client.generate_data()
        except ApiError as exc:
            logger.warning("Error generating data", extra={"reason": str(exc)})
            return
        self.state.actions = list(payload.get("actions") or [])
        self.refresh_latest()

    def refresh(self) -> None:
        self.refresh_latest()
        self.refresh_all()

    def refresh_latest(self) -> None:
        try:
            latest = self.client.get_latest()
        except ApiError as exc:
            logger.warning("Error fetching latest data", extra={"reason": str(exc)})
            return
        self.state.latest = latest

    def refresh_all(self) -> None:
        try:
            readings = self.client.get_all()
        except ApiError as exc:
            logger.warning("Error fetching all data", extra={"reason": str(exc)})
            return
        self.state.readings = readings
        logger.debug("Fetched readings", extra={"reading_count": len(readings)})
