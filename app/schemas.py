"""Pydantic schemas for the HTTP API layer and the reading store."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from models.records import Daylight, SensorSample


class Reading(BaseModel):
    """A stored sensor sample, stamped with an identifier and creation time."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Identifier assigned when the reading is stored.")
    temperature: float = Field(..., description="Air temperature in degrees Celsius.")
    humidity: float = Field(..., description="Relative humidity in percent.")
    soil_moisture: float = Field(
        ..., alias="soilMoisture", description="Soil moisture in percent."
    )
    daylight: Daylight
    created_at: datetime = Field(..., alias="createdAt")

    @classmethod
    def stamp(
        cls,
        sample: SensorSample,
        created_at: Optional[datetime] = None,
    ) -> "Reading":
        """Build a reading from a generated sample, stamping id and creation time."""
        return cls(
            id=uuid4().hex,
            temperature=sample.temperature,
            humidity=sample.humidity,
            soil_moisture=sample.soil_moisture,
            daylight=sample.daylight,
            created_at=created_at or datetime.now(timezone.utc),
        )


class GenerateResponse(BaseModel):
    """Payload returned after a reading is generated and stored."""

    message: str = "Sensor data generated"
    data: Reading
    actions: List[str] = Field(default_factory=list)


class LatestReadingResponse(BaseModel):
    data: Reading


class AllReadingsResponse(BaseModel):
    data: List[Reading] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Generic failure body; never carries internal details."""

    error: str
