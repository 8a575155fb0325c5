"""HTTP route definitions for the service."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from app.schemas import (
    AllReadingsResponse,
    ErrorResponse,
    GenerateResponse,
    LatestReadingResponse,
)
from services.monitor import MonitorService, ReadingNotFound

logger = logging.getLogger(__name__)

router = APIRouter()


def get_monitor(request: Request) -> MonitorService:
    return request.app.state.monitor


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post(
    "/generate-data",
    status_code=status.HTTP_201_CREATED,
    response_model=GenerateResponse,
    responses={500: {"model": ErrorResponse}},
    summary="Generate, store and evaluate a synthetic sensor reading.",
)
def generate_data(
    monitor: MonitorService = Depends(get_monitor),
) -> GenerateResponse | JSONResponse:
    try:
        result = monitor.generate_reading()
    except Exception:  # noqa: BLE001 - every failure maps to the generic body
        logger.exception("Failed to generate data", extra={"path": "/generate-data"})
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to generate data")
    return GenerateResponse(data=result.reading, actions=result.actions)


@router.get(
    "/latest-data",
    response_model=LatestReadingResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Fetch the most recent reading.",
)
def latest_data(
    monitor: MonitorService = Depends(get_monitor),
) -> LatestReadingResponse | JSONResponse:
    try:
        reading = monitor.fetch_latest()
    except ReadingNotFound:
        return _error(status.HTTP_404_NOT_FOUND, "No data found")
    except Exception:  # noqa: BLE001 - every failure maps to the generic body
        logger.exception("Failed to fetch data", extra={"path": "/latest-data"})
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch data")
    return LatestReadingResponse(data=reading)


@router.get(
    "/all-data",
    response_model=AllReadingsResponse,
    responses={500: {"model": ErrorResponse}},
    summary="Fetch every reading, newest first.",
)
def all_data(
    monitor: MonitorService = Depends(get_monitor),
) -> AllReadingsResponse | JSONResponse:
    try:
        readings = monitor.fetch_all()
    except Exception:  # noqa: BLE001 - every failure maps to the generic body
        logger.exception("Failed to fetch data", extra={"path": "/all-data"})
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch data")
    return AllReadingsResponse(data=readings)


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /ui for the sensor dashboard."}
