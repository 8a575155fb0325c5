from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from app.api import get_monitor
from app.schemas import Reading
from datastore.readings import StorageError
from services.monitor import MonitorService
from services.temperature import DEFAULT_SETPOINT, TemperatureControl

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))


router = APIRouter(include_in_schema=False)


def _render_dashboard(
    request: Request,
    monitor: MonitorService,
    setpoint: float,
    reading_id: Optional[str] = None,
    error: Optional[str] = None,
) -> HTMLResponse:
    latest: Optional[Reading] = None
    readings: List[Reading] = []
    actions: List[str] = []
    status_code = status.HTTP_200_OK
    if error is not None:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    else:
        try:
            readings = monitor.fetch_all()
        except StorageError:
            logger.exception("Failed to fetch data", extra={"path": request.url.path})
            error = "Failed to fetch data"
            status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        else:
            latest = readings[0] if readings else None

    # Actions are recomputed for the reading named in the query string.
    generated = next((item for item in readings if item.id == reading_id), None)
    if generated is not None:
        actions = monitor.evaluator.evaluate(generated)

    control = TemperatureControl(setpoint=setpoint)
    observed = latest.temperature if latest is not None else None
    return templates.TemplateResponse(
        request,
        "ui/index.html",
        {
            "latest": latest,
            "readings": readings,
            "actions": actions,
            "control": control,
            "advice": control.advise(observed),
            "error": error,
        },
        status_code=status_code,
    )


@router.get("/ui", name="ui_index", response_class=HTMLResponse)
def ui_index(
    request: Request,
    setpoint: float = Query(DEFAULT_SETPOINT),
    reading: Optional[str] = Query(None, description="Reading whose actions to show."),
    monitor: MonitorService = Depends(get_monitor),
) -> HTMLResponse:
    return _render_dashboard(request, monitor, setpoint, reading_id=reading)


@router.post(
    "/ui/generate", name="ui_generate", response_class=HTMLResponse, response_model=None
)
def ui_generate(
    request: Request,
    setpoint: float = Query(DEFAULT_SETPOINT),
    monitor: MonitorService = Depends(get_monitor),
) -> HTMLResponse | RedirectResponse:
    try:
        result = monitor.generate_reading()
    except StorageError:
        logger.exception("Failed to generate data", extra={"path": request.url.path})
        return _render_dashboard(request, monitor, setpoint, error="Failed to generate data")
    query = urlencode({"setpoint": setpoint, "reading": result.reading.id})
    return RedirectResponse(
        f"{request.url_for('ui_index')}?{query}",
        status_code=status.HTTP_303_SEE_OTHER,
    )
