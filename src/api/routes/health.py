"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from api.models.responses import HealthResponse
from core.config import API_VERSION, CALENDAR_PALETTE, CALENDAR_VISIBLE_CAP, CALENDAR_WEEK_START
from core.errors import InvalidConfiguration
from services.engine import CalendarEngine

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint for monitoring.

    Returns 200 if the configured engine can be built, 503 otherwise.
    """
    timestamp = datetime.now(timezone.utc).isoformat()

    try:
        engine = CalendarEngine(
            palette=CALENDAR_PALETTE,
            week_start=CALENDAR_WEEK_START,
            visible_cap=CALENDAR_VISIBLE_CAP,
        )
    except InvalidConfiguration as e:
        return JSONResponse(
            status_code=503,
            content=HealthResponse(
                status="unhealthy",
                version=API_VERSION,
                palette_size=len(CALENDAR_PALETTE),
                week_start=CALENDAR_WEEK_START,
                timestamp=timestamp,
                error=str(e),
            ).model_dump(),
        )

    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        palette_size=len(engine.palette),
        week_start=engine.week_start.value,
        timestamp=timestamp,
    )
