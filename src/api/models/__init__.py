"""API Pydantic models."""

from .requests import AgendaRequest, DayEventsRequest, MonthViewRequest, ToggleRequest
from .responses import ErrorCodes, ErrorResponse, HealthResponse, MonthViewResponse

__all__ = [
    "HealthResponse",
    "ErrorResponse",
    "ErrorCodes",
    "MonthViewRequest",
    "MonthViewResponse",
    "ToggleRequest",
    "DayEventsRequest",
    "AgendaRequest",
]
