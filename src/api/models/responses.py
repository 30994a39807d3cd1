"""Pydantic response models for API endpoints."""

from typing import Any

from pydantic import BaseModel

from models.calendar import CalendarDate, CalendarEvent
from services.presentation import DayCellView, event_label, format_event_time
from core.config import EVENT_TEXT_COLOR


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # "healthy" or "unhealthy"
    version: str
    palette_size: int
    week_start: str
    timestamp: str  # ISO 8601 UTC
    error: str | None = None


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str
    details: list[str] = []


class ErrorCodes:
    """Error code constants."""

    INVALID_REQUEST = "INVALID_REQUEST"
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class DateOut(BaseModel):
    year: int
    month0: int
    day: int
    iso: str
    key: str

    @classmethod
    def from_date(cls, d: CalendarDate) -> "DateOut":
        return cls(year=d.year, month0=d.month0, day=d.day, iso=d.isoformat(), key=d.key)


class EventOut(BaseModel):
    id: str
    occurs_at: str | None
    color_key: int | str | None
    title: str
    color: str | None
    text_color: str
    time: str
    label: str
    payload: dict[str, Any] = {}

    @classmethod
    def from_event(cls, event: CalendarEvent) -> "EventOut":
        return cls(
            id=event.id,
            occurs_at=event.occurs_at,
            color_key=event.color_key,
            title=event.title,
            color=event.color,
            text_color=EVENT_TEXT_COLOR,
            time=format_event_time(event.occurs_at),
            label=event_label(event),
            payload=dict(event.payload),
        )


class CellOut(BaseModel):
    date: DateOut
    day_number: int
    is_in_target_month: bool
    is_today: bool
    is_selectable: bool
    is_expanded: bool
    can_expand: bool
    has_events: bool
    visible_events: list[EventOut]
    remaining_count: int
    total_events: int

    @classmethod
    def from_view(cls, cell: DayCellView) -> "CellOut":
        return cls(
            date=DateOut.from_date(cell.date),
            day_number=cell.day_number,
            is_in_target_month=cell.is_in_target_month,
            is_today=cell.is_today,
            is_selectable=cell.is_selectable,
            is_expanded=cell.is_expanded,
            can_expand=cell.can_expand,
            has_events=cell.has_events,
            visible_events=[EventOut.from_event(e) for e in cell.visible_events],
            remaining_count=cell.remaining_count,
            total_events=cell.total_events,
        )


class ColorEntryOut(BaseModel):
    key: int | str
    color: str


class SkippedEventOut(BaseModel):
    event_id: str
    occurs_at: Any
    reason: str


class MonthViewResponse(BaseModel):
    year: int
    month0: int
    label: str
    week_start: str
    weekdays: list[str]
    cells: list[CellOut]
    color_map: list[ColorEntryOut]
    skipped_count: int
    skipped: list[SkippedEventOut]


class ToggleResponse(BaseModel):
    date: DateOut
    is_expanded: bool
    expanded: list[DateOut]


class NavigateResponse(BaseModel):
    year: int
    month0: int
    label: str
    range_start: str
    range_end: str
    month_options: list[dict]
    year_options: list[int]


class DayEventsResponse(BaseModel):
    date: DateOut
    label: str
    events: list[EventOut]


class AgendaGroup(BaseModel):
    date: DateOut
    label: str
    events: list[EventOut]


class AgendaResponse(BaseModel):
    groups: list[AgendaGroup]
