"""Pydantic request models for calendar endpoints."""

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from models.calendar import CalendarDate, CalendarEvent, WeekStart


class DateIn(BaseModel):
    """Calendar day with a 0-based month."""

    year: int
    month0: int = Field(ge=0, le=11)
    day: int = Field(ge=1, le=31)

    def to_calendar_date(self) -> CalendarDate:
        return CalendarDate(self.year, self.month0, self.day)


class EventIn(BaseModel):
    """Event from the data-fetch layer. Extra fields are passed through."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str | int
    occurs_at: str | None = Field(default=None, alias="occursAt")
    color_key: int | str | None = Field(default=None, alias="colorKey")
    title: str = ""

    def to_event(self) -> CalendarEvent:
        return CalendarEvent(
            id=str(self.id),
            occurs_at=self.occurs_at,
            color_key=self.color_key,
            title=self.title,
            payload=dict(self.model_extra or {}),
        )


class ColorEntry(BaseModel):
    key: int | str
    color: str


class MonthViewRequest(BaseModel):
    """Inputs for one month view recomputation."""

    model_config = ConfigDict(populate_by_name=True)

    year: int = Field(ge=1, le=9999)
    month0: int
    events: list[EventIn] = []
    color_map: list[ColorEntry] = Field(default=[], alias="colorMap")
    palette: list[str] | None = None
    week_start: WeekStart | None = Field(default=None, alias="weekStart")
    expanded: list[DateIn] = []
    cap: int | None = Field(default=None, ge=1)
    today: date | None = None

    def color_map_dict(self) -> dict[Any, str]:
        return {entry.key: entry.color for entry in self.color_map}

    def expanded_set(self) -> frozenset[CalendarDate]:
        return frozenset(d.to_calendar_date() for d in self.expanded)


class ToggleRequest(BaseModel):
    date: DateIn
    expanded: list[DateIn] = []


class DayEventsRequest(BaseModel):
    date: DateIn
    events: list[EventIn] = []


class AgendaRequest(BaseModel):
    events: list[EventIn] = []
