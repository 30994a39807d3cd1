"""
Data models for the month calendar.

Raw events coming from data-fetch services are plain dicts and are turned
into CalendarEvent with from_dict. Everything the engine produces is a frozen
dataclass so a MonthView can be shared freely once built.
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Any, Hashable, Mapping


class WeekStart(str, Enum):
    """Which weekday occupies the first grid column."""

    MONDAY = "monday"
    SUNDAY = "sunday"

    def offset(self, d: date) -> int:
        """Column index (0-6) of the given date under this convention."""
        if self is WeekStart.MONDAY:
            return d.weekday()
        return (d.weekday() + 1) % 7


@dataclass(frozen=True, order=True)
class CalendarDate:
    """A calendar day with no time component. month0 is 0-based (January = 0)."""

    year: int
    month0: int
    day: int

    @classmethod
    def from_date(cls, d: date) -> "CalendarDate":
        return cls(d.year, d.month - 1, d.day)

    def to_date(self) -> date:
        return date(self.year, self.month0 + 1, self.day)

    def shift(self, days: int) -> "CalendarDate":
        return CalendarDate.from_date(self.to_date() + timedelta(days=days))

    @property
    def key(self) -> str:
        """Stable string key, e.g. '2024-2-5' for March 5th 2024."""
        return f"{self.year}-{self.month0}-{self.day}"

    def isoformat(self) -> str:
        return self.to_date().isoformat()


@dataclass(frozen=True)
class CalendarEvent:
    """
    An item placed on the calendar.

    Only id, occurs_at and color_key are read by the engine; payload is passed
    through untouched for the presentation layer.
    """

    id: str
    occurs_at: str
    color_key: Hashable | None = None
    title: str = ""
    payload: Mapping[str, Any] = field(default_factory=dict, compare=False)
    color: str | None = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "CalendarEvent":
        """
        Build from a service dict; unknown keys go into payload.

        Accepts both occurs_at/color_key and the API's occursAt/colorKey.
        """
        known = {"id", "occurs_at", "occursAt", "color_key", "colorKey", "title"}
        return cls(
            id=str(raw.get("id", "")),
            occurs_at=raw.get("occurs_at", raw.get("occursAt")),
            color_key=raw.get("color_key", raw.get("colorKey")),
            title=str(raw.get("title") or ""),
            payload={k: v for k, v in raw.items() if k not in known},
        )


@dataclass(frozen=True)
class SkippedEvent:
    """Diagnostic for an event that could not be placed on any day."""

    event_id: str
    occurs_at: Any
    reason: str


@dataclass(frozen=True)
class CalendarDayCell:
    date: CalendarDate
    is_in_target_month: bool
    is_today: bool = False
    events: tuple[CalendarEvent, ...] = ()


@dataclass(frozen=True)
class MonthView:
    """Result of one grid-build-plus-index cycle."""

    year: int
    month0: int
    cells: tuple[CalendarDayCell, ...]
    week_start: WeekStart
    diagnostics: tuple[SkippedEvent, ...] = ()

    @property
    def skipped_count(self) -> int:
        return len(self.diagnostics)

    @property
    def weeks(self) -> list[tuple[CalendarDayCell, ...]]:
        """Cells split into rows of seven."""
        return [self.cells[i:i + 7] for i in range(0, len(self.cells), 7)]

    def cell_for(self, d: CalendarDate) -> CalendarDayCell | None:
        for cell in self.cells:
            if cell.date == d:
                return cell
        return None

    @property
    def event_count(self) -> int:
        return sum(len(cell.events) for cell in self.cells)
