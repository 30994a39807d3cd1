"""
View-model formatting for month views.

Turns a MonthView plus the caller's expansion state into plain per-cell data
(labels, visible events, "+N more" counts). Labels are Spanish to match the
console.
"""

from dataclasses import dataclass
from typing import AbstractSet

from core.config import CALENDAR_VISIBLE_CAP
from models.calendar import CalendarDate, CalendarDayCell, CalendarEvent, MonthView, WeekStart
from services import expansion
from services.indexer import parse_occurs_at

MONTH_NAMES = [
    "Enero", "Febrero", "Marzo", "Abril", "Mayo", "Junio",
    "Julio", "Agosto", "Septiembre", "Octubre", "Noviembre", "Diciembre",
]

# Monday first, matching date.weekday()
WEEKDAY_ABBR = ["Lun", "Mar", "Mié", "Jue", "Vie", "Sáb", "Dom"]
WEEKDAY_NAMES = ["lunes", "martes", "miércoles", "jueves", "viernes", "sábado", "domingo"]


def month_label(year: int, month0: int) -> str:
    """e.g. 'Marzo 2024'."""
    return f"{MONTH_NAMES[month0 % 12]} {year + month0 // 12}"


def month_options() -> list[dict]:
    """Options for the month picker."""
    return [{"label": name, "value": i} for i, name in enumerate(MONTH_NAMES)]


def weekday_headers(week_start: WeekStart) -> list[str]:
    """Column headers in grid order."""
    if week_start is WeekStart.SUNDAY:
        return WEEKDAY_ABBR[6:] + WEEKDAY_ABBR[:6]
    return list(WEEKDAY_ABBR)


def format_date_long(d: CalendarDate) -> str:
    """e.g. 'martes, 5 de marzo de 2024' (agenda group headers)."""
    weekday = WEEKDAY_NAMES[d.to_date().weekday()]
    return f"{weekday}, {d.day} de {MONTH_NAMES[d.month0].lower()} de {d.year}"


def format_event_time(occurs_at: str) -> str:
    """Written wall-clock time as HH:MM, empty if unparseable."""
    parsed = parse_occurs_at(occurs_at)
    if parsed is None:
        return ""
    return parsed.strftime("%H:%M")


def event_label(event: CalendarEvent) -> str:
    """Chip text: 'HH:MM - title'."""
    time_str = format_event_time(event.occurs_at)
    if not event.title:
        return time_str
    return f"{time_str} - {event.title}" if time_str else event.title


def is_selectable(cell: CalendarDayCell) -> bool:
    """Only days of the target month respond to date clicks."""
    return cell.is_in_target_month


@dataclass(frozen=True)
class DayCellView:
    """Everything the presentation layer needs to draw one cell."""

    date: CalendarDate
    day_number: int
    is_in_target_month: bool
    is_today: bool
    is_selectable: bool
    is_expanded: bool
    can_expand: bool
    has_events: bool
    visible_events: tuple[CalendarEvent, ...]
    remaining_count: int
    total_events: int


def format_cell(
    cell: CalendarDayCell,
    expanded: AbstractSet[CalendarDate],
    cap: int = CALENDAR_VISIBLE_CAP,
) -> DayCellView:
    return DayCellView(
        date=cell.date,
        day_number=cell.date.day,
        is_in_target_month=cell.is_in_target_month,
        is_today=cell.is_today,
        is_selectable=is_selectable(cell),
        is_expanded=expansion.is_expanded(cell.date, expanded),
        can_expand=expansion.can_expand(cell, cap),
        has_events=bool(cell.events),
        visible_events=expansion.visible_events(cell, expanded, cap),
        remaining_count=expansion.remaining_count(cell, expanded, cap),
        total_events=len(cell.events),
    )


def format_month_view(
    view: MonthView,
    expanded: AbstractSet[CalendarDate] = frozenset(),
    cap: int = CALENDAR_VISIBLE_CAP,
) -> list[DayCellView]:
    """Cell view models for all 42 cells, in grid order."""
    return [format_cell(cell, expanded, cap) for cell in view.cells]
