"""
Calendar engine: the single entry point for building a month view.

build grid -> index events -> assign category colors. The engine holds only
its configuration; the color map and expansion state are owned by the caller
and threaded through explicitly, so calls are pure and thread-safe.
"""

from dataclasses import replace
from datetime import date
from typing import Any, Hashable, Iterable, Mapping, Sequence

from core.config import (
    CALENDAR_PALETTE,
    CALENDAR_VISIBLE_CAP,
    CALENDAR_WEEK_START,
    FALLBACK_COLOR,
)
from core.errors import InvalidConfiguration
from models.calendar import CalendarEvent, MonthView, WeekStart
from services.colors import color_for, validate_palette
from services.grid import MonthGridBuilder, normalize_month
from services.indexer import EventDayIndexer


def parse_week_start(value: str | WeekStart) -> WeekStart:
    """Accept 'monday'/'sunday' (any case) or a WeekStart."""
    try:
        return WeekStart(value.lower() if isinstance(value, str) else value)
    except ValueError:
        raise InvalidConfiguration(
            f"Unknown week start '{value}', expected 'monday' or 'sunday'"
        )


def _as_event(event: CalendarEvent | Mapping[str, Any]) -> CalendarEvent:
    if isinstance(event, CalendarEvent):
        return event
    return CalendarEvent.from_dict(event)


class CalendarEngine:
    """
    Composition root for month views.

    Raises InvalidConfiguration at construction time for an empty palette or a
    visible cap below 1, since neither can produce a usable calendar.
    """

    def __init__(
        self,
        palette: Sequence[str] | None = None,
        week_start: str | WeekStart = CALENDAR_WEEK_START,
        visible_cap: int = CALENDAR_VISIBLE_CAP,
    ):
        self.palette = validate_palette(CALENDAR_PALETTE if palette is None else palette)
        self.week_start = parse_week_start(week_start)
        if visible_cap < 1:
            raise InvalidConfiguration(f"Visible cap must be at least 1, got {visible_cap}")
        self.visible_cap = visible_cap

        self._grid = MonthGridBuilder(self.week_start)
        self._indexer = EventDayIndexer()

    def build_month_view(
        self,
        year: int,
        month0: int,
        events: Iterable[CalendarEvent | Mapping[str, Any]],
        color_map: Mapping[Hashable, str] | None = None,
        today: date | None = None,
    ) -> tuple[MonthView, dict[Hashable, str]]:
        """
        Build the MonthView for (year, month0) and the extended color map.

        `today` marks the matching cell; it is an input rather than read from
        the clock so identical inputs always give identical views. Events with
        a malformed occurs_at are reported in MonthView.diagnostics.
        """
        year, month0 = normalize_month(year, month0)
        calendar_events = [_as_event(e) for e in events]
        cells = self._grid.build_cells(year, month0, today=today)
        result = self._indexer.index(cells, calendar_events)

        # Colors are assigned in input order, only for events shown in this view
        placed_ids = {id(e) for e in result.placed}
        updated_map = dict(color_map or {})
        colors: dict[Hashable, str] = {}
        for event in calendar_events:
            if id(event) not in placed_ids or event.color_key is None:
                continue
            color, updated_map = color_for(event.color_key, updated_map, self.palette)
            colors[event.color_key] = color

        colored_cells = tuple(
            replace(
                cell,
                events=tuple(
                    replace(e, color=colors.get(e.color_key, FALLBACK_COLOR))
                    for e in cell.events
                ),
            )
            for cell in result.cells
        )

        view = MonthView(
            year=year,
            month0=month0,
            cells=colored_cells,
            week_start=self.week_start,
            diagnostics=tuple(result.diagnostics),
        )
        return view, updated_map


def build_month_view(
    year: int,
    month0: int,
    events: Iterable[CalendarEvent | Mapping[str, Any]],
    color_map: Mapping[Hashable, str] | None,
    palette: Sequence[str],
    week_start: str | WeekStart,
    today: date | None = None,
) -> tuple[MonthView, dict[Hashable, str]]:
    """Functional form of CalendarEngine.build_month_view."""
    engine = CalendarEngine(palette=palette, week_start=week_start)
    return engine.build_month_view(year, month0, events, color_map, today=today)
