"""Tests for month view formatting."""

from datetime import date

from models.calendar import CalendarDate, CalendarEvent, WeekStart
from services.engine import CalendarEngine
from services.presentation import (
    event_label,
    format_date_long,
    format_event_time,
    format_month_view,
    month_label,
    month_options,
    weekday_headers,
)


def test_month_label():
    assert month_label(2024, 2) == "Marzo 2024"
    assert month_label(2024, 12) == "Enero 2025"


def test_month_options():
    options = month_options()

    assert len(options) == 12
    assert options[0] == {"label": "Enero", "value": 0}
    assert options[11] == {"label": "Diciembre", "value": 11}


def test_weekday_headers_follow_week_start():
    assert weekday_headers(WeekStart.MONDAY) == ["Lun", "Mar", "Mié", "Jue", "Vie", "Sáb", "Dom"]
    assert weekday_headers(WeekStart.SUNDAY) == ["Dom", "Lun", "Mar", "Mié", "Jue", "Vie", "Sáb"]


def test_format_date_long():
    assert format_date_long(CalendarDate(2024, 2, 5)) == "martes, 5 de marzo de 2024"


def test_event_time_and_label():
    event = CalendarEvent(id="1", occurs_at="2024-03-05T08:05:00Z", title="Promo")

    assert format_event_time(event.occurs_at) == "08:05"
    assert event_label(event) == "08:05 - Promo"


def test_event_label_without_title():
    assert event_label(CalendarEvent(id="1", occurs_at="2024-03-05T18:30:00")) == "18:30"


def test_format_event_time_malformed():
    assert format_event_time("garbage") == ""


def test_format_month_view_cells(palette):
    events = [
        CalendarEvent(id=str(i), occurs_at=f"2024-03-05T{8 + i:02d}:00:00", color_key=1)
        for i in range(5)
    ]
    view, _ = CalendarEngine(palette).build_month_view(2024, 2, events, today=date(2024, 3, 5))

    cells = format_month_view(view)
    busy = next(c for c in cells if c.date == CalendarDate(2024, 2, 5))

    assert len(cells) == 42
    assert busy.is_today
    assert busy.is_selectable
    assert busy.can_expand
    assert not busy.is_expanded
    assert [e.id for e in busy.visible_events] == ["0", "1", "2"]
    assert busy.remaining_count == 2
    assert busy.total_events == 5


def test_format_month_view_expanded_day(palette):
    events = [
        CalendarEvent(id=str(i), occurs_at="2024-03-05T09:00:00", color_key=1) for i in range(5)
    ]
    view, _ = CalendarEngine(palette).build_month_view(2024, 2, events)

    cells = format_month_view(view, frozenset({CalendarDate(2024, 2, 5)}))
    busy = next(c for c in cells if c.date == CalendarDate(2024, 2, 5))

    assert busy.is_expanded
    assert len(busy.visible_events) == 5
    assert busy.remaining_count == 0


def test_adjacent_month_cells_are_not_selectable(palette):
    view, _ = CalendarEngine(palette, WeekStart.MONDAY).build_month_view(2024, 2, [])

    cells = format_month_view(view)

    assert cells[0].date == CalendarDate(2024, 1, 26)
    assert not cells[0].is_selectable
    assert not cells[0].has_events
