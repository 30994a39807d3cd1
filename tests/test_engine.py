"""Tests for the calendar engine composition."""

from datetime import date

import pytest

from core.config import FALLBACK_COLOR
from core.errors import InvalidConfiguration
from models.calendar import CalendarDate, CalendarEvent, WeekStart
from services.engine import CalendarEngine, build_month_view, parse_week_start


def test_scenario_late_event_in_march(palette):
    events = [{"id": "1", "occurs_at": "2024-03-05T23:59:00Z", "color_key": 7}]

    view, color_map = build_month_view(2024, 2, events, {}, palette, WeekStart.MONDAY)

    cell = view.cell_for(CalendarDate(2024, 2, 5))
    assert [e.id for e in cell.events] == ["1"]
    assert cell.events[0].color == palette[0]
    assert color_map == {7: palette[0]}


def test_camel_case_dict_events_are_placed(palette):
    events = [{"id": "1", "occursAt": "2024-03-05T23:59:00Z", "colorKey": 7, "city": "GT"}]

    view, color_map = build_month_view(2024, 2, events, {}, palette, WeekStart.MONDAY)

    placed = view.cell_for(CalendarDate(2024, 2, 5)).events
    assert [e.id for e in placed] == ["1"]
    assert placed[0].color_key == 7
    assert placed[0].payload == {"city": "GT"}
    assert view.skipped_count == 0
    assert color_map == {7: palette[0]}


def test_month_view_shape(palette, march_events, week_start):
    view, _ = CalendarEngine(palette, week_start).build_month_view(2024, 2, march_events)

    assert (view.year, view.month0) == (2024, 2)
    assert view.week_start is week_start
    assert len(view.cells) == 42
    assert len(view.weeks) == 6
    assert all(len(week) == 7 for week in view.weeks)
    assert sum(cell.is_in_target_month for cell in view.cells) == 31


def test_five_keys_on_four_colors_cycle(palette):
    events = [
        CalendarEvent(id=str(i), occurs_at=f"2024-03-{i + 1:02d}T10:00:00", color_key=f"k{i}")
        for i in range(5)
    ]

    view, color_map = CalendarEngine(palette).build_month_view(2024, 2, events)

    assert color_map["k4"] == color_map["k0"] == palette[0]
    colors = {e.color_key: e.color for cell in view.cells for e in cell.events}
    assert colors["k4"] == colors["k0"]


def test_color_map_is_threaded_across_months(palette):
    engine = CalendarEngine(palette)
    march = [CalendarEvent(id="1", occurs_at="2024-03-10", color_key="north")]
    april = [
        CalendarEvent(id="2", occurs_at="2024-04-10", color_key="south"),
        CalendarEvent(id="3", occurs_at="2024-04-11", color_key="north"),
    ]

    _, color_map = engine.build_month_view(2024, 2, march, {})
    view, color_map = engine.build_month_view(2024, 3, april, color_map)

    assert color_map == {"north": palette[0], "south": palette[1]}
    placed = {e.id: e.color for cell in view.cells for e in cell.events}
    assert placed == {"2": palette[1], "3": palette[0]}


def test_colors_follow_input_order_not_grid_order(palette):
    events = [
        CalendarEvent(id="late", occurs_at="2024-03-20", color_key="b"),
        CalendarEvent(id="early", occurs_at="2024-03-02", color_key="a"),
    ]

    _, color_map = CalendarEngine(palette).build_month_view(2024, 2, events)

    assert list(color_map) == ["b", "a"]


def test_out_of_window_events_do_not_consume_colors(palette):
    events = [
        CalendarEvent(id="far", occurs_at="2024-09-01", color_key="hidden"),
        CalendarEvent(id="near", occurs_at="2024-03-02", color_key="shown"),
    ]

    _, color_map = CalendarEngine(palette).build_month_view(2024, 2, events)

    assert color_map == {"shown": palette[0]}


def test_event_without_key_uses_fallback(palette):
    events = [CalendarEvent(id="1", occurs_at="2024-03-02")]

    view, color_map = CalendarEngine(palette).build_month_view(2024, 2, events)

    assert view.cell_for(CalendarDate(2024, 2, 2)).events[0].color == FALLBACK_COLOR
    assert color_map == {}


def test_malformed_events_reported_in_diagnostics(palette, march_events):
    view, _ = CalendarEngine(palette).build_month_view(2024, 2, march_events)

    assert view.skipped_count == 1
    assert view.diagnostics[0].event_id == "106"
    assert view.event_count == 4


def test_same_inputs_same_view(palette, march_events):
    engine = CalendarEngine(palette)

    first = engine.build_month_view(2024, 2, march_events, {}, today=date(2024, 3, 5))
    second = engine.build_month_view(2024, 2, march_events, {}, today=date(2024, 3, 5))

    assert first == second


def test_input_color_map_is_not_mutated(palette, march_events):
    color_map = {"existing": palette[3]}

    CalendarEngine(palette).build_month_view(2024, 2, march_events, color_map)

    assert color_map == {"existing": palette[3]}


def test_today_is_an_input(palette):
    view, _ = CalendarEngine(palette).build_month_view(2024, 2, [], today=date(2024, 3, 15))

    assert [c.date for c in view.cells if c.is_today] == [CalendarDate(2024, 2, 15)]

    view, _ = CalendarEngine(palette).build_month_view(2024, 2, [])
    assert not any(c.is_today for c in view.cells)


def test_month_is_normalized(palette):
    view, _ = CalendarEngine(palette).build_month_view(2024, -1, [])

    assert (view.year, view.month0) == (2023, 11)


def test_empty_events_render_empty_grid(palette):
    view, color_map = CalendarEngine(palette).build_month_view(2024, 2, [])

    assert view.event_count == 0
    assert view.skipped_count == 0
    assert color_map == {}


def test_empty_palette_fails_at_construction():
    with pytest.raises(InvalidConfiguration):
        CalendarEngine(palette=[])


def test_cap_below_one_fails_at_construction(palette):
    with pytest.raises(InvalidConfiguration):
        CalendarEngine(palette, visible_cap=0)


def test_unknown_week_start_fails(palette):
    with pytest.raises(InvalidConfiguration):
        CalendarEngine(palette, week_start="wednesday")


@pytest.mark.parametrize(
    "value, expected",
    [("monday", WeekStart.MONDAY), ("SUNDAY", WeekStart.SUNDAY), (WeekStart.SUNDAY, WeekStart.SUNDAY)],
)
def test_parse_week_start(value, expected):
    assert parse_week_start(value) is expected


def test_passthrough_payload_survives(palette, sample_event):
    view, _ = CalendarEngine(palette).build_month_view(2024, 2, [sample_event])

    placed = view.cell_for(CalendarDate(2024, 2, 5)).events[0]
    assert placed.payload == {"scheduled": True, "cities": [7, 3]}
    assert placed.title == "15%"


def test_dict_events_keep_unknown_fields_in_payload(palette):
    events = [{"id": 5, "occurs_at": "2024-03-02T09:00:00", "type": "push", "title": "Promo"}]

    view, _ = CalendarEngine(palette).build_month_view(2024, 2, events)

    placed = view.cell_for(CalendarDate(2024, 2, 2)).events[0]
    assert placed.id == "5"
    assert placed.payload == {"type": "push"}
