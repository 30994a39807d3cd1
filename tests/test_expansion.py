"""Tests for per-day expand/collapse state."""

import pytest

from models.calendar import CalendarDate, CalendarDayCell, CalendarEvent
from services.expansion import (
    can_expand,
    is_expanded,
    remaining_count,
    toggle,
    visible_events,
)

DAY = CalendarDate(2024, 2, 5)
OTHER_DAY = CalendarDate(2024, 2, 6)


def make_cell(event_count, d=DAY):
    events = tuple(
        CalendarEvent(id=str(i), occurs_at=f"2024-03-05T{i:02d}:00:00") for i in range(event_count)
    )
    return CalendarDayCell(date=d, is_in_target_month=True, events=events)


@pytest.mark.parametrize(
    "expanded",
    [frozenset(), frozenset({DAY}), frozenset({OTHER_DAY}), frozenset({DAY, OTHER_DAY})],
)
def test_toggle_twice_is_identity(expanded):
    assert toggle(DAY, toggle(DAY, expanded)) == expanded


def test_toggle_does_not_mutate_input():
    expanded = {OTHER_DAY}

    result = toggle(DAY, expanded)

    assert expanded == {OTHER_DAY}
    assert result == frozenset({DAY, OTHER_DAY})
    assert isinstance(result, frozenset)


def test_toggle_collapses_expanded_day():
    assert toggle(DAY, frozenset({DAY, OTHER_DAY})) == frozenset({OTHER_DAY})


def test_is_expanded():
    assert is_expanded(DAY, frozenset({DAY}))
    assert not is_expanded(DAY, frozenset({OTHER_DAY}))


def test_collapsed_day_shows_first_three():
    cell = make_cell(5)

    assert [e.id for e in visible_events(cell, frozenset())] == ["0", "1", "2"]
    assert remaining_count(cell, frozenset()) == 2
    assert can_expand(cell)


def test_expanded_day_shows_everything():
    cell = make_cell(5)
    expanded = frozenset({DAY})

    assert len(visible_events(cell, expanded)) == 5
    assert remaining_count(cell, expanded) == 0


def test_small_day_has_nothing_hidden():
    cell = make_cell(2)

    assert len(visible_events(cell, frozenset())) == 2
    assert remaining_count(cell, frozenset()) == 0
    assert not can_expand(cell)


def test_exactly_cap_events_cannot_expand():
    assert not can_expand(make_cell(3))


def test_custom_cap():
    cell = make_cell(5)

    assert len(visible_events(cell, frozenset(), cap=1)) == 1
    assert remaining_count(cell, frozenset(), cap=1) == 4
