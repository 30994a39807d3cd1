"""
Per-day expand/collapse state.

The expanded set belongs to the caller. Every operation here takes it as an
argument, and toggle returns a new frozenset instead of editing it.
"""

from typing import AbstractSet

from core.config import CALENDAR_VISIBLE_CAP
from models.calendar import CalendarDate, CalendarDayCell, CalendarEvent

ExpansionState = frozenset[CalendarDate]


def toggle(d: CalendarDate, expanded: AbstractSet[CalendarDate]) -> ExpansionState:
    """Expand a collapsed day or collapse an expanded one."""
    if d in expanded:
        return frozenset(expanded - {d})
    return frozenset(expanded | {d})


def is_expanded(d: CalendarDate, expanded: AbstractSet[CalendarDate]) -> bool:
    return d in expanded


def visible_events(
    cell: CalendarDayCell,
    expanded: AbstractSet[CalendarDate],
    cap: int = CALENDAR_VISIBLE_CAP,
) -> tuple[CalendarEvent, ...]:
    """All events of an expanded day, otherwise the first `cap`."""
    if is_expanded(cell.date, expanded):
        return cell.events
    return cell.events[:cap]


def remaining_count(
    cell: CalendarDayCell,
    expanded: AbstractSet[CalendarDate],
    cap: int = CALENDAR_VISIBLE_CAP,
) -> int:
    """How many events the '+N more' affordance hides (0 when expanded)."""
    if is_expanded(cell.date, expanded):
        return 0
    return max(0, len(cell.events) - cap)


def can_expand(cell: CalendarDayCell, cap: int = CALENDAR_VISIBLE_CAP) -> bool:
    """Whether the day has more events than fit collapsed."""
    return len(cell.events) > cap
