"""
Event-to-day assignment.

Events are matched to cells by calendar date only. The date is read as written
in occurs_at: "2024-03-05T23:59:00Z" belongs to March 5th no matter the
offset. Callers that need a different reference must convert occurs_at before
indexing.
"""

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Iterable, Sequence

from models.calendar import CalendarDate, CalendarDayCell, CalendarEvent, SkippedEvent


def parse_occurs_at(value) -> datetime | None:
    """
    Parse an ISO-8601 timestamp or date string.

    Returns a naive datetime holding the written wall-clock time (any offset is
    dropped, not applied), or None if the value is not a parseable string.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip().replace("Z", "+00:00")
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        try:
            parsed = datetime.combine(date.fromisoformat(text), datetime.min.time())
        except ValueError:
            return None
    return parsed.replace(tzinfo=None)


def event_date(event: CalendarEvent) -> CalendarDate | None:
    """Calendar day of an event, or None if occurs_at is malformed."""
    parsed = parse_occurs_at(event.occurs_at)
    if parsed is None:
        return None
    return CalendarDate(parsed.year, parsed.month - 1, parsed.day)


def sort_chronologically(events: Iterable[CalendarEvent]) -> list[CalendarEvent]:
    """Sort by occurs_at; sorted() is stable so ties keep input order."""
    return sorted(events, key=lambda e: parse_occurs_at(e.occurs_at) or datetime.min)


@dataclass(frozen=True)
class IndexResult:
    cells: list[CalendarDayCell]
    diagnostics: list[SkippedEvent]

    @property
    def placed(self) -> list[CalendarEvent]:
        """Placed events in grid order."""
        return [event for cell in self.cells for event in cell.events]


class EventDayIndexer:
    """Places events on the grid cell whose date matches theirs."""

    def index(
        self, cells: Sequence[CalendarDayCell], events: Iterable[CalendarEvent]
    ) -> IndexResult:
        by_date: dict[CalendarDate, list[tuple[datetime, CalendarEvent]]] = {
            cell.date: [] for cell in cells
        }
        diagnostics: list[SkippedEvent] = []

        for event in events:
            parsed = parse_occurs_at(event.occurs_at)
            if parsed is None:
                diagnostics.append(
                    SkippedEvent(
                        event_id=event.id,
                        occurs_at=event.occurs_at,
                        reason="unparseable occurs_at",
                    )
                )
                continue

            bucket = by_date.get(CalendarDate(parsed.year, parsed.month - 1, parsed.day))
            # Outside the 42-day window: the neighbouring month's view shows it
            if bucket is not None:
                bucket.append((parsed, event))

        indexed = []
        for cell in cells:
            bucket = sorted(by_date[cell.date], key=lambda pair: pair[0])
            indexed.append(replace(cell, events=tuple(event for _, event in bucket)))

        return IndexResult(cells=indexed, diagnostics=diagnostics)


def events_on(d: CalendarDate, events: Iterable[CalendarEvent]) -> list[CalendarEvent]:
    """Events of a single day in chronological order (the day view)."""
    return sort_chronologically(e for e in events if event_date(e) == d)


def group_by_day(
    events: Iterable[CalendarEvent],
) -> list[tuple[CalendarDate, list[CalendarEvent]]]:
    """
    Group events by calendar day for the agenda list view.

    Days ascend; events within a day are chronological. Malformed events are
    left out.
    """
    grouped: dict[CalendarDate, list[CalendarEvent]] = {}
    for event in events:
        d = event_date(event)
        if d is None:
            continue
        grouped.setdefault(d, []).append(event)

    return [(d, sort_chronologically(grouped[d])) for d in sorted(grouped)]
