#!/usr/bin/env python3
"""
Print a month calendar grid for a JSON list of events.

Each event needs an id and occurs_at (occursAt also accepted); color_key
(colorKey) and title are optional.

Usage:
    uv run python src/scripts/render_month.py --month 2024-03 --events data/payments.json
    uv run python src/scripts/render_month.py --week-start sunday --expand 2024-03-05
"""

import argparse
import json
import sys
from datetime import date, datetime
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import CALENDAR_VISIBLE_CAP, CALENDAR_WEEK_START
from models.calendar import CalendarDate, CalendarEvent, MonthView
from services.engine import CalendarEngine
from services.presentation import (
    event_label,
    format_cell,
    format_month_view,
    month_label,
    weekday_headers,
)

CELL_WIDTH = 10


# =============================================================================
# INPUT
# =============================================================================


def load_events(path: Path) -> list[CalendarEvent]:
    """Load events from a JSON array (snake_case or camelCase keys)."""
    with open(path, encoding="utf-8") as f:
        raw_events = json.load(f)

    return [CalendarEvent.from_dict(raw) for raw in raw_events]


def parse_month(month_str: str | None) -> tuple[int, int]:
    """Parse YYYY-MM into (year, month0). Uses the current month if None."""
    if not month_str:
        today = date.today()
        return today.year, today.month - 1
    parsed = datetime.strptime(month_str, "%Y-%m")
    return parsed.year, parsed.month - 1


# =============================================================================
# OUTPUT
# =============================================================================


def render_grid(view: MonthView, expanded: frozenset[CalendarDate], cap: int) -> str:
    """Text grid: day numbers, '*' for today, '+N' when events are hidden."""
    lines = [month_label(view.year, view.month0).center(CELL_WIDTH * 7)]
    lines.append("".join(h.ljust(CELL_WIDTH) for h in weekday_headers(view.week_start)))

    for week in view.weeks:
        row = []
        for cell in (format_cell(day, expanded, cap) for day in week):
            text = f"{cell.day_number:>2}" if cell.is_in_target_month else f"({cell.day_number})"
            if cell.is_today:
                text += "*"
            if cell.total_events:
                text += f" {len(cell.visible_events)}"
            if cell.remaining_count:
                text += f"+{cell.remaining_count}"
            row.append(text.ljust(CELL_WIDTH))
        lines.append("".join(row))

    return "\n".join(lines)


def render_event_list(view: MonthView, expanded: frozenset[CalendarDate], cap: int) -> str:
    lines = []
    for cell in format_month_view(view, expanded, cap):
        if not cell.is_in_target_month or not cell.visible_events:
            continue
        lines.append(f"{cell.date.isoformat()}:")
        for event in cell.visible_events:
            lines.append(f"  [{event.color}] {event_label(event)}")
        if cell.remaining_count:
            lines.append(f"  ... {cell.remaining_count} more")
    return "\n".join(lines)


# =============================================================================
# MAIN
# =============================================================================


def main(args: argparse.Namespace) -> MonthView:
    year, month0 = parse_month(args.month)
    events = load_events(Path(args.events)) if args.events else []
    expanded = frozenset(
        CalendarDate.from_date(datetime.strptime(d, "%Y-%m-%d").date()) for d in args.expand
    )

    engine = CalendarEngine(week_start=args.week_start, visible_cap=args.cap)
    view, color_map = engine.build_month_view(
        year, month0, events, color_map={}, today=date.today()
    )

    print(render_grid(view, expanded, engine.visible_cap))
    print()
    print(render_event_list(view, expanded, engine.visible_cap))

    print(f"\nEvents placed: {view.event_count}")
    print(f"Categories colored: {len(color_map)}")
    if view.skipped_count:
        print(f"Skipped {view.skipped_count} event(s) with unparseable dates:")
        for skipped in view.diagnostics:
            print(f"  {skipped.event_id}: {skipped.occurs_at!r}")

    return view


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Print a month calendar grid")
    parser.add_argument("--month", help="Month to show (YYYY-MM). Defaults to the current month.")
    parser.add_argument("--events", help="Path to a JSON array of events")
    parser.add_argument(
        "--week-start",
        default=CALENDAR_WEEK_START,
        choices=["monday", "sunday"],
        help="First grid column",
    )
    parser.add_argument("--cap", type=int, default=CALENDAR_VISIBLE_CAP, help="Events shown per collapsed day")
    parser.add_argument(
        "--expand",
        action="append",
        default=[],
        help="Day to show expanded (YYYY-MM-DD); repeatable",
    )

    main(parser.parse_args())
