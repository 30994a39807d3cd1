"""
Month navigation helpers for the previous/next/today controls and picker.
"""

from datetime import date, datetime, time

from core.config import YEAR_PICKER_SPAN
from services.grid import days_in_month, normalize_month


def previous_month(year: int, month0: int) -> tuple[int, int]:
    """Return (year, month0) for one month earlier."""
    return normalize_month(year, month0 - 1)


def next_month(year: int, month0: int) -> tuple[int, int]:
    """Return (year, month0) for one month later."""
    return normalize_month(year, month0 + 1)


def current_month(today: date) -> tuple[int, int]:
    """Return (year, month0) containing today."""
    return today.year, today.month - 1


def navigate(year: int, month0: int, direction: str, today: date | None = None) -> tuple[int, int]:
    """
    Apply a navigation control.

    direction is one of 'prev', 'next', 'today' (today required) or 'stay'.
    """
    if direction == "prev":
        return previous_month(year, month0)
    if direction == "next":
        return next_month(year, month0)
    if direction == "today":
        if today is None:
            raise ValueError("'today' navigation needs the current date")
        return current_month(today)
    if direction == "stay":
        return normalize_month(year, month0)
    raise ValueError(f"Unknown navigation direction '{direction}'")


def month_date_range(year: int, month0: int) -> tuple[datetime, datetime]:
    """
    First and last instant of the month, as used when fetching its events.

    The end is 23:59:59.999 on the last day.
    """
    year, month0 = normalize_month(year, month0)
    start = datetime.combine(date(year, month0 + 1, 1), time.min)
    end = datetime.combine(
        date(year, month0 + 1, days_in_month(year, month0)),
        time(23, 59, 59, 999000),
    )
    return start, end


def year_options(today: date, span: int = YEAR_PICKER_SPAN) -> list[int]:
    """Years offered by the picker: current year +/- span."""
    return list(range(today.year - span, today.year + span + 1))
