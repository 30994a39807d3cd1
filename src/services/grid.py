"""
Month grid construction.

A month is always rendered as 6 weeks x 7 days so the calendar height stays
constant: trailing days of the previous month, every day of the target month,
then leading days of the next month.
"""

import calendar
from datetime import date, timedelta

from core.config import GRID_SIZE
from models.calendar import CalendarDate, CalendarDayCell, WeekStart


def normalize_month(year: int, month0: int) -> tuple[int, int]:
    """
    Fold any integer month0 into [0, 11], carrying whole years.

    Examples: (2024, 12) -> (2025, 0), (2024, -1) -> (2023, 11).
    """
    return year + month0 // 12, month0 % 12


def days_in_month(year: int, month0: int) -> int:
    """Number of days in the month, leap years included."""
    year, month0 = normalize_month(year, month0)
    return calendar.monthrange(year, month0 + 1)[1]


class MonthGridBuilder:
    """Builds the 42 CalendarDates shown for a month."""

    def __init__(self, week_start: WeekStart = WeekStart.MONDAY):
        self.week_start = WeekStart(week_start)

    def build(self, year: int, month0: int) -> list[CalendarDate]:
        year, month0 = normalize_month(year, month0)
        first_of_month = date(year, month0 + 1, 1)

        # Number of previous-month days before the 1st
        leading_count = self.week_start.offset(first_of_month)

        try:
            grid_start = first_of_month - timedelta(days=leading_count)
            return [
                CalendarDate.from_date(grid_start + timedelta(days=i))
                for i in range(GRID_SIZE)
            ]
        except OverflowError:
            raise ValueError(
                f"Grid for {year}-{month0 + 1:02d} extends outside the supported date range"
            )

    def build_cells(
        self, year: int, month0: int, today: date | None = None
    ) -> list[CalendarDayCell]:
        """Grid as empty day cells with month membership and today flags set."""
        year, month0 = normalize_month(year, month0)
        today_date = CalendarDate.from_date(today) if today else None

        return [
            CalendarDayCell(
                date=d,
                is_in_target_month=(d.year == year and d.month0 == month0),
                is_today=(d == today_date),
            )
            for d in self.build(year, month0)
        ]
