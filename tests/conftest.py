"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from models.calendar import CalendarEvent, WeekStart  # noqa: E402

FOUR_COLORS = ["#111111", "#222222", "#333333", "#444444"]


@pytest.fixture
def palette():
    """Small palette so cycling is easy to observe."""
    return list(FOUR_COLORS)


@pytest.fixture
def sample_event():
    """Scheduled payment late in the evening of March 5th 2024."""
    return CalendarEvent(
        id="101",
        occurs_at="2024-03-05T23:59:00Z",
        color_key=7,
        title="15%",
        payload={"scheduled": True, "cities": [7, 3]},
    )


@pytest.fixture
def march_events(sample_event):
    """A mix of March 2024 events, one outside the grid and one malformed."""
    return [
        sample_event,
        CalendarEvent(id="102", occurs_at="2024-03-05T08:00:00Z", color_key=3, title="10%"),
        CalendarEvent(id="103", occurs_at="2024-03-12T12:00:00", color_key=7, title="20%"),
        CalendarEvent(id="104", occurs_at="2024-02-27T09:30:00Z", color_key=9, title="5%"),
        CalendarEvent(id="105", occurs_at="2024-06-01T10:00:00Z", color_key=3, title="30%"),
        CalendarEvent(id="106", occurs_at="not a date", color_key=1, title="broken"),
    ]


@pytest.fixture(params=[WeekStart.MONDAY, WeekStart.SUNDAY], ids=["monday", "sunday"])
def week_start(request):
    return request.param
