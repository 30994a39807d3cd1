"""
Calendar engine exceptions.
"""


class CalendarError(Exception):
    """Base class for calendar engine errors."""


class InvalidConfiguration(CalendarError):
    """Engine was configured with values it cannot work with (e.g. empty palette)."""
