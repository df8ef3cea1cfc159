"""Calendar math used to resolve time change rules.

Instants are a signed integer count of seconds since an epoch. Resolving a
rule needs three operations on instants: the calendar year, the day of the
week, and composing an instant from calendar fields. Any object providing
these can be used, e.g. to share the calendar of an embedded clock. The
default `UtcCalendar` uses the Unix epoch.

The calendar is only asked for pure conversions and never for the current
time.
"""

from __future__ import annotations

import datetime
from typing import Protocol

__all__ = [
    "CalendarProvider",
    "SECS_PER_DAY",
    "SECS_PER_MIN",
    "UTC_CALENDAR",
    "UtcCalendar",
]

SECS_PER_MIN = 60
SECS_PER_DAY = 86400

_EPOCH = datetime.datetime(1970, 1, 1)
_ONE_SECOND = datetime.timedelta(seconds=1)


class CalendarProvider(Protocol):
    """Calendar operations over integer second instants."""

    def year_of(self, instant: int) -> int:
        """Return the calendar year of the instant."""

    def weekday_of(self, instant: int) -> int:
        """Return the day of the week of the instant, 1 (Sunday) to 7 (Saturday)."""

    def compose(
        self, year: int, month: int, day: int, hour: int, minute: int, second: int
    ) -> int:
        """Return the instant for the calendar fields."""


class UtcCalendar:
    """A proleptic Gregorian calendar counting seconds from 1970-01-01T00:00:00."""

    def to_datetime(self, instant: int) -> datetime.datetime:
        """Return the instant as a naive datetime."""
        return _EPOCH + datetime.timedelta(seconds=instant)

    def from_datetime(self, value: datetime.datetime) -> int:
        """Return the instant for a datetime, ignoring any tzinfo."""
        return (value.replace(tzinfo=None, microsecond=0) - _EPOCH) // _ONE_SECOND

    def year_of(self, instant: int) -> int:
        """Return the calendar year of the instant."""
        return self.to_datetime(instant).year

    def weekday_of(self, instant: int) -> int:
        """Return the day of the week of the instant, 1 (Sunday) to 7 (Saturday)."""
        # isoweekday is Monday=1..Sunday=7
        return self.to_datetime(instant).isoweekday() % 7 + 1

    def compose(
        self, year: int, month: int, day: int, hour: int, minute: int, second: int
    ) -> int:
        """Return the instant for the calendar fields."""
        return self.from_datetime(
            datetime.datetime(year, month, day, hour, minute, second)
        )


UTC_CALENDAR = UtcCalendar()
