"""Library for describing year independent time change rules.

A time change rule describes when a local offset regime goes into effect
without referring to a specific year, for example "2nd Sunday in March at
02:00". Two rules describe a timezone: one for when daylight saving time
starts and one for when standard time starts.

  - week: The occurrence of the day of the week within the month. 1 through 4
    are the first through fourth occurrence and 0 is the last occurrence.
  - dow: The day of the week between 1 (Sunday) and 7 (Saturday).
  - month: A month between 1 and 12.
  - hour: The hour of the local clock when the transition happens, measured on
    the clock that is running before the transition.
  - offset: Minutes added to UTC to get local time while the rule is in effect.

Example for US Eastern time:

```python
from timechange.rule import Dow, Month, TimeChangeRule, Week

edt = TimeChangeRule("EDT", Week.SECOND, Dow.SUNDAY, Month.MAR, 2, -240)
est = TimeChangeRule("EST", Week.FIRST, Dow.SUNDAY, Month.NOV, 2, -300)
```
"""

from __future__ import annotations

import datetime
import enum
from dataclasses import dataclass
from typing import NamedTuple

from dateutil import rrule

from .exceptions import InvalidRuleError

__all__ = [
    "Dow",
    "Month",
    "RulePair",
    "TimeChangeRule",
    "Week",
]

ABBREV_MAX_LEN = 5
_OFFSET_MIN = -(2**15)
_OFFSET_MAX = 2**15 - 1


class Week(enum.IntEnum):
    """Occurrence of a day of the week within a month."""

    LAST = 0
    FIRST = 1
    SECOND = 2
    THIRD = 3
    FOURTH = 4


class Dow(enum.IntEnum):
    """Day of the week, counting from Sunday."""

    SUNDAY = 1
    MONDAY = 2
    TUESDAY = 3
    WEDNESDAY = 4
    THURSDAY = 5
    FRIDAY = 6
    SATURDAY = 7


class Month(enum.IntEnum):
    """Month of the year."""

    JAN = 1
    FEB = 2
    MAR = 3
    APR = 4
    MAY = 5
    JUN = 6
    JUL = 7
    AUG = 8
    SEP = 9
    OCT = 10
    NOV = 11
    DEC = 12


def _check_range(field: str, value: int, low: int, high: int) -> None:
    """Raise InvalidRuleError if the value is not an int in [low, high]."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidRuleError(field, value, "must be an integer")
    if not low <= value <= high:
        raise InvalidRuleError(field, value, f"must be between {low} and {high}")


@dataclass(frozen=True)
class TimeChangeRule:
    """A rule for when a local offset regime goes into effect each year."""

    abbrev: str
    """Designation of the offset regime e.g. EDT, at most 5 ascii characters."""

    week: int
    """Occurrence of dow within the month, 1 to 4 or 0 for the last occurrence."""

    dow: int
    """Day of the week between 1 (Sunday) and 7 (Saturday)."""

    month: int
    """A month between 1 and 12."""

    hour: int
    """Hour of the local clock running before the transition, 0 to 23."""

    offset: int
    """Minutes added to UTC to determine local time, signed 16-bit."""

    def __post_init__(self) -> None:
        """Validate the rule fields."""
        if not isinstance(self.abbrev, str):
            raise InvalidRuleError("abbrev", self.abbrev, "must be a string")
        if len(self.abbrev) > ABBREV_MAX_LEN or not self.abbrev.isascii():
            raise InvalidRuleError(
                "abbrev", self.abbrev, f"must be at most {ABBREV_MAX_LEN} ascii characters"
            )
        if "\x00" in self.abbrev:
            raise InvalidRuleError("abbrev", self.abbrev, "must not contain NUL characters")
        _check_range("week", self.week, Week.LAST, Week.FOURTH)
        _check_range("dow", self.dow, Dow.SUNDAY, Dow.SATURDAY)
        _check_range("month", self.month, Month.JAN, Month.DEC)
        _check_range("hour", self.hour, 0, 23)
        _check_range("offset", self.offset, _OFFSET_MIN, _OFFSET_MAX)

    @property
    def utc_offset(self) -> datetime.timedelta:
        """Return the offset from UTC as a timedelta."""
        return datetime.timedelta(minutes=self.offset)

    def as_rrule(self, dtstart: datetime.datetime | None = None) -> rrule.rrule:
        """Return a yearly recurrence rule for the local transition times."""
        if dtstart:
            dtstart = dtstart.replace(hour=self.hour, minute=0, second=0, microsecond=0)
        return rrule.rrule(
            freq=rrule.YEARLY,
            bymonth=self.month,
            byweekday=self._rrule_byday(self._rrule_week_of_month),
            dtstart=dtstart,
        )

    @property
    def rrule_str(self) -> str:
        """Return a recurrence rule string for this time change rule."""
        return ";".join(
            [
                "FREQ=YEARLY",
                f"BYMONTH={self.month}",
                f"BYDAY={self._rrule_week_of_month}{self._rrule_byday}",
            ]
        )

    @property
    def _rrule_byday(self) -> rrule.weekday:
        """Return the dateutil weekday for this rule based on dow."""
        return rrule.weekdays[(self.dow - 2) % 7]

    @property
    def _rrule_week_of_month(self) -> int:
        """Return the byday modifier for the week of the month."""
        if self.week == Week.LAST:
            return -1
        return self.week


class RulePair(NamedTuple):
    """The daylight saving and standard time rules for a timezone."""

    dst: TimeChangeRule
    """Describes when daylight saving time starts."""

    std: TimeChangeRule
    """Describes when standard time starts."""
