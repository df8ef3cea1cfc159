"""A `datetime.tzinfo` implementation backed by a pair of time change rules.

This allows rules based timezones to be used with the datetime module:

```python
import datetime

from timechange.rule import Dow, Month, TimeChangeRule, Week
from timechange.tzinfo import RuleTzInfo

tz = RuleTzInfo.from_rules(
    TimeChangeRule("CEST", Week.LAST, Dow.SUNDAY, Month.MAR, 2, 120),
    TimeChangeRule("CET", Week.LAST, Dow.SUNDAY, Month.OCT, 3, 60),
)
now = datetime.datetime.now(tz=tz)
```

Wall times are evaluated with the same policy as `Timezone.to_utc`, so a
repeated wall time is treated as the earlier occurrence unless `fold` is set.
`fromutc` sets `fold` on the later occurrence so conversions round trip.
Instants are computed with the Unix epoch of the timezone's `UtcCalendar`.
"""

from __future__ import annotations

import datetime

from .calendar import SECS_PER_MIN, UtcCalendar
from .rule import TimeChangeRule
from .timezone import Timezone

__all__ = ["RuleTzInfo"]

_ZERO = datetime.timedelta(0)


class RuleTzInfo(datetime.tzinfo):
    """An implementation of tzinfo using the rules of a Timezone."""

    def __init__(self, timezone: Timezone) -> None:
        """Initialize RuleTzInfo."""
        calendar = timezone.calendar
        if not isinstance(calendar, UtcCalendar):
            raise ValueError(
                f"RuleTzInfo requires a UtcCalendar but was {type(calendar).__name__}"
            )
        self._timezone = timezone
        self._calendar = calendar

    @classmethod
    def from_rules(cls, dst_rule: TimeChangeRule, std_rule: TimeChangeRule) -> RuleTzInfo:
        """Create a new instance of a RuleTzInfo."""
        return cls(Timezone(dst_rule, std_rule))

    @property
    def timezone(self) -> Timezone:
        """Return the timezone used for conversions."""
        return self._timezone

    def _is_repeated(self, local: int) -> bool:
        """Return True if the wall time occurs under both rules."""
        tz = self._timezone
        return tz.is_dst_utc(local - tz.dst_rule.offset * SECS_PER_MIN) and not tz.is_dst_utc(
            local - tz.std_rule.offset * SECS_PER_MIN
        )

    def _is_dst(self, dt: datetime.datetime) -> bool:
        local = self._calendar.from_datetime(dt)
        if dt.fold and self._is_repeated(local):
            # The later occurrence uses the rule with the smaller offset
            return self._timezone.dst_rule.offset < self._timezone.std_rule.offset
        return self._timezone.is_dst_local(local)

    def _rule(self, dt: datetime.datetime) -> TimeChangeRule:
        """Return the rule in effect for the wall time."""
        if self._is_dst(dt):
            return self._timezone.dst_rule
        return self._timezone.std_rule

    def utcoffset(self, dt: datetime.datetime | None) -> datetime.timedelta:
        """Return offset of local time from UTC, as a timedelta object."""
        if dt is None:
            return _ZERO
        return self._rule(dt).utc_offset

    def dst(self, dt: datetime.datetime | None) -> datetime.timedelta | None:
        """Return the daylight saving time (DST) adjustment, if applicable."""
        if dt is None:
            return None
        if self._is_dst(dt):
            return self._timezone.dst_rule.utc_offset - self._timezone.std_rule.utc_offset
        return _ZERO

    def tzname(self, dt: datetime.datetime | None) -> str | None:
        """Return the time zone name for the datetime."""
        if dt is None:
            return None
        return self._rule(dt).abbrev

    def fromutc(self, dt: datetime.datetime) -> datetime.datetime:
        """Convert a UTC datetime with this tzinfo attached to local time."""
        if dt.tzinfo is not self:
            raise ValueError("fromutc: dt.tzinfo is not self")
        utc = self._calendar.from_datetime(dt)
        local = self._timezone.to_local(utc)
        fold = 0
        if self._is_repeated(local) and self._timezone.is_dst_utc(utc) == (
            self._timezone.dst_rule.offset < self._timezone.std_rule.offset
        ):
            fold = 1
        return self._calendar.to_datetime(local).replace(
            microsecond=dt.microsecond, tzinfo=self, fold=fold
        )

    def __str__(self) -> str:
        """Return the string representation of the timezone."""
        return self._timezone.std_rule.abbrev

    def __repr__(self) -> str:
        """Return the string representation of the timezone."""
        return f"RuleTzInfo({self._timezone.dst_rule.abbrev}, {self._timezone.std_rule.abbrev})"
