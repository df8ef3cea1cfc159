"""Convert instants between UTC and local time using a pair of time change rules.

A `Timezone` is created from the rule for when daylight saving time starts
and the rule for when standard time starts. The transition instants are
resolved lazily for the year of each query and cached so that repeated
conversions within a year are cheap.

```python
from timechange.rule import Dow, Month, TimeChangeRule, Week
from timechange.timezone import Timezone

tz = Timezone(
    TimeChangeRule("EDT", Week.SECOND, Dow.SUNDAY, Month.MAR, 2, -240),
    TimeChangeRule("EST", Week.FIRST, Dow.SUNDAY, Month.NOV, 2, -300),
)
local = tz.to_local(1720000000)
```

Converting local time to UTC is ambiguous around the transitions. When
daylight saving time starts, one hour of local time never happens and
passing such a value returns an incorrect UTC time. When standard time
starts, one hour of local time happens twice and such a value is always
treated as the earlier time, before the transition.

A `Timezone` is not thread safe; callers sharing one across threads must
serialize access.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from .cache import TransitionCache, Transitions
from .calendar import SECS_PER_MIN, UTC_CALENDAR, CalendarProvider
from .rule import RulePair, TimeChangeRule
from .store import RuleStore

__all__ = [
    "AppliedRule",
    "RuleKind",
    "Timezone",
]

_LOGGER = logging.getLogger(__name__)


class RuleKind(str, enum.Enum):
    """The offset regime used for a conversion."""

    DST = "DST"
    STANDARD = "STANDARD"

    def __str__(self) -> str:
        """Return string representation."""
        return self.value


@dataclass(frozen=True)
class AppliedRule:
    """The rule used to convert an instant to local time."""

    kind: RuleKind
    """Whether daylight saving or standard time was applied."""

    rule: TimeChangeRule
    """The time change rule that was applied."""

    @property
    def offset(self) -> int:
        """Minutes added to UTC for the conversion."""
        return self.rule.offset

    @property
    def abbrev(self) -> str:
        """Return the designation of the applied rule."""
        return self.rule.abbrev


def _in_dst(instant: int, dst: int, std: int) -> bool:
    """Return True if the instant is in the DST interval of a single domain."""
    if std == dst:
        # daylight saving time not observed
        return False
    if std > dst:
        # northern hemisphere
        return dst <= instant < std
    # southern hemisphere
    return not std <= instant < dst


class Timezone:
    """Local time described by daylight saving and standard time rules."""

    def __init__(
        self,
        dst_rule: TimeChangeRule,
        std_rule: TimeChangeRule,
        calendar: CalendarProvider | None = None,
    ) -> None:
        """Initialize Timezone."""
        self._calendar = calendar or UTC_CALENDAR
        self._cache = TransitionCache(dst_rule, std_rule, self._calendar)

    @classmethod
    def from_rules(
        cls, rules: RulePair, calendar: CalendarProvider | None = None
    ) -> Timezone:
        """Create a Timezone from a pair of rules."""
        return cls(rules.dst, rules.std, calendar)

    @classmethod
    def from_store(
        cls, store: RuleStore, calendar: CalendarProvider | None = None
    ) -> Timezone:
        """Create a Timezone from rules previously saved in a store."""
        return cls.from_rules(store.load(), calendar)

    def save(self, store: RuleStore) -> None:
        """Write the current rules to the store."""
        store.save(self.export_rules())

    @property
    def dst_rule(self) -> TimeChangeRule:
        """Return the rule for when daylight saving time starts."""
        return self._cache.dst_rule

    @property
    def std_rule(self) -> TimeChangeRule:
        """Return the rule for when standard time starts."""
        return self._cache.std_rule

    @property
    def calendar(self) -> CalendarProvider:
        """Return the calendar used to resolve the rules."""
        return self._calendar

    def _transitions_at(self, instant: int) -> Transitions:
        return self._cache.ensure(self._calendar.year_of(instant))

    def transitions(self, year: int) -> Transitions:
        """Return the transition instants for the year."""
        return self._cache.ensure(year)

    def is_dst_utc(self, utc: int) -> bool:
        """Return True if the UTC instant is within daylight saving time."""
        transitions = self._transitions_at(utc)
        return _in_dst(utc, transitions.dst_utc, transitions.std_utc)

    def is_dst_local(self, local: int) -> bool:
        """Return True if the local instant is within daylight saving time."""
        transitions = self._transitions_at(local)
        return _in_dst(local, transitions.dst_local, transitions.std_local)

    def _applied(self, is_dst: bool) -> AppliedRule:
        if is_dst:
            return AppliedRule(RuleKind.DST, self._cache.dst_rule)
        return AppliedRule(RuleKind.STANDARD, self._cache.std_rule)

    def to_local(self, utc: int) -> int:
        """Convert the UTC instant to local time."""
        local, _ = self.to_local_with_rule(utc)
        return local

    def to_local_with_rule(self, utc: int) -> tuple[int, AppliedRule]:
        """Convert the UTC instant to local time and return the rule applied."""
        applied = self._applied(self.is_dst_utc(utc))
        return utc + applied.offset * SECS_PER_MIN, applied

    def to_utc(self, local: int) -> int:
        """Convert the local instant to UTC.

        Local times within the hour skipped when daylight saving time starts
        return an incorrect result and local times within the hour repeated
        when standard time starts are treated as the earlier occurrence.
        """
        applied = self._applied(self.is_dst_local(local))
        return local - applied.offset * SECS_PER_MIN

    def abbrev_at_utc(self, utc: int) -> str:
        """Return the designation of the rule in effect at the UTC instant."""
        return self._applied(self.is_dst_utc(utc)).abbrev

    def configure(self, dst_rule: TimeChangeRule, std_rule: TimeChangeRule) -> None:
        """Replace the time change rules, recalculating on the next conversion."""
        _LOGGER.debug("Configuring time change rules: %s, %s", dst_rule, std_rule)
        self._cache.set_rules(dst_rule, std_rule)

    def export_rules(self) -> RulePair:
        """Return the current pair of time change rules."""
        return RulePair(self._cache.dst_rule, self._cache.std_rule)

    def import_rules(self, rules: RulePair) -> None:
        """Replace the time change rules from a pair of rules."""
        self.configure(rules.dst, rules.std)

    def __repr__(self) -> str:
        """Return the string representation of the timezone."""
        return f"Timezone({self.dst_rule.abbrev}, {self.std_rule.abbrev})"
