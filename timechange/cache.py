"""Cache of the time change instants for a single year.

Converting many instants from the same year is the common case, so the
resolved transitions are kept for the most recent year and only recomputed
when a query falls in a different year.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .calendar import SECS_PER_MIN, UTC_CALENDAR, CalendarProvider
from .resolver import resolve
from .rule import TimeChangeRule

__all__ = [
    "TransitionCache",
    "Transitions",
]

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transitions:
    """The daylight saving and standard time change instants for a year."""

    year: int
    """The calendar year the rules were resolved for."""

    dst_utc: int
    """UTC instant daylight saving time starts."""

    std_utc: int
    """UTC instant standard time starts."""

    dst_local: int
    """Local instant daylight saving time starts, on the standard time clock."""

    std_local: int
    """Local instant standard time starts, on the daylight saving time clock."""


class TransitionCache:
    """Holds the rules and the transition instants for the cached year."""

    def __init__(
        self,
        dst_rule: TimeChangeRule,
        std_rule: TimeChangeRule,
        calendar: CalendarProvider = UTC_CALENDAR,
    ) -> None:
        """Initialize TransitionCache with nothing cached."""
        self._calendar = calendar
        self._dst_rule = dst_rule
        self._std_rule = std_rule
        self._transitions: Transitions | None = None

    @property
    def dst_rule(self) -> TimeChangeRule:
        """Return the rule for when daylight saving time starts."""
        return self._dst_rule

    @property
    def std_rule(self) -> TimeChangeRule:
        """Return the rule for when standard time starts."""
        return self._std_rule

    @property
    def year(self) -> int | None:
        """Return the cached year or None when nothing is cached."""
        if self._transitions is None:
            return None
        return self._transitions.year

    def set_rules(self, dst_rule: TimeChangeRule, std_rule: TimeChangeRule) -> None:
        """Replace both rules and discard the cached transitions."""
        self._dst_rule = dst_rule
        self._std_rule = std_rule
        self.invalidate()

    def invalidate(self) -> None:
        """Force the transitions to be recomputed on the next lookup."""
        self._transitions = None

    def refresh(self, year: int) -> Transitions:
        """Recompute the transition instants for the year."""
        dst_local = resolve(self._dst_rule, year, self._calendar)
        std_local = resolve(self._std_rule, year, self._calendar)
        # Each transition happens on the clock in effect before it, so daylight
        # saving time starts on standard time and standard time starts on
        # daylight saving time.
        self._transitions = Transitions(
            year=year,
            dst_utc=dst_local - self._std_rule.offset * SECS_PER_MIN,
            std_utc=std_local - self._dst_rule.offset * SECS_PER_MIN,
            dst_local=dst_local,
            std_local=std_local,
        )
        _LOGGER.debug("Calculated time changes for %s: %s", year, self._transitions)
        return self._transitions

    def ensure(self, year: int) -> Transitions:
        """Return the transitions for the year, recomputing if not cached."""
        if self._transitions is None or self._transitions.year != year:
            return self.refresh(year)
        return self._transitions
