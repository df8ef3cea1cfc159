"""Resolve a time change rule to the instant it takes effect in a given year."""

from __future__ import annotations

from .calendar import SECS_PER_DAY, UTC_CALENDAR, CalendarProvider
from .rule import TimeChangeRule, Week

__all__ = ["resolve"]


def resolve(
    rule: TimeChangeRule, year: int, calendar: CalendarProvider = UTC_CALENDAR
) -> int:
    """Return the local instant the rule goes into effect in the year.

    A "last" rule is evaluated as the first occurrence in the following
    month, then backed up a week, so every rule shape is handled the same
    way including a last occurrence in December.
    """
    month = rule.month
    week = rule.week
    if week == Week.LAST:
        month += 1
        if month > 12:
            month = 1
            year += 1
        week = Week.FIRST

    # First day of the month, or first day of the next month for "last" rules
    instant = calendar.compose(year, month, 1, rule.hour, 0, 0)
    days = 7 * (week - 1) + (rule.dow - calendar.weekday_of(instant) + 7) % 7
    instant += days * SECS_PER_DAY
    if rule.week == Week.LAST:
        instant -= 7 * SECS_PER_DAY
    return instant
