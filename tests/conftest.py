"""Test fixtures."""

import datetime

import pytest

from timechange.calendar import UtcCalendar
from timechange.rule import Dow, Month, RulePair, TimeChangeRule, Week


def ts(
    year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0
) -> int:
    """Return the unix timestamp for the UTC calendar fields."""
    return int(
        datetime.datetime(
            year, month, day, hour, minute, second, tzinfo=datetime.timezone.utc
        ).timestamp()
    )


class CountingCalendar(UtcCalendar):
    """A calendar that counts how many instants were composed."""

    def __init__(self) -> None:
        self.compose_calls = 0

    def compose(
        self, year: int, month: int, day: int, hour: int, minute: int, second: int
    ) -> int:
        self.compose_calls += 1
        return super().compose(year, month, day, hour, minute, second)


US_EASTERN = RulePair(
    TimeChangeRule("EDT", Week.SECOND, Dow.SUNDAY, Month.MAR, 2, -240),
    TimeChangeRule("EST", Week.FIRST, Dow.SUNDAY, Month.NOV, 2, -300),
)
US_PACIFIC = RulePair(
    TimeChangeRule("PDT", Week.SECOND, Dow.SUNDAY, Month.MAR, 2, -420),
    TimeChangeRule("PST", Week.FIRST, Dow.SUNDAY, Month.NOV, 2, -480),
)
CENTRAL_EUROPEAN = RulePair(
    TimeChangeRule("CEST", Week.LAST, Dow.SUNDAY, Month.MAR, 2, 120),
    TimeChangeRule("CET", Week.LAST, Dow.SUNDAY, Month.OCT, 3, 60),
)
AUSTRALIA_EASTERN = RulePair(
    TimeChangeRule("AEDT", Week.FIRST, Dow.SUNDAY, Month.OCT, 2, 660),
    TimeChangeRule("AEST", Week.FIRST, Dow.SUNDAY, Month.APR, 3, 600),
)


@pytest.fixture(name="calendar")
def mock_calendar() -> CountingCalendar:
    """Fixture to create a calendar that counts rule resolutions."""
    return CountingCalendar()
