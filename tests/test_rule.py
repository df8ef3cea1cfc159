"""Tests for time change rules."""

import dataclasses
import datetime
from typing import Any

import pytest

from timechange.exceptions import InvalidRuleError, TimeChangeError
from timechange.rule import Dow, Month, RulePair, TimeChangeRule, Week

from conftest import CENTRAL_EUROPEAN, US_EASTERN


def test_rule_fields() -> None:
    """Test the fields of a rule using the enum values."""
    rule = US_EASTERN.dst
    assert rule.abbrev == "EDT"
    assert rule.week == 2
    assert rule.dow == 1
    assert rule.month == 3
    assert rule.hour == 2
    assert rule.offset == -240
    assert rule.utc_offset == datetime.timedelta(hours=-4)


def test_rule_is_immutable() -> None:
    """Test that a rule can't be modified after it is created."""
    rule = US_EASTERN.std
    with pytest.raises(dataclasses.FrozenInstanceError):
        rule.offset = 0  # type: ignore[misc]


def test_rule_pair() -> None:
    """Test the daylight saving time rule comes first in a pair."""
    dst, std = US_EASTERN
    assert dst.abbrev == "EDT"
    assert std.abbrev == "EST"
    assert RulePair(dst=dst, std=std) == US_EASTERN


@pytest.mark.parametrize(
    "values,field",
    [
        ({"week": 5}, "week"),
        ({"week": -1}, "week"),
        ({"dow": 0}, "dow"),
        ({"dow": 8}, "dow"),
        ({"month": 0}, "month"),
        ({"month": 13}, "month"),
        ({"hour": 24}, "hour"),
        ({"hour": -1}, "hour"),
        ({"offset": 32768}, "offset"),
        ({"offset": -32769}, "offset"),
        ({"offset": 1.5}, "offset"),
        ({"week": "2"}, "week"),
        ({"week": True}, "week"),
        ({"abbrev": "TOOLONG"}, "abbrev"),
        ({"abbrev": "MÉZ"}, "abbrev"),
        ({"abbrev": None}, "abbrev"),
        ({"abbrev": "A\x00B"}, "abbrev"),
    ],
)
def test_invalid_rule(values: dict[str, Any], field: str) -> None:
    """Test that out of range rule fields are rejected."""
    fields = {
        "abbrev": "EDT",
        "week": Week.SECOND,
        "dow": Dow.SUNDAY,
        "month": Month.MAR,
        "hour": 2,
        "offset": -240,
    }
    fields.update(values)
    with pytest.raises(InvalidRuleError, match=f"'{field}'") as exc_info:
        TimeChangeRule(**fields)
    assert exc_info.value.field == field
    assert exc_info.value.value == values[field]
    assert isinstance(exc_info.value, TimeChangeError)
    assert isinstance(exc_info.value, ValueError)


def test_offset_limits() -> None:
    """Test offsets at the limits of a signed 16-bit value."""
    assert TimeChangeRule("", 1, 1, 1, 0, -32768).offset == -32768
    assert TimeChangeRule("", 1, 1, 1, 0, 32767).offset == 32767


@pytest.mark.parametrize(
    "rule,expected",
    [
        (US_EASTERN.dst, "FREQ=YEARLY;BYMONTH=3;BYDAY=2SU"),
        (US_EASTERN.std, "FREQ=YEARLY;BYMONTH=11;BYDAY=1SU"),
        (CENTRAL_EUROPEAN.dst, "FREQ=YEARLY;BYMONTH=3;BYDAY=-1SU"),
        (TimeChangeRule("X", Week.FOURTH, Dow.SATURDAY, Month.JUN, 0, 0), "FREQ=YEARLY;BYMONTH=6;BYDAY=4SA"),
        (TimeChangeRule("X", Week.FIRST, Dow.MONDAY, Month.JAN, 0, 0), "FREQ=YEARLY;BYMONTH=1;BYDAY=1MO"),
    ],
)
def test_rrule_str(rule: TimeChangeRule, expected: str) -> None:
    """Test the recurrence rule representation of a rule."""
    assert rule.rrule_str == expected


def test_as_rrule() -> None:
    """Test expanding a rule as a recurrence."""
    rrule = US_EASTERN.dst.as_rrule(datetime.datetime(2022, 1, 1))
    assert list(rrule[:3]) == [
        datetime.datetime(2022, 3, 13, 2, 0, 0),
        datetime.datetime(2023, 3, 12, 2, 0, 0),
        datetime.datetime(2024, 3, 10, 2, 0, 0),
    ]

    rrule = CENTRAL_EUROPEAN.std.as_rrule(datetime.datetime(2022, 1, 1))
    assert list(rrule[:3]) == [
        datetime.datetime(2022, 10, 30, 3, 0, 0),
        datetime.datetime(2023, 10, 29, 3, 0, 0),
        datetime.datetime(2024, 10, 27, 3, 0, 0),
    ]
