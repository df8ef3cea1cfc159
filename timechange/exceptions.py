"""Exceptions for timechange library."""

from typing import Any


class TimeChangeError(Exception):
    """Base exception for all timechange errors."""


class InvalidRuleError(TimeChangeError, ValueError):
    """Exception raised when a time change rule has an out of range field.

    The 'field' attribute names the offending rule field and 'value' holds
    the rejected value so callers can report which part of a rule is wrong.
    """

    def __init__(self, field: str, value: Any, reason: str) -> None:
        """Initialize the InvalidRuleError for a single field."""
        super().__init__(f"Invalid time change rule field '{field}' ({value!r}): {reason}")
        self.field = field
        self.value = value


class RuleStoreError(TimeChangeError):
    """Exception thrown by a RuleStore when persisted rules can't be used."""
