"""
Convert between UTC and local time using daylight saving time change rules.

A timezone is described by two year independent rules, one for when daylight
saving time starts and one for when standard time starts. The instants the
offset changes are calculated on demand for the year of each conversion.
"""

__all__ = [
    "cache",
    "calendar",
    "config",
    "exceptions",
    "resolver",
    "rule",
    "store",
    "timezone",
    "tzinfo",
]
