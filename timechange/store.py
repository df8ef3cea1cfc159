"""Library for persisting a pair of time change rules as a fixed size blob.

Devices without a timezone database typically keep the configured rules in a
small non-volatile memory at a fixed address. The rules are written as two
fixed size records, daylight saving time first:

  - abbrev (6 bytes): NUL padded ascii designation
  - week (1 byte): Occurrence within the month, 0 for last
  - dow (1 byte): Day of the week, 1 for Sunday
  - month (1 byte): Month of the year
  - hour (1 byte): Hour of the transition
  - offset (2 bytes): Signed minutes added to UTC

The conversion code never depends on where the rules are stored; a
`RuleStore` only needs to load and save a `RulePair`.
"""

from __future__ import annotations

import logging
import os
import struct
from typing import Protocol

from .exceptions import InvalidRuleError, RuleStoreError
from .rule import RulePair, TimeChangeRule

__all__ = [
    "FileRuleStore",
    "MemoryRuleStore",
    "RULE_PAIR_SIZE",
    "RuleStore",
    "decode_rules",
    "encode_rules",
]

_LOGGER = logging.getLogger(__name__)

_RULE_STRUCT_FORMAT = "".join(
    [
        ">",  # Use standard size of packed value bytes
        "6s",  # abbrev (6 bytes)
        "4B",  # week, dow, month, hour (1 byte each)
        "h",  # offset (2 bytes)
    ]
)
RULE_SIZE = struct.calcsize(_RULE_STRUCT_FORMAT)
RULE_PAIR_SIZE = 2 * RULE_SIZE


def _encode_rule(rule: TimeChangeRule) -> bytes:
    return struct.pack(
        _RULE_STRUCT_FORMAT,
        rule.abbrev.encode("ascii"),
        rule.week,
        rule.dow,
        rule.month,
        rule.hour,
        rule.offset,
    )


def _decode_rule(data: bytes) -> TimeChangeRule:
    abbrev, week, dow, month, hour, offset = struct.unpack(_RULE_STRUCT_FORMAT, data)
    end = abbrev.find(b"\x00")
    if end != -1:
        abbrev = abbrev[:end]
    try:
        return TimeChangeRule(abbrev.decode("ascii"), week, dow, month, hour, offset)
    except UnicodeDecodeError as err:
        raise RuleStoreError(f"Stored rule abbreviation is not ascii: {abbrev!r}") from err
    except InvalidRuleError as err:
        raise RuleStoreError(f"Stored rule is invalid: {err}") from err


def encode_rules(rules: RulePair) -> bytes:
    """Serialize the daylight saving and standard time rules."""
    return _encode_rule(rules.dst) + _encode_rule(rules.std)


def decode_rules(data: bytes) -> RulePair:
    """Parse the daylight saving and standard time rules."""
    if len(data) != RULE_PAIR_SIZE:
        raise RuleStoreError(
            f"Stored rules must be {RULE_PAIR_SIZE} bytes but was {len(data)}"
        )
    return RulePair(
        dst=_decode_rule(data[:RULE_SIZE]), std=_decode_rule(data[RULE_SIZE:])
    )


class RuleStore(Protocol):
    """Storage for a pair of time change rules."""

    def load(self) -> RulePair:
        """Read the stored rules."""

    def save(self, rules: RulePair) -> None:
        """Write the rules."""


class MemoryRuleStore:
    """Stores the rules at a byte address of a memory image."""

    def __init__(self, image: bytearray, address: int = 0) -> None:
        """Initialize MemoryRuleStore."""
        if address < 0:
            raise ValueError(f"Address must not be negative: {address}")
        self._image = image
        self._address = address

    def load(self) -> RulePair:
        """Read the stored rules."""
        _LOGGER.debug("Loading time change rules from memory at %d", self._address)
        return decode_rules(
            bytes(self._image[self._address : self._address + RULE_PAIR_SIZE])
        )

    def save(self, rules: RulePair) -> None:
        """Write the rules."""
        _LOGGER.debug("Saving time change rules to memory at %d", self._address)
        if self._address + RULE_PAIR_SIZE > len(self._image):
            raise RuleStoreError(
                f"Memory of {len(self._image)} bytes can't hold rules at {self._address}"
            )
        self._image[self._address : self._address + RULE_PAIR_SIZE] = encode_rules(
            rules
        )


class FileRuleStore:
    """Stores the rules at a byte address of a file."""

    def __init__(self, path: str | os.PathLike[str], address: int = 0) -> None:
        """Initialize FileRuleStore."""
        if address < 0:
            raise ValueError(f"Address must not be negative: {address}")
        self._path = path
        self._address = address

    def load(self) -> RulePair:
        """Read the stored rules."""
        _LOGGER.debug("Loading time change rules from %s at %d", self._path, self._address)
        try:
            with open(self._path, "rb") as rules_file:
                rules_file.seek(self._address)
                data = rules_file.read(RULE_PAIR_SIZE)
        except OSError as err:
            raise RuleStoreError(f"Unable to read rules from {self._path}") from err
        return decode_rules(data)

    def save(self, rules: RulePair) -> None:
        """Write the rules."""
        _LOGGER.debug("Saving time change rules to %s at %d", self._path, self._address)
        data = encode_rules(rules)
        mode = "r+b" if os.path.exists(self._path) else "wb"
        try:
            with open(self._path, mode) as rules_file:
                rules_file.seek(self._address)
                rules_file.write(data)
        except OSError as err:
            raise RuleStoreError(f"Unable to write rules to {self._path}") from err
