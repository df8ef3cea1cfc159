"""Configuration for a timezone as a pair of time change rules.

A configuration can be read from a json document such as:

```json
{
  "name": "US Eastern",
  "dst": {"abbrev": "EDT", "week": 2, "dow": 1, "month": 3, "hour": 2, "offset": -240},
  "std": {"abbrev": "EST", "week": 1, "dow": 1, "month": 11, "hour": 2, "offset": -300}
}
```

Rule fields are validated with the same checks as `TimeChangeRule` and
errors are reported as a pydantic `ValidationError`.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict

from .calendar import CalendarProvider
from .rule import RulePair, TimeChangeRule
from .timezone import Timezone

__all__ = ["TimezoneConfig"]

_LOGGER = logging.getLogger(__name__)


class TimezoneConfig(BaseModel):
    """A named pair of daylight saving and standard time rules."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    """A human readable name for the timezone."""

    dst: TimeChangeRule
    """Describes when daylight saving time starts."""

    std: TimeChangeRule
    """Describes when standard time starts."""

    @classmethod
    def from_rules(cls, rules: RulePair, name: str | None = None) -> TimezoneConfig:
        """Create a configuration from a pair of rules."""
        return cls(name=name, dst=rules.dst, std=rules.std)

    @classmethod
    def from_json(cls, content: str) -> TimezoneConfig:
        """Parse a json configuration."""
        config = cls.model_validate_json(content)
        _LOGGER.debug("Loaded timezone configuration: %s", config.name)
        return config

    def to_json(self) -> str:
        """Serialize the configuration as json."""
        return self.model_dump_json(exclude_none=True)

    def rules(self) -> RulePair:
        """Return the configured pair of rules."""
        return RulePair(self.dst, self.std)

    def timezone(self, calendar: CalendarProvider | None = None) -> Timezone:
        """Create a Timezone for the configured rules."""
        return Timezone(self.dst, self.std, calendar)
