"""Range utilities for ackee-summary.

This module centralizes the time windows understood by the Ackee API.
Keeping it in the domain layer allows the settings, the client and the CLI
to share a single source of truth without circular imports.
"""

from __future__ import annotations

from enum import Enum


class RangeInput(str, Enum):
    """Values of the GraphQL `Range` enum accepted by Ackee."""

    LAST_24_HOURS = "LAST_24_HOURS"
    LAST_7_DAYS = "LAST_7_DAYS"
    LAST_30_DAYS = "LAST_30_DAYS"
    LAST_6_MONTHS = "LAST_6_MONTHS"

    @classmethod
    def default(cls) -> "RangeInput":
        """Return the default range used across the application."""

        return cls.LAST_7_DAYS

    @property
    def days(self) -> int:
        """Length of the daily views series that matches this window."""

        return _RANGE_DAYS[self]

    def label(self) -> str:
        """Human readable label for tables and logging."""

        return self.value.replace("_", " ").lower()


_RANGE_DAYS: dict[RangeInput, int] = {
    RangeInput.LAST_24_HOURS: 1,
    RangeInput.LAST_7_DAYS: 7,
    RangeInput.LAST_30_DAYS: 30,
    RangeInput.LAST_6_MONTHS: 180,
}


class EventListType(str, Enum):
    """Aggregation applied to event values in `statistics.list`."""

    TOTAL = "TOTAL"
    AVERAGE = "AVERAGE"
