"""Day count conventions used to turn dates into curve times."""

from __future__ import annotations

import logging
from datetime import date
from enum import Enum

logger = logging.getLogger(__name__)


class DayCount(str, Enum):
    """Supported day count conventions."""

    ACT_360 = "ACT/360"
    ACT_365F = "ACT/365F"

    def year_fraction(self, start: date, end: date) -> float:
        """
        Year fraction between two dates.

        The result is negative when `end` is before `start`; curves reject
        negative times, so callers decide how past dates are handled.
        """
        days = (end - start).days
        if days < 0:
            logger.debug("Negative year fraction for %s: %s -> %s", self.value, start, end)
        if self is DayCount.ACT_360:
            return days / 360.0
        return days / 365.0

    @classmethod
    def of(cls, name: str) -> DayCount:
        """Look up by value ('ACT/360') or member name ('ACT_360')."""
        key = name.strip().upper()
        for dc in cls:
            if key in (dc.value, dc.name):
                return dc
        raise ValueError(f"Unsupported day count convention: {name}")
