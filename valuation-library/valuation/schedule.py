"""
Schedules of accrual periods consumed by pricing functions.

A `PeriodicSchedule` is built once, when the trade is constructed, and is
immutable thereafter. Pricers only rely on `size()`, `get_period(index)` and
iteration.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Iterator

from valuation.daycount import DayCount
from valuation.errors import InvalidScheduleError, ScheduleIndexError


@dataclass(frozen=True, order=True)
class SchedulePeriod:
    """
    One accrual period.

    Periods order naturally by start date (then end date). The unadjusted
    dates default to the adjusted ones when no business day adjustment applies.
    """

    start_date: date
    end_date: date
    unadjusted_start_date: date | None = field(default=None, compare=False)
    unadjusted_end_date: date | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.end_date <= self.start_date:
            raise ValueError(
                f"Period end date {self.end_date} must be after start date {self.start_date}"
            )
        if self.unadjusted_start_date is None:
            object.__setattr__(self, "unadjusted_start_date", self.start_date)
        if self.unadjusted_end_date is None:
            object.__setattr__(self, "unadjusted_end_date", self.end_date)

    def year_fraction(self, day_count: DayCount) -> float:
        return day_count.year_fraction(self.start_date, self.end_date)

    def contains(self, d: date) -> bool:
        return self.start_date <= d < self.end_date


@dataclass(frozen=True)
class PeriodicSchedule:
    """
    A complete schedule of periods, ordered from earliest to latest.

    There is always at least one period. Periods are intended to be adjacent,
    but each is independent and gaps or overlaps are not rejected.
    """

    periods: tuple[SchedulePeriod, ...]

    def __post_init__(self) -> None:
        if not self.periods:
            raise InvalidScheduleError("Schedule must contain at least one period")
        object.__setattr__(self, "periods", tuple(sorted(self.periods)))

    @classmethod
    def of(cls, periods: Iterable[SchedulePeriod]) -> PeriodicSchedule:
        """Create from any collection of periods; they are sorted by start date."""
        return cls(tuple(periods))

    def size(self) -> int:
        return len(self.periods)

    def get_period(self, index: int) -> SchedulePeriod:
        """Period at zero-based `index`. Negative indexes are rejected, not wrapped."""
        if not 0 <= index < len(self.periods):
            raise ScheduleIndexError(index, len(self.periods))
        return self.periods[index]

    def __len__(self) -> int:
        return len(self.periods)

    def __iter__(self) -> Iterator[SchedulePeriod]:
        return iter(self.periods)

    @property
    def start_date(self) -> date:
        return self.periods[0].start_date

    @property
    def end_date(self) -> date:
        return self.periods[-1].end_date

    def is_adjacent(self) -> bool:
        """True if every period starts where the previous one ended."""
        return all(
            prev.end_date == nxt.start_date
            for prev, nxt in zip(self.periods, self.periods[1:])
        )
