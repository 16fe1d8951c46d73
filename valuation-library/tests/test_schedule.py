"""Tests for SchedulePeriod and PeriodicSchedule."""

from datetime import date

import pytest

from valuation.daycount import DayCount
from valuation.errors import InvalidScheduleError, ScheduleIndexError
from valuation.schedule import PeriodicSchedule, SchedulePeriod

P1 = SchedulePeriod(date(2015, 1, 1), date(2015, 4, 1))
P2 = SchedulePeriod(date(2015, 4, 1), date(2015, 7, 1))
P3 = SchedulePeriod(date(2015, 7, 1), date(2015, 10, 1))


def test_schedule_sorts_periods() -> None:
    """Periods are ordered by start date whatever the input order."""
    schedule = PeriodicSchedule.of([P3, P1, P2])
    assert schedule.size() == 3
    assert schedule.get_period(0) == P1
    assert schedule.get_period(2) == P3
    assert list(schedule) == [P1, P2, P3]
    assert schedule.start_date == date(2015, 1, 1)
    assert schedule.end_date == date(2015, 10, 1)
    assert schedule.is_adjacent()


def test_empty_schedule_rejected() -> None:
    """A schedule needs at least one period."""
    with pytest.raises(InvalidScheduleError, match="at least one period"):
        PeriodicSchedule.of([])
    with pytest.raises(ValueError):
        PeriodicSchedule(())


def test_get_period_out_of_range() -> None:
    """Negative and too-large indexes are rejected, never wrapped."""
    schedule = PeriodicSchedule.of([P1, P2])
    with pytest.raises(ScheduleIndexError, match="must be 0 to 1"):
        schedule.get_period(2)
    with pytest.raises(IndexError):
        schedule.get_period(-1)


def test_gaps_accepted() -> None:
    """Non-adjacent periods are accepted but reported as such."""
    schedule = PeriodicSchedule.of([P1, P3])
    assert schedule.size() == 2
    assert not schedule.is_adjacent()


def test_period_validation_and_defaults() -> None:
    """End must follow start; unadjusted dates default to adjusted ones."""
    with pytest.raises(ValueError, match="must be after start"):
        SchedulePeriod(date(2015, 4, 1), date(2015, 4, 1))
    assert P1.unadjusted_start_date == P1.start_date
    assert P1.unadjusted_end_date == P1.end_date
    adjusted = SchedulePeriod(date(2015, 1, 2), date(2015, 4, 1), unadjusted_start_date=date(2015, 1, 1))
    assert adjusted.unadjusted_start_date == date(2015, 1, 1)


def test_period_year_fraction() -> None:
    """Year fraction of a period uses the given day count."""
    assert P1.year_fraction(DayCount.ACT_360) == pytest.approx(90 / 360)
    assert P1.year_fraction(DayCount.ACT_365F) == pytest.approx(90 / 365)
    assert P1.contains(date(2015, 1, 1))
    assert not P1.contains(date(2015, 4, 1))
