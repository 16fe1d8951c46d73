"""
Market data values held by a snapshot.

Each value binds a date-agnostic Curve to a valuation date and day count, so
pricers can ask date-based questions ("discount factor to 2015-06-30").
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Iterator, Mapping

from valuation.currency import Currency
from valuation.daycount import DayCount
from valuation.errors import MissingMarketDataError
from valuation.index import IborIndex
from valuation.interfaces import Curve


@dataclass(frozen=True)
class DiscountFactors:
    """Discount factors for one currency, relative to `valuation_date`."""

    currency: Currency
    valuation_date: date
    curve: Curve
    day_count: DayCount = DayCount.ACT_360

    def relative_time(self, d: date) -> float:
        return self.day_count.year_fraction(self.valuation_date, d)

    def discount_factor(self, d: date) -> float:
        """Discount factor from `d` back to the valuation date. `d` must not be in the past."""
        if d < self.valuation_date:
            raise ValueError(
                f"Cannot discount from {d}, before valuation date {self.valuation_date}"
            )
        return self.curve.df(self.relative_time(d))

    @property
    def parameter_count(self) -> int:
        return self.curve.parameter_count

    def bumped(self, bump: float) -> DiscountFactors:
        return DiscountFactors(
            self.currency, self.valuation_date, self.curve.bumped(bump), self.day_count
        )

    def bumped_parameter(self, index: int, bump: float) -> DiscountFactors:
        return DiscountFactors(
            self.currency,
            self.valuation_date,
            self.curve.bumped_parameter(index, bump),
            self.day_count,
        )


@dataclass(frozen=True)
class IborIndexRates:
    """
    Forward curve for an Ibor index.

    Forward rates are implied from the curve's discount factors over the index
    accrual period; fixings on or before the valuation date are read from a
    time series instead.
    """

    index: IborIndex
    valuation_date: date
    curve: Curve

    def _df(self, d: date) -> float:
        return self.curve.df(max(self.index.day_count.year_fraction(self.valuation_date, d), 0.0))

    def forward_rate(self, fixing_date: date) -> float:
        """Simple forward rate over the accrual period starting at `fixing_date`."""
        start = self.index.effective_date(fixing_date)
        end = self.index.maturity_date(fixing_date)
        accrual = self.index.year_fraction(fixing_date)
        return (self._df(start) / self._df(end) - 1.0) / accrual

    def rate(self, fixing_date: date, fixings: TimeSeries) -> float:
        """
        Rate for `fixing_date`.

        Past fixing dates must be present in `fixings`. On the valuation date a
        published fixing is used when available, otherwise the rate is forecast.
        """
        if fixing_date < self.valuation_date:
            return fixings.get(fixing_date)
        if fixing_date == self.valuation_date and fixing_date in fixings:
            return fixings.get(fixing_date)
        return self.forward_rate(fixing_date)

    @property
    def parameter_count(self) -> int:
        return self.curve.parameter_count

    def bumped(self, bump: float) -> IborIndexRates:
        return IborIndexRates(self.index, self.valuation_date, self.curve.bumped(bump))

    def bumped_parameter(self, index: int, bump: float) -> IborIndexRates:
        return IborIndexRates(
            self.index, self.valuation_date, self.curve.bumped_parameter(index, bump)
        )


@dataclass(frozen=True)
class TimeSeries:
    """Immutable date -> value series (e.g. historic index fixings)."""

    name: str
    points: Mapping[date, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "points", MappingProxyType(dict(sorted(self.points.items())))
        )

    def get(self, d: date) -> float:
        """Value on `d`. Raises MissingMarketDataError if there is no point."""
        try:
            return self.points[d]
        except KeyError:
            raise MissingMarketDataError(f"{self.name} on {d}", kind="time series point") from None

    def __contains__(self, d: object) -> bool:
        return d in self.points

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[date]:
        return iter(self.points)

    @property
    def latest_date(self) -> date | None:
        return max(self.points) if self.points else None
