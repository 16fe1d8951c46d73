"""Ibor-style rate indices (e.g. GBP-LIBOR-3M)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from dateutil.relativedelta import relativedelta

from valuation.currency import Currency
from valuation.daycount import DayCount


@dataclass(frozen=True, order=True)
class IborIndex:
    """
    A term rate index fixing on a date and accruing over `tenor_months`.

    The accrual period starts on the fixing date; holiday calendars and spot
    lags are not modelled.
    """

    name: str
    currency: Currency = field(compare=False)
    tenor_months: int = field(compare=False)
    day_count: DayCount = field(default=DayCount.ACT_360, compare=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("index name must not be empty")
        if self.tenor_months <= 0:
            raise ValueError("tenor_months must be positive")

    def effective_date(self, fixing_date: date) -> date:
        return fixing_date

    def maturity_date(self, fixing_date: date) -> date:
        return self.effective_date(fixing_date) + relativedelta(months=self.tenor_months)

    def year_fraction(self, fixing_date: date) -> float:
        return self.day_count.year_fraction(
            self.effective_date(fixing_date), self.maturity_date(fixing_date)
        )

    def __str__(self) -> str:
        return self.name
