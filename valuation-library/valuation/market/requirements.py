"""Declarative market data requirements returned by calculation functions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from valuation.currency import Currency
from valuation.market.keys import FxRateKey, MarketDataKey


@dataclass(frozen=True)
class FunctionRequirements:
    """
    The market data a function needs before it can execute.

    - `single_values`: keys resolved to one value each (curves, FX rates).
    - `time_series`: keys resolved to a TimeSeries (historic fixings).
    - `output_currencies`: currencies the raw result may be denominated in;
      the engine uses them to add the FX rates needed for reporting.
    """

    single_values: frozenset[MarketDataKey] = frozenset()
    time_series: frozenset[MarketDataKey] = frozenset()
    output_currencies: frozenset[Currency] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "single_values", frozenset(self.single_values))
        object.__setattr__(self, "time_series", frozenset(self.time_series))
        object.__setattr__(self, "output_currencies", frozenset(self.output_currencies))

    @classmethod
    def empty(cls) -> FunctionRequirements:
        return cls()

    @classmethod
    def of(
        cls,
        single_values: Iterable[MarketDataKey] = (),
        time_series: Iterable[MarketDataKey] = (),
        output_currencies: Iterable[Currency] = (),
    ) -> FunctionRequirements:
        return cls(
            frozenset(single_values), frozenset(time_series), frozenset(output_currencies)
        )

    @property
    def all_keys(self) -> frozenset[MarketDataKey]:
        return self.single_values | self.time_series

    def union(self, other: FunctionRequirements) -> FunctionRequirements:
        return FunctionRequirements(
            self.single_values | other.single_values,
            self.time_series | other.time_series,
            self.output_currencies | other.output_currencies,
        )

    def __or__(self, other: FunctionRequirements) -> FunctionRequirements:
        return self.union(other)

    def with_fx_rates(self, reporting_currency: Currency) -> FunctionRequirements:
        """Add the FX rates needed to convert every output currency to `reporting_currency`."""
        fx_keys = {
            FxRateKey(ccy, reporting_currency)
            for ccy in self.output_currencies
            if ccy != reporting_currency
        }
        return FunctionRequirements(
            self.single_values | fx_keys, self.time_series, self.output_currencies
        )
