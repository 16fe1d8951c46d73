"""
Market data snapshot containers.

`MarketDataSnapshot` is intentionally a *simple* in-memory, point-in-time view
of the inputs needed by calculation functions:
- single values (discount factors, forward curves, FX rates), keyed by a typed key
- time series (historic fixings), keyed by a typed key
- the valuation date all relative times are measured from

We keep this class small so that:
- trades remain data-only
- calculation functions can be pure (snapshot in -> result out)

Lookups for absent keys fail with MissingMarketDataError; there are no defaults.
"""

from __future__ import annotations

import logging
from datetime import date
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Sequence

from valuation.currency import Currency, FxRate
from valuation.errors import MissingFxRateError, MissingMarketDataError
from valuation.index import IborIndex
from valuation.market.keys import (
    DiscountFactorsKey,
    FxRateKey,
    IborIndexRatesKey,
    IndexRateKey,
    MarketDataKey,
)
from valuation.market.requirements import FunctionRequirements
from valuation.market.values import DiscountFactors, IborIndexRates, TimeSeries

logger = logging.getLogger(__name__)


class MarketDataSnapshot:
    """
    Market snapshot for a single scenario.
    Immutable-style: with_value / with_time_series return new instances.
    """

    def __init__(
        self,
        valuation_date: date,
        values: Mapping[MarketDataKey, Any] | None = None,
        time_series: Mapping[MarketDataKey, TimeSeries] | None = None,
    ) -> None:
        # Own copies of the input dicts.
        self._valuation_date = valuation_date
        self._values: Mapping[MarketDataKey, Any] = MappingProxyType(dict(values or {}))
        self._time_series: Mapping[MarketDataKey, TimeSeries] = MappingProxyType(
            dict(time_series or {})
        )

    @property
    def valuation_date(self) -> date:
        return self._valuation_date

    @property
    def values(self) -> Mapping[MarketDataKey, Any]:
        return self._values

    @property
    def time_series_values(self) -> Mapping[MarketDataKey, TimeSeries]:
        return self._time_series

    def __repr__(self) -> str:
        return (
            f"MarketDataSnapshot(valuation_date={self._valuation_date}, "
            f"values={sorted(map(str, self._values))}, "
            f"time_series={sorted(map(str, self._time_series))})"
        )

    def get(self, key: MarketDataKey) -> Any:
        """Return the single value for `key`. Raises MissingMarketDataError if absent."""
        try:
            return self._values[key]
        except KeyError:
            raise MissingMarketDataError(key) from None

    def time_series(self, key: MarketDataKey) -> TimeSeries:
        """Return the time series for `key`. Raises MissingMarketDataError if absent."""
        try:
            return self._time_series[key]
        except KeyError:
            raise MissingMarketDataError(key, kind="time series") from None

    def contains(self, key: MarketDataKey) -> bool:
        return key in self._values or key in self._time_series

    def discount_factors(self, currency: Currency) -> DiscountFactors:
        return self.get(DiscountFactorsKey(currency))

    def ibor_index_rates(self, index: IborIndex) -> IborIndexRates:
        return self.get(IborIndexRatesKey(index))

    def fixings(self, index: IborIndex) -> TimeSeries:
        return self.time_series(IndexRateKey(index))

    def fx_rate(self, base: Currency, counter: Currency) -> float:
        """
        Counter units per one base unit.

        Uses FxRateKey(base, counter) or, failing that, the inverse of
        FxRateKey(counter, base). Raises MissingFxRateError otherwise; parity
        is only assumed for identical currencies.
        """
        if base == counter:
            return 1.0
        direct = self._values.get(FxRateKey(base, counter))
        if direct is not None:
            return _as_rate(direct, base, counter)
        inverse = self._values.get(FxRateKey(counter, base))
        if inverse is not None:
            return 1.0 / _as_rate(inverse, counter, base)
        raise MissingFxRateError(base, counter)

    def with_value(self, key: MarketDataKey, value: Any) -> MarketDataSnapshot:
        """Return a new snapshot with the given value updated/added."""
        new_values = dict(self._values)
        new_values[key] = value
        return MarketDataSnapshot(self._valuation_date, new_values, self._time_series)

    def with_time_series(self, key: MarketDataKey, series: TimeSeries) -> MarketDataSnapshot:
        """Return a new snapshot with the given time series updated/added."""
        new_series = dict(self._time_series)
        new_series[key] = series
        return MarketDataSnapshot(self._valuation_date, self._values, new_series)

    def missing(self, requirements: FunctionRequirements) -> list[MarketDataKey]:
        """Declared keys this snapshot cannot supply, in a stable order."""
        absent = [k for k in requirements.single_values if not self._has_value(k)]
        absent += [k for k in requirements.time_series if k not in self._time_series]
        return sorted(absent, key=str)

    def satisfies(self, requirements: FunctionRequirements) -> bool:
        return not self.missing(requirements)

    def filtered(self, requirements: FunctionRequirements) -> MarketDataSnapshot:
        """
        Return a snapshot holding exactly the declared keys.

        Raises MissingMarketDataError for the first absent key, so a function
        is never handed a snapshot that only partially satisfies it. A declared
        FX rate may be satisfied by its inverse.
        """
        absent = self.missing(requirements)
        if absent:
            logger.debug("Snapshot for %s is missing %s", self._valuation_date, absent)
            raise MissingMarketDataError(absent[0])
        values: dict[MarketDataKey, Any] = {}
        for key in requirements.single_values:
            if key in self._values:
                values[key] = self._values[key]
            else:
                inverse = key.inverse()  # only FX keys reach here, see _has_value
                values[inverse] = self._values[inverse]
        series = {key: self._time_series[key] for key in requirements.time_series}
        return MarketDataSnapshot(self._valuation_date, values, series)

    def _has_value(self, key: MarketDataKey) -> bool:
        if key in self._values:
            return True
        return isinstance(key, FxRateKey) and key.inverse() in self._values


def _as_rate(value: Any, base: Currency, counter: Currency) -> float:
    if isinstance(value, FxRate):
        return value.fx_rate(base, counter)
    return float(value)


class ScenarioMarketData:
    """
    Ordered, non-empty sequence of snapshots, one per scenario.

    Scenario `i` of every calculation is evaluated against `scenario(i)`.
    """

    def __init__(self, scenarios: Sequence[MarketDataSnapshot]) -> None:
        if not scenarios:
            raise ValueError("ScenarioMarketData requires at least one scenario")
        self._scenarios: tuple[MarketDataSnapshot, ...] = tuple(scenarios)

    @classmethod
    def of(cls, *scenarios: MarketDataSnapshot) -> ScenarioMarketData:
        return cls(scenarios)

    @classmethod
    def single(cls, snapshot: MarketDataSnapshot) -> ScenarioMarketData:
        return cls((snapshot,))

    def scenario(self, index: int) -> MarketDataSnapshot:
        if not 0 <= index < len(self._scenarios):
            raise IndexError(
                f"Scenario index {index} out of range, must be 0 to {len(self._scenarios) - 1}"
            )
        return self._scenarios[index]

    @property
    def scenario_count(self) -> int:
        return len(self._scenarios)

    def __len__(self) -> int:
        return len(self._scenarios)

    def __iter__(self) -> Iterator[MarketDataSnapshot]:
        return iter(self._scenarios)

    def __getitem__(self, index: int) -> MarketDataSnapshot:
        return self.scenario(index)
