"""
Result packaging: per-scenario results and conversion to a reporting currency.

Functions return raw results for one scenario. The engine collects them in
scenario order and hands them to `ResultAggregator`, which wraps them in a
`ScenarioResult` and, when a reporting currency is known, converts each one
using the FX rates of its own scenario.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Generic, Iterator, Sequence, TypeVar

from valuation.currency import Currency, CurrencyAmount, MultiCurrencyAmount
from valuation.interfaces import FxConvertible, FxRateProvider
from valuation.market.keys import MarketDataKey
from valuation.market.snapshot import ScenarioMarketData

logger = logging.getLogger(__name__)

V = TypeVar("V")


@dataclass(frozen=True)
class CurveSensitivity:
    """Sensitivity of a value to each parameter (pillar) of one curve, in one currency."""

    key: MarketDataKey
    currency: Currency
    parameter_times: tuple[float, ...]
    sensitivities: tuple[float, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameter_times", tuple(self.parameter_times))
        object.__setattr__(self, "sensitivities", tuple(self.sensitivities))
        if len(self.parameter_times) != len(self.sensitivities):
            raise ValueError("parameter_times and sensitivities must have the same length")

    def total(self) -> CurrencyAmount:
        return CurrencyAmount.of(self.currency, sum(self.sensitivities))

    def amounts(self) -> tuple[CurrencyAmount, ...]:
        return tuple(CurrencyAmount.of(self.currency, s) for s in self.sensitivities)

    def converted_to(self, currency: Currency, rates: FxRateProvider) -> CurveSensitivity:
        if currency == self.currency:
            return self
        rate = rates.fx_rate(self.currency, currency)
        return CurveSensitivity(
            self.key, currency, self.parameter_times, tuple(s * rate for s in self.sensitivities)
        )


@dataclass(frozen=True)
class CurveSensitivities:
    """Bucketed sensitivities across curves; one entry per (curve, currency)."""

    entries: tuple[CurveSensitivity, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "entries", tuple(sorted(self.entries, key=lambda e: (str(e.key), e.currency)))
        )

    @classmethod
    def empty(cls) -> CurveSensitivities:
        return cls(())

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[CurveSensitivity]:
        return iter(self.entries)

    def find(self, key: MarketDataKey, currency: Currency) -> CurveSensitivity | None:
        for entry in self.entries:
            if entry.key == key and entry.currency == currency:
                return entry
        return None

    def total(self) -> MultiCurrencyAmount:
        return MultiCurrencyAmount.total(e.total() for e in self.entries)

    def converted_to(self, currency: Currency, rates: FxRateProvider) -> CurveSensitivities:
        """Convert every entry, merging entries on the same curve once they share a currency."""
        merged: dict[MarketDataKey, CurveSensitivity] = {}
        for entry in self.entries:
            converted = entry.converted_to(currency, rates)
            existing = merged.get(entry.key)
            if existing is None:
                merged[entry.key] = converted
            else:
                merged[entry.key] = CurveSensitivity(
                    entry.key,
                    currency,
                    existing.parameter_times,
                    tuple(a + b for a, b in zip(existing.sensitivities, converted.sensitivities)),
                )
        return CurveSensitivities(tuple(merged.values()))


@dataclass(frozen=True)
class ScenarioResult(Generic[V]):
    """
    Results of one measure across scenarios, in scenario order.

    Never empty. `reporting_currency` is the currency used when the results
    are converted; None means the results are left as calculated.
    """

    values: tuple[V, ...]
    reporting_currency: Currency | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))
        if not self.values:
            raise ValueError("ScenarioResult must hold at least one scenario result")

    @classmethod
    def of(cls, values: Sequence[V], reporting_currency: Currency | None = None) -> ScenarioResult[V]:
        return cls(tuple(values), reporting_currency)

    @property
    def scenario_count(self) -> int:
        return len(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[V]:
        return iter(self.values)

    def __getitem__(self, index: int) -> V:
        if not 0 <= index < len(self.values):
            raise IndexError(
                f"Scenario index {index} out of range, must be 0 to {len(self.values) - 1}"
            )
        return self.values[index]

    def converted(
        self, market: ScenarioMarketData, currency: Currency | None = None
    ) -> ScenarioResult[Any]:
        """
        Convert every scenario value to `currency` (default: the reporting currency).

        Scenario i is converted with the FX rates of `market.scenario(i)`.
        Values that are not monetary (rates, spreads) are returned unchanged.
        """
        target = currency or self.reporting_currency
        if target is None:
            raise ValueError("no currency given and no reporting currency set")
        if market.scenario_count != len(self.values):
            raise ValueError(
                f"{len(self.values)} scenario results but {market.scenario_count} "
                "market data scenarios"
            )
        converted = [
            convert_value(value, target, market.scenario(i))
            for i, value in enumerate(self.values)
        ]
        return ScenarioResult(tuple(converted), target)


def convert_value(value: Any, currency: Currency, rates: FxRateProvider) -> Any:
    """
    Express one raw result in `currency`.

    A MultiCurrencyAmount collapses into a single CurrencyAmount; other FX
    convertible values convert in place; anything else passes through.
    Raises MissingFxRateError when a needed rate is unavailable.
    """
    if isinstance(value, FxConvertible):
        return value.converted_to(currency, rates)
    return value


class ResultAggregator:
    """Packages per-scenario results into a ScenarioResult, converting when asked."""

    def aggregate(
        self,
        results: Sequence[Any],
        market: ScenarioMarketData,
        reporting_currency: Currency | None = None,
    ) -> ScenarioResult[Any]:
        """
        Wrap `results` (scenario order) and convert them to `reporting_currency`.

        With no reporting currency the raw results are packaged unconverted.
        """
        if not results:
            raise ValueError("cannot aggregate an empty list of scenario results")
        if len(results) != market.scenario_count:
            raise ValueError(
                f"{len(results)} scenario results but {market.scenario_count} "
                "market data scenarios"
            )
        packaged = ScenarioResult.of(results, reporting_currency)
        if reporting_currency is None:
            return packaged
        logger.debug(
            "Converting %d scenario results to %s", len(results), reporting_currency
        )
        return packaged.converted(market)
