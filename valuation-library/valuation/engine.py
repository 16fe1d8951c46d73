"""
Calculation engine: computes measures for trades given scenario market data.

Design intent:
- Trades/products are **data only** (no market access, no pricing methods).
- This engine uses a **registry of function groups** keyed by trade type, each
  mapping measures to function configs. Dispatch is two dict lookups:
  TradeType -> FunctionGroup -> Measure -> FunctionConfig.
- Every calculation is two-phase: the function declares its requirements,
  the engine checks each scenario's snapshot satisfies them, then executes.
- The engine holds no global state: build one with `create_default_engine()`
  (or register your own groups) and pass it to whoever needs it.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

from valuation.currency import Currency
from valuation.errors import ValuationError
from valuation.functions.base import FunctionConfig
from valuation.functions.group import FunctionGroup
from valuation.interfaces import Trade
from valuation.market.requirements import FunctionRequirements
from valuation.market.snapshot import ScenarioMarketData
from valuation.measure import Measure
from valuation.products.trade import TradeType
from valuation.result import ResultAggregator, ScenarioResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalculationResult:
    """
    Outcome of one (trade, measure) combination in a batch run.

    Exactly one of three states: `value` set (success), `error` set (failure
    isolated to this combination), or neither (measure not supported).
    """

    trade: Any
    measure: Measure
    value: Optional[ScenarioResult[Any]] = None
    error: Optional[Exception] = None

    @property
    def is_supported(self) -> bool:
        return self.value is not None or self.error is not None

    @property
    def is_success(self) -> bool:
        return self.value is not None


class CalculationEngine:
    """
    Registry-based calculation engine.

    Function groups are registered once, before the engine is shared, and are
    read-only afterwards; lookups and calculations need no locking.
    """

    def __init__(
        self,
        aggregator: ResultAggregator | None = None,
        strict_requirements: bool = True,
        max_workers: int = 1,
    ) -> None:
        self._groups: dict[TradeType, FunctionGroup[Any]] = {}
        self._aggregator = aggregator or ResultAggregator()
        self._strict = strict_requirements
        self._max_workers = max(1, max_workers)

    def register(self, group: FunctionGroup[Any]) -> None:
        """Register the function group for its trade type.

        One group per trade type: registering a second raises ValueError.
        """
        if group.trade_type in self._groups:
            raise ValueError(
                f"A function group is already registered for {group.trade_type}: "
                f"{self._groups[group.trade_type].name}"
            )
        self._groups[group.trade_type] = group

    @property
    def trade_types(self) -> frozenset[TradeType]:
        return frozenset(self._groups)

    def function_group(self, trade: Trade) -> Optional[FunctionGroup[Any]]:
        return self._groups.get(trade.trade_type)

    def configured_measures(self, trade: Trade) -> frozenset[Measure]:
        """Measures that can be calculated for `trade`; empty for unknown trade types."""
        group = self.function_group(trade)
        if group is None:
            return frozenset()
        return group.configured_measures(trade)

    def function_config(self, trade: Trade, measure: Measure) -> Optional[FunctionConfig[Any]]:
        """Config computing `measure` for `trade`, or None when unsupported."""
        group = self.function_group(trade)
        if group is None:
            logger.debug("No function group registered for %s", trade.trade_type)
            return None
        return group.function_config(trade, measure)

    def requirements(
        self,
        trade: Trade,
        measure: Measure,
        reporting_currency: Currency | None = None,
    ) -> Optional[FunctionRequirements]:
        """
        Market data needed to calculate and report `measure` for `trade`.

        Includes the FX rates needed to convert into the reporting currency
        (explicit, or the function's default). None when unsupported.
        """
        config = self.function_config(trade, measure)
        if config is None:
            return None
        function = config.create_function()
        reqs = function.requirements(trade)
        currency = reporting_currency or function.default_reporting_currency(trade)
        if currency is not None:
            reqs = reqs.with_fx_rates(currency)
        return reqs

    def calculate(
        self,
        trade: Trade,
        measure: Measure,
        market: ScenarioMarketData,
        reporting_currency: Currency | None = None,
        convert: bool = True,
    ) -> Optional[ScenarioResult[Any]]:
        """
        Calculate `measure` for `trade` in every scenario of `market`.

        Returns None if the measure is not supported for the trade. Raises
        MissingMarketDataError if a scenario lacks a declared key, and
        MissingFxRateError if conversion needs an absent rate. With
        `convert=False` results are packaged but left in their own currencies.
        """
        config = self.function_config(trade, measure)
        if config is None:
            return None
        first = config.create_function()
        reqs = first.requirements(trade)
        currency = reporting_currency or first.default_reporting_currency(trade)
        logger.debug(
            "Calculating %s for %s over %d scenario(s), reporting in %s",
            measure, trade.trade_type, market.scenario_count, currency,
        )

        def run(index: int) -> Any:
            # Each scenario gets its own function instance.
            function = first if index == 0 else config.create_function()
            snapshot = market.scenario(index)
            if self._strict:
                snapshot = snapshot.filtered(reqs)
            return function.execute(trade, snapshot)

        results = self._run_scenarios(run, market.scenario_count)
        return self._aggregator.aggregate(results, market, currency if convert else None)

    def calculate_all(
        self,
        trades: Iterable[Trade],
        measures: Iterable[Measure],
        market: ScenarioMarketData,
        reporting_currency: Currency | None = None,
    ) -> list[CalculationResult]:
        """
        Calculate every measure for every trade, isolating failures.

        A missing curve or FX rate, or a trade the pricer rejects, fails only its
        own combination; the error is logged and recorded, and the remaining
        combinations still run.
        """
        measure_list = sorted(set(measures))
        results: list[CalculationResult] = []
        for trade in trades:
            for measure in measure_list:
                try:
                    value = self.calculate(trade, measure, market, reporting_currency)
                except (ValuationError, ValueError, ArithmeticError) as exc:
                    logger.warning(
                        "Calculation of %s for %s failed: %s", measure, trade.trade_type, exc
                    )
                    results.append(CalculationResult(trade, measure, error=exc))
                    continue
                results.append(CalculationResult(trade, measure, value=value))
        return results

    def _run_scenarios(self, run: Callable[[int], Any], count: int) -> list[Any]:
        if self._max_workers == 1 or count == 1:
            return [run(i) for i in range(count)]
        with ThreadPoolExecutor(max_workers=min(self._max_workers, count)) as pool:
            # map() yields in submission order.
            return list(pool.map(run, range(count)))


def create_default_engine(
    strict_requirements: bool = True, max_workers: int = 1
) -> CalculationEngine:
    """Factory for an engine with all built-in function groups registered."""
    from valuation.functions import fx_single_group, ibor_future_group, swap_group

    engine = CalculationEngine(strict_requirements=strict_requirements, max_workers=max_workers)
    engine.register(fx_single_group())
    engine.register(ibor_future_group())
    engine.register(swap_group())
    return engine
