"""Tests for extensibility: custom function groups, custom curves, risk measure composability."""

from dataclasses import dataclass, field
from datetime import date
from typing import ClassVar

import pytest

from valuation.currency import GBP, USD, CurrencyAmount
from valuation.curves import ZeroRateCurve
from valuation.engine import CalculationEngine
from valuation.functions.base import CalculationFunction
from valuation.functions.group import DefaultFunctionGroup
from valuation.market import (
    DiscountFactors,
    DiscountFactorsKey,
    FunctionRequirements,
    MarketDataSnapshot,
    ScenarioMarketData,
)
from valuation.measure import Measure
from valuation.pricers import SwapPricer
from valuation.products import FixedFloatSwap, SwapTrade, TradeInfo, TradeType
from valuation.risk import PV01Bucketed, PV01Parallel
from valuation.schedule import PeriodicSchedule, SchedulePeriod

VAL_DATE = date(2015, 1, 1)


@dataclass(frozen=True)
class CashTrade:
    """Minimal trade for testing: a cash amount paid on a date."""

    trade_type: ClassVar[TradeType] = TradeType.SWAP

    amount: CurrencyAmount
    payment_date: date
    info: TradeInfo = field(default_factory=TradeInfo)


class CashPvFunction(CalculationFunction[CashTrade, CurrencyAmount]):
    def requirements(self, trade: CashTrade) -> FunctionRequirements:
        return FunctionRequirements.of(
            single_values=[DiscountFactorsKey(trade.amount.currency)],
            output_currencies=[trade.amount.currency],
        )

    def execute(self, trade: CashTrade, market: MarketDataSnapshot) -> CurrencyAmount:
        dfs = market.discount_factors(trade.amount.currency)
        return trade.amount.multiplied_by(dfs.discount_factor(trade.payment_date))


def _market(curve) -> ScenarioMarketData:
    return ScenarioMarketData.single(
        MarketDataSnapshot(VAL_DATE, {DiscountFactorsKey(GBP): DiscountFactors(GBP, VAL_DATE, curve)})
    )


def test_custom_function_group_registration() -> None:
    """Custom groups can be registered with an engine and used for dispatch."""
    group = (
        DefaultFunctionGroup.builder("Cash", TradeType.SWAP)
        .add_function(Measure.PRESENT_VALUE, CashPvFunction)
        .build()
    )
    engine = CalculationEngine()
    engine.register(group)

    trade = CashTrade(CurrencyAmount.of(GBP, 100.0), date(2016, 1, 1))
    curve = ZeroRateCurve(name="C", pillars=[1.0], zero_rates_cc=[0.04])
    result = engine.calculate(trade, Measure.PRESENT_VALUE, _market(curve))
    # No default reporting currency: the raw amount is returned.
    assert result.reporting_currency is None
    assert result[0].currency == GBP
    assert 0 < result[0].amount < 100.0
    assert engine.configured_measures(trade) == {Measure.PRESENT_VALUE}


def test_builder_rejects_duplicates_and_reuse() -> None:
    """A measure is registered once per group, and a builder builds once."""
    builder = DefaultFunctionGroup.builder("Cash", TradeType.SWAP).add_function(
        Measure.PRESENT_VALUE, CashPvFunction
    )
    with pytest.raises(ValueError, match="already registered"):
        builder.add_function(Measure.PRESENT_VALUE, CashPvFunction)
    builder.build()
    with pytest.raises(RuntimeError):
        builder.build()
    with pytest.raises(RuntimeError):
        builder.add_function(Measure.PV01, CashPvFunction)


def test_custom_curve_implementation() -> None:
    """DiscountFactors accept any object that implements the Curve protocol (structural typing)."""

    class FlatCurve:
        """Minimal curve: flat discount factor."""
        name = "FLAT"
        parameter_count = 1
        parameter_times = (0.0,)

        def df(self, t: float) -> float:
            return 0.95

        def bumped(self, bump: float) -> "FlatCurve":
            return self

        def bumped_parameter(self, index: int, bump: float) -> "FlatCurve":
            return self

    trade = CashTrade(CurrencyAmount.of(GBP, 100.0), date(2016, 1, 1))
    engine = CalculationEngine()
    engine.register(
        DefaultFunctionGroup.builder("Cash", TradeType.SWAP)
        .add_function(Measure.PRESENT_VALUE, CashPvFunction)
        .build()
    )
    result = engine.calculate(trade, Measure.PRESENT_VALUE, _market(FlatCurve()))
    assert abs(result[0].amount - 100.0 * 0.95) < 1e-9


def test_unknown_trade_type_not_supported() -> None:
    """An engine without a group for the trade type returns None rather than raising."""
    trade = CashTrade(CurrencyAmount.of(USD, 1.0), date(2016, 1, 1))
    engine = CalculationEngine()
    assert engine.calculate(trade, Measure.PRESENT_VALUE, _market(ZeroRateCurve("C", [1.0], [0.04]))) is None


def test_risk_measure_classes_composable() -> None:
    """PV01Parallel and PV01Bucketed are first-class risk measure objects."""
    curve = ZeroRateCurve(name="C", pillars=[0.5, 1.0, 2.0], zero_rates_cc=[0.04, 0.04, 0.04])
    market = _market(curve).scenario(0)
    schedule = PeriodicSchedule.of(
        [SchedulePeriod(date(2015, 1, 1), date(2015, 7, 1)), SchedulePeriod(date(2015, 7, 1), date(2016, 1, 1))]
    )
    swap = SwapTrade(FixedFloatSwap(GBP, 1_000_000, 0.04, schedule))
    key = DiscountFactorsKey(GBP)

    parallel = PV01Parallel([key], bump_bp=1.0)
    bucketed = PV01Bucketed([key], bump_bp=1.0)
    assert parallel.name == "PV01_DiscountFactors[GBP]"
    assert bucketed.name == "BucketedPV01_DiscountFactors[GBP]"

    total = parallel.compute(SwapPricer(), swap, market).amount(GBP).amount
    buckets = bucketed.compute(SwapPricer(), swap, market)
    assert abs(buckets.total().amount(GBP).amount - total) < abs(total) * 1e-3
    entry = buckets.find(key, GBP)
    assert entry.parameter_times == (0.5, 1.0, 2.0)
