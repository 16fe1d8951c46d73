"""Service layer: convert GraphQL inputs to valuation library objects and run the engine."""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from functools import lru_cache
from typing import Any, Optional

from valuation.currency import Currency, CurrencyAmount, CurrencyPair, FxRate, MultiCurrencyAmount
from valuation.curves import ZeroRateCurve
from valuation.daycount import DayCount
from valuation.engine import CalculationEngine, create_default_engine
from valuation.index import IborIndex
from valuation.market import (
    DiscountFactors,
    DiscountFactorsKey,
    FxRateKey,
    IborIndexRates,
    IborIndexRatesKey,
    IndexRateKey,
    MarketDataKey,
    MarketDataSnapshot,
    ScenarioMarketData,
    TimeSeries,
)
from valuation.measure import Measure
from valuation.products import FxSingle, FxTrade, IborFuture, IborFutureTrade, TradeInfo
from valuation.result import CurveSensitivities, ScenarioResult

from app.config import load_settings
from app.types import (
    AmountResult,
    CurveInput,
    IborIndexInput,
    MarketInput,
    MeasureResult,
    ScenarioInput,
    ScenarioValue,
    SensitivityResult,
    TradeInput,
)

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_engine() -> CalculationEngine:
    """The API's engine, built once from the environment settings."""
    settings = load_settings()
    logger.info(
        "Creating calculation engine (max_workers=%s, strict_requirements=%s)",
        settings.max_workers,
        settings.strict_requirements,
    )
    return create_default_engine(
        strict_requirements=settings.strict_requirements, max_workers=settings.max_workers
    )


def _curve_from_input(c: CurveInput) -> ZeroRateCurve:
    """Build ZeroRateCurve from GraphQL CurveInput."""
    return ZeroRateCurve(name=c.name, pillars=list(c.pillars), zero_rates_cc=list(c.zero_rates_cc))


def _index_from_input(i: IborIndexInput) -> IborIndex:
    return IborIndex(
        name=i.name,
        currency=Currency.of(i.currency),
        tenor_months=i.tenor_months,
        day_count=DayCount.of(i.day_count),
    )


def trade_from_input(t: TradeInput) -> Any:
    """Build an FX or Ibor future trade from GraphQL TradeInput."""
    if (t.fx_single is None) == (t.ibor_future is None):
        raise ValueError("trade must set exactly one of fxSingle / iborFuture")
    info = TradeInfo(trade_id=t.trade_id, trade_date=t.trade_date)
    if t.fx_single is not None:
        fx = t.fx_single
        product = FxSingle.of(
            CurrencyAmount.of(Currency.of(fx.base_currency), fx.base_amount),
            CurrencyAmount.of(Currency.of(fx.counter_currency), fx.counter_amount),
            fx.payment_date,
        )
        return FxTrade(product, info)
    fut = t.ibor_future
    security = IborFuture(
        currency=Currency.of(fut.currency),
        notional=fut.notional,
        accrual_factor=fut.accrual_factor,
        last_trade_date=fut.last_trade_date,
        index=_index_from_input(fut.index),
    )
    return IborFutureTrade(
        security=security,
        quantity=fut.quantity,
        multiplier=fut.multiplier,
        trade_price=fut.trade_price,
        info=info,
    )


def _snapshot_from_input(valuation_date: date, s: ScenarioInput) -> MarketDataSnapshot:
    values: dict[MarketDataKey, Any] = {}
    for dc in s.discount_curves:
        ccy = Currency.of(dc.currency)
        values[DiscountFactorsKey(ccy)] = DiscountFactors(
            ccy, valuation_date, _curve_from_input(dc.curve), DayCount.of(dc.day_count)
        )
    indices: dict[str, IborIndex] = {}
    for ic in s.index_curves or []:
        index = _index_from_input(ic.index)
        indices[index.name] = index
        values[IborIndexRatesKey(index)] = IborIndexRates(index, valuation_date, _curve_from_input(ic.curve))
    for fx in s.fx_rates or []:
        pair = CurrencyPair.parse(fx.pair)
        values[FxRateKey.of(pair)] = FxRate(pair, fx.rate)

    points: dict[str, dict[date, float]] = defaultdict(dict)
    for f in s.fixings or []:
        if f.index not in indices:
            raise ValueError(
                f"fixing for index '{f.index}' has no index curve in the scenario. "
                f"Available indices: {sorted(indices)}"
            )
        points[f.index][f.fixing_date] = f.value
    # Every index gets a fixings series, empty when none were published.
    series = {
        IndexRateKey(index): TimeSeries(name, points.get(name, {}))
        for name, index in indices.items()
    }
    return MarketDataSnapshot(valuation_date, values, series)


def market_from_input(m: MarketInput) -> ScenarioMarketData:
    """Build ScenarioMarketData from GraphQL MarketInput."""
    if not m.scenarios:
        raise ValueError("market.scenarios must not be empty")
    return ScenarioMarketData([_snapshot_from_input(m.valuation_date, s) for s in m.scenarios])


def _amount(ca: CurrencyAmount) -> AmountResult:
    return AmountResult(currency=str(ca.currency), amount=ca.amount)


def _scenario_value(index: int, value: Any) -> ScenarioValue:
    if isinstance(value, CurrencyAmount):
        return ScenarioValue(scenario=index, amount=_amount(value))
    if isinstance(value, MultiCurrencyAmount):
        return ScenarioValue(scenario=index, amounts=[_amount(ca) for ca in value])
    if isinstance(value, FxRate):
        return ScenarioValue(scenario=index, rate=value.rate)
    if isinstance(value, CurveSensitivities):
        return ScenarioValue(
            scenario=index,
            sensitivities=[
                SensitivityResult(
                    curve=str(entry.key),
                    currency=str(entry.currency),
                    parameter_times=list(entry.parameter_times),
                    sensitivities=list(entry.sensitivities),
                )
                for entry in value
            ],
        )
    return ScenarioValue(scenario=index, rate=float(value))


def _measure_result(measure: Measure, result: Optional[ScenarioResult[Any]]) -> MeasureResult:
    if result is None:
        return MeasureResult(measure=measure.name, supported=False)
    currency = result.reporting_currency
    return MeasureResult(
        measure=measure.name,
        supported=True,
        reporting_currency=str(currency) if currency is not None else None,
        values=[_scenario_value(i, v) for i, v in enumerate(result)],
    )


def configured_measures(trade: TradeInput) -> list[str]:
    """Names of the measures the engine can calculate for `trade`."""
    instrument = trade_from_input(trade)
    return sorted(m.name for m in get_engine().configured_measures(instrument))


def calculate(
    trade: TradeInput,
    market: MarketInput,
    measures: list[str],
    reporting_currency: Optional[str] = None,
    convert: bool = True,
) -> list[MeasureResult]:
    """Calculate each requested measure for the trade over every scenario of the market."""
    if not measures:
        raise ValueError("measures must not be empty")
    instrument = trade_from_input(trade)
    scenarios = market_from_input(market)
    ccy = Currency.of(reporting_currency) if reporting_currency else None
    engine = get_engine()
    results = []
    for name in measures:
        measure = Measure.of(name)
        result = engine.calculate(instrument, measure, scenarios, reporting_currency=ccy, convert=convert)
        results.append(_measure_result(measure, result))
    return results
