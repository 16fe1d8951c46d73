"""Tests for the FX single function group."""

from datetime import date, timedelta

import pytest

from valuation.currency import GBP, USD, CurrencyAmount, FxRate, MultiCurrencyAmount
from valuation.curves import ConstantCurve, ZeroRateCurve
from valuation.daycount import DayCount
from valuation.functions import fx_single_group
from valuation.functions.fx import (
    FxSingleBucketedPv01Function,
    FxSingleCurrencyExposureFunction,
    FxSingleForwardFxRateFunction,
    FxSingleParSpreadFunction,
    FxSinglePv01Function,
    FxSinglePvFunction,
)
from valuation.market import DiscountFactors, DiscountFactorsKey, FxRateKey, MarketDataSnapshot
from valuation.measure import Measure
from valuation.products import FxSingle, FxTrade, TradeInfo
from valuation.result import CurveSensitivities

GBP_P1000 = CurrencyAmount.of(GBP, 1_000)
USD_M1600 = CurrencyAmount.of(USD, -1_600)
PRODUCT = FxSingle.of(GBP_P1000, USD_M1600, date(2015, 6, 30))
TRADE = FxTrade(PRODUCT, TradeInfo(trade_date=date(2015, 6, 1)))


def _constant_dfs(ccy, val_date: date) -> DiscountFactors:
    return DiscountFactors(ccy, val_date, ConstantCurve("Test", 0.99), DayCount.ACT_360)


def _expired_market(with_fx: bool = False) -> MarketDataSnapshot:
    val_date = PRODUCT.payment_date + timedelta(days=7)
    values = {
        DiscountFactorsKey(GBP): _constant_dfs(GBP, val_date),
        DiscountFactorsKey(USD): _constant_dfs(USD, val_date),
    }
    if with_fx:
        values[FxRateKey(GBP, USD)] = FxRate.of(GBP, USD, 1.6)
    return MarketDataSnapshot(val_date, values)


def _live_market() -> MarketDataSnapshot:
    val_date = date(2015, 6, 1)
    gbp = ZeroRateCurve("GBP", [0.25, 1.0], [0.01, 0.012])
    usd = ZeroRateCurve("USD", [0.25, 1.0], [0.02, 0.022])
    return MarketDataSnapshot(
        val_date,
        {
            DiscountFactorsKey(GBP): DiscountFactors(GBP, val_date, gbp),
            DiscountFactorsKey(USD): DiscountFactors(USD, val_date, usd),
            FxRateKey(GBP, USD): FxRate.of(GBP, USD, 1.55),
        },
    )


def test_discounting_configured_measures() -> None:
    """The discounting group configures all six FX measures."""
    group = fx_single_group()
    assert group.trade_type.value == "FxSingle"
    assert group.configured_measures(TRADE) >= {
        Measure.PRESENT_VALUE,
        Measure.PV01,
        Measure.BUCKETED_PV01,
        Measure.PAR_SPREAD,
        Measure.CURRENCY_EXPOSURE,
        Measure.FORWARD_FX_RATE,
    }
    assert group.function_config(TRADE, Measure.FORWARD_RATE) is None


def test_present_value_requirements() -> None:
    """PV needs both discount curves, no time series, and reports in the base currency."""
    config = fx_single_group().function_config(TRADE, Measure.PRESENT_VALUE)
    function = config.create_function()
    reqs = function.requirements(TRADE)
    assert reqs.output_currencies == {GBP, USD}
    assert reqs.single_values == {DiscountFactorsKey(GBP), DiscountFactorsKey(USD)}
    assert reqs.time_series == frozenset()
    assert function.default_reporting_currency(TRADE) == GBP


def test_present_value_after_payment_is_empty() -> None:
    """A week after the payment date the trade has no value in any currency."""
    function = fx_single_group().function_config(TRADE, Measure.PRESENT_VALUE).create_function()
    assert function.execute(TRADE, _expired_market()) == MultiCurrencyAmount.empty()


def test_every_function_executes() -> None:
    """Every FX function returns a result on a complete snapshot."""
    market = _expired_market(with_fx=True)
    assert isinstance(FxSingleBucketedPv01Function().execute(TRADE, market), CurveSensitivities)
    assert FxSingleCurrencyExposureFunction().execute(TRADE, market) == MultiCurrencyAmount.empty()
    assert FxSingleForwardFxRateFunction().execute(TRADE, market).rate == pytest.approx(1.6)
    assert FxSingleParSpreadFunction().execute(TRADE, market) == pytest.approx(0.0)
    assert FxSinglePv01Function().execute(TRADE, market) == MultiCurrencyAmount.empty()
    assert FxSinglePvFunction().execute(TRADE, market) == MultiCurrencyAmount.empty()


def test_spot_functions_declare_fx_rate() -> None:
    """Par spread and forward rate read the pair's spot rate, so they declare it."""
    reqs = FxSingleForwardFxRateFunction().requirements(TRADE)
    assert FxRateKey(GBP, USD) in reqs.single_values
    assert FxRateKey(GBP, USD) not in FxSinglePvFunction().requirements(TRADE).single_values


def test_present_value_discounts_each_leg() -> None:
    """Before payment each leg is discounted on its own curve."""
    market = _live_market()
    pv = FxSinglePvFunction().execute(TRADE, market)
    df_gbp = market.discount_factors(GBP).discount_factor(PRODUCT.payment_date)
    df_usd = market.discount_factors(USD).discount_factor(PRODUCT.payment_date)
    assert pv.amount(GBP).amount == pytest.approx(1_000 * df_gbp)
    assert pv.amount(USD).amount == pytest.approx(-1_600 * df_usd)


def test_forward_rate_covered_interest_parity() -> None:
    """F = spot * DF_base / DF_counter; par spread is F minus the contract rate."""
    market = _live_market()
    df_gbp = market.discount_factors(GBP).discount_factor(PRODUCT.payment_date)
    df_usd = market.discount_factors(USD).discount_factor(PRODUCT.payment_date)
    forward = FxSingleForwardFxRateFunction().execute(TRADE, market)
    assert forward.pair.base == GBP
    assert forward.rate == pytest.approx(1.55 * df_gbp / df_usd)
    assert FxSingleParSpreadFunction().execute(TRADE, market) == pytest.approx(forward.rate - 1.6)


def test_pv01_signs() -> None:
    """Higher rates shrink both legs: GBP receivable falls, USD payable rises."""
    pv01 = FxSinglePv01Function().execute(TRADE, _live_market())
    assert pv01.amount(GBP).amount < 0
    assert pv01.amount(USD).amount > 0


def test_bucketed_pv01_sums_to_parallel() -> None:
    """Bucketed sensitivities add up to the parallel PV01 for linear-in-rate curves."""
    market = _live_market()
    bucketed = FxSingleBucketedPv01Function().execute(TRADE, market)
    parallel = FxSinglePv01Function().execute(TRADE, market)
    gbp = bucketed.find(DiscountFactorsKey(GBP), GBP)
    assert gbp is not None
    assert gbp.parameter_times == (0.25, 1.0)
    assert bucketed.find(DiscountFactorsKey(GBP), USD) is None
    assert bucketed.total().amount(GBP).amount == pytest.approx(parallel.amount(GBP).amount, rel=1e-3)
    assert bucketed.total().amount(USD).amount == pytest.approx(parallel.amount(USD).amount, rel=1e-3)


def test_fx_single_validation() -> None:
    """Amounts must be in two currencies with opposite signs."""
    with pytest.raises(ValueError, match="two different currencies"):
        FxSingle.of(GBP_P1000, CurrencyAmount.of(GBP, -1), date(2015, 6, 30))
    with pytest.raises(ValueError, match="opposite signs"):
        FxSingle.of(GBP_P1000, CurrencyAmount.of(USD, 1_600), date(2015, 6, 30))
    assert PRODUCT.contract_rate == pytest.approx(1.6)
