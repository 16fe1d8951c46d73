"""Calculation functions for FX single trades and their discounting function group."""

from __future__ import annotations

from typing import Any, Optional

from valuation.currency import Currency, FxRate, MultiCurrencyAmount
from valuation.functions.base import CalculationFunction
from valuation.functions.group import DefaultFunctionGroup
from valuation.market.keys import DiscountFactorsKey, FxRateKey
from valuation.market.requirements import FunctionRequirements
from valuation.market.snapshot import MarketDataSnapshot
from valuation.measure import Measure
from valuation.pricers.fx_pricer import FxSinglePricer
from valuation.products.fx import FxTrade
from valuation.products.trade import TradeType
from valuation.result import CurveSensitivities
from valuation.risk.pv01 import PV01Bucketed, PV01Parallel


class FxSingleFunction(CalculationFunction[FxTrade, Any]):
    """
    Shared behaviour of FX single functions.

    Requirements are the discount factors of both currencies; results are
    reported in the base currency unless the caller asks otherwise.
    """

    pricer = FxSinglePricer()

    def requirements(self, trade: FxTrade) -> FunctionRequirements:
        currencies = trade.product.currencies
        return FunctionRequirements.of(
            single_values=[DiscountFactorsKey(ccy) for ccy in currencies],
            output_currencies=currencies,
        )

    def default_reporting_currency(self, trade: FxTrade) -> Optional[Currency]:
        return trade.product.base_currency_amount.currency

    def _discount_keys(self, trade: FxTrade) -> list[DiscountFactorsKey]:
        return sorted(
            (DiscountFactorsKey(ccy) for ccy in trade.product.currencies),
            key=lambda k: k.currency,
        )


class FxSinglePvFunction(FxSingleFunction):
    """Present value, one amount per currency."""

    def execute(self, trade: FxTrade, market: MarketDataSnapshot) -> MultiCurrencyAmount:
        return self.pricer.present_value(trade, market)


class FxSinglePv01Function(FxSingleFunction):
    """PV change for a 1bp parallel shift of both discount curves."""

    def execute(self, trade: FxTrade, market: MarketDataSnapshot) -> MultiCurrencyAmount:
        return PV01Parallel(self._discount_keys(trade)).compute(self.pricer, trade, market)


class FxSingleBucketedPv01Function(FxSingleFunction):
    """PV change for a 1bp shift of each discount curve pillar."""

    def execute(self, trade: FxTrade, market: MarketDataSnapshot) -> CurveSensitivities:
        return PV01Bucketed(self._discount_keys(trade)).compute(self.pricer, trade, market)


class FxSingleCurrencyExposureFunction(FxSingleFunction):
    """Exposure to each of the two currencies."""

    def execute(self, trade: FxTrade, market: MarketDataSnapshot) -> MultiCurrencyAmount:
        return self.pricer.currency_exposure(trade, market)


class _FxSpotFunction(FxSingleFunction):
    """FX single function that also reads the spot rate of the trade's pair."""

    def requirements(self, trade: FxTrade) -> FunctionRequirements:
        spot = FunctionRequirements.of(single_values=[FxRateKey.of(trade.product.currency_pair)])
        return super().requirements(trade) | spot


class FxSingleParSpreadFunction(_FxSpotFunction):
    """Forward rate minus contract rate."""

    def execute(self, trade: FxTrade, market: MarketDataSnapshot) -> float:
        return self.pricer.par_spread(trade, market)


class FxSingleForwardFxRateFunction(_FxSpotFunction):
    """Forward FX rate for the payment date."""

    def execute(self, trade: FxTrade, market: MarketDataSnapshot) -> FxRate:
        return self.pricer.forward_fx_rate(trade, market)


def fx_single_group() -> DefaultFunctionGroup[FxTrade]:
    """Function group for FX single trades priced by discounting."""
    return (
        DefaultFunctionGroup.builder("FxSingleDiscounting", TradeType.FX_SINGLE)
        .add_function(Measure.PRESENT_VALUE, FxSinglePvFunction)
        .add_function(Measure.PV01, FxSinglePv01Function)
        .add_function(Measure.BUCKETED_PV01, FxSingleBucketedPv01Function)
        .add_function(Measure.PAR_SPREAD, FxSingleParSpreadFunction)
        .add_function(Measure.CURRENCY_EXPOSURE, FxSingleCurrencyExposureFunction)
        .add_function(Measure.FORWARD_FX_RATE, FxSingleForwardFxRateFunction)
        .build()
    )
