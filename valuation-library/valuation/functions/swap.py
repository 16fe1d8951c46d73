"""Calculation functions for fixed-float swaps and their function group."""

from __future__ import annotations

from typing import Any, Optional

from valuation.currency import Currency, CurrencyAmount, MultiCurrencyAmount
from valuation.functions.base import CalculationFunction
from valuation.functions.group import DefaultFunctionGroup
from valuation.market.keys import DiscountFactorsKey
from valuation.market.requirements import FunctionRequirements
from valuation.market.snapshot import MarketDataSnapshot
from valuation.measure import Measure
from valuation.pricers.swap_pricer import SwapPricer
from valuation.products.swap import SwapTrade
from valuation.products.trade import TradeType
from valuation.result import CurveSensitivities
from valuation.risk.pv01 import PV01Bucketed, PV01Parallel


class SwapFunction(CalculationFunction[SwapTrade, Any]):
    """Shared behaviour of swap functions: one discount curve, one currency."""

    pricer = SwapPricer()

    def requirements(self, trade: SwapTrade) -> FunctionRequirements:
        ccy = trade.product.currency
        return FunctionRequirements.of(
            single_values=[DiscountFactorsKey(ccy)], output_currencies=[ccy]
        )

    def default_reporting_currency(self, trade: SwapTrade) -> Optional[Currency]:
        return trade.product.currency


class SwapPvFunction(SwapFunction):
    def execute(self, trade: SwapTrade, market: MarketDataSnapshot) -> CurrencyAmount:
        return self.pricer.present_value(trade, market)


class SwapPv01Function(SwapFunction):
    def execute(self, trade: SwapTrade, market: MarketDataSnapshot) -> MultiCurrencyAmount:
        key = DiscountFactorsKey(trade.product.currency)
        return PV01Parallel([key]).compute(self.pricer, trade, market)


class SwapBucketedPv01Function(SwapFunction):
    def execute(self, trade: SwapTrade, market: MarketDataSnapshot) -> CurveSensitivities:
        key = DiscountFactorsKey(trade.product.currency)
        return PV01Bucketed([key]).compute(self.pricer, trade, market)


class SwapParSpreadFunction(SwapFunction):
    """Par rate minus the fixed rate."""

    def execute(self, trade: SwapTrade, market: MarketDataSnapshot) -> float:
        return self.pricer.par_spread(trade, market)


def swap_group() -> DefaultFunctionGroup[SwapTrade]:
    """Function group for single-curve fixed-float swaps."""
    return (
        DefaultFunctionGroup.builder("SwapDiscounting", TradeType.SWAP)
        .add_function(Measure.PRESENT_VALUE, SwapPvFunction)
        .add_function(Measure.PV01, SwapPv01Function)
        .add_function(Measure.BUCKETED_PV01, SwapBucketedPv01Function)
        .add_function(Measure.PAR_SPREAD, SwapParSpreadFunction)
        .build()
    )
