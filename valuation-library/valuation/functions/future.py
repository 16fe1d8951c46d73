"""Calculation functions for Ibor future trades and their function group."""

from __future__ import annotations

import dataclasses
from typing import Any, Optional

from valuation.currency import Currency, CurrencyAmount, MultiCurrencyAmount
from valuation.functions.base import CalculationFunction
from valuation.functions.group import DefaultFunctionGroup
from valuation.market.keys import (
    DiscountFactorsKey,
    IborIndexRatesKey,
    IndexRateKey,
    MarketDataKey,
)
from valuation.market.requirements import FunctionRequirements
from valuation.market.snapshot import MarketDataSnapshot
from valuation.measure import Measure
from valuation.pricers.future_pricer import IborFuturePricer
from valuation.products.future import IborFutureTrade
from valuation.products.trade import TradeType
from valuation.result import CurveSensitivities
from valuation.risk.pv01 import PV01Bucketed, PV01Parallel


def _has_trade_price(trade: IborFutureTrade) -> bool:
    return trade.trade_price is not None


def _curve_keys(trade: IborFutureTrade) -> list[MarketDataKey]:
    keys: list[MarketDataKey] = [IborIndexRatesKey(trade.security.index)]
    if trade.payment_amount is not None:
        keys.append(DiscountFactorsKey(trade.currency))
    return keys


class IborFutureFunction(CalculationFunction[IborFutureTrade, Any]):
    """
    Shared behaviour of Ibor future functions.

    Every function reads the index forward curve and its fixings; discount
    factors are only needed when the trade carries an upfront payment.
    """

    pricer = IborFuturePricer()

    def requirements(self, trade: IborFutureTrade) -> FunctionRequirements:
        return FunctionRequirements.of(
            single_values=_curve_keys(trade),
            time_series=[IndexRateKey(trade.security.index)],
            output_currencies=[trade.currency],
        )

    def default_reporting_currency(self, trade: IborFutureTrade) -> Optional[Currency]:
        return trade.currency


class IborFuturePvFunction(IborFutureFunction):
    """Present value against the trade price."""

    def execute(self, trade: IborFutureTrade, market: MarketDataSnapshot) -> CurrencyAmount:
        return self.pricer.present_value(trade, market)


class _IborFutureSensitivityFunction(IborFutureFunction):
    @staticmethod
    def _with_price(trade: IborFutureTrade) -> IborFutureTrade:
        # The trade price cancels out of a PV difference, so any value will do.
        if trade.trade_price is None:
            return dataclasses.replace(trade, trade_price=0.0)
        return trade


class IborFuturePv01Function(_IborFutureSensitivityFunction):
    """PV change for a 1bp parallel shift of the forward curve (and discount curve)."""

    def execute(self, trade: IborFutureTrade, market: MarketDataSnapshot) -> MultiCurrencyAmount:
        return PV01Parallel(_curve_keys(trade)).compute(self.pricer, self._with_price(trade), market)


class IborFutureBucketedPv01Function(_IborFutureSensitivityFunction):
    """PV change for a 1bp shift of each curve pillar."""

    def execute(self, trade: IborFutureTrade, market: MarketDataSnapshot) -> CurveSensitivities:
        return PV01Bucketed(_curve_keys(trade)).compute(self.pricer, self._with_price(trade), market)


class IborFutureParSpreadFunction(IborFutureFunction):
    """Model price minus trade price."""

    def execute(self, trade: IborFutureTrade, market: MarketDataSnapshot) -> float:
        return self.pricer.par_spread(trade, market)


class IborFutureForwardRateFunction(IborFutureFunction):
    """Index rate for the fixing date, forecast or fixed."""

    def execute(self, trade: IborFutureTrade, market: MarketDataSnapshot) -> float:
        return self.pricer.rate(trade, market)


def ibor_future_group() -> DefaultFunctionGroup[IborFutureTrade]:
    """Function group for Ibor futures; PV and par spread need a trade price."""
    return (
        DefaultFunctionGroup.builder("IborFutureDiscounting", TradeType.IBOR_FUTURE)
        .add_function(Measure.PRESENT_VALUE, IborFuturePvFunction, applies=_has_trade_price)
        .add_function(Measure.PV01, IborFuturePv01Function)
        .add_function(Measure.BUCKETED_PV01, IborFutureBucketedPv01Function)
        .add_function(Measure.PAR_SPREAD, IborFutureParSpreadFunction, applies=_has_trade_price)
        .add_function(Measure.FORWARD_RATE, IborFutureForwardRateFunction)
        .build()
    )
