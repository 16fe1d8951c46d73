"""Pricer for Ibor futures (price = 1 - index rate)."""

from __future__ import annotations

from valuation.currency import CurrencyAmount
from valuation.market.snapshot import MarketDataSnapshot
from valuation.pricers.base import BasePricer
from valuation.products.future import IborFutureTrade


class IborFuturePricer(BasePricer):
    """Pricer for Ibor futures; the index rate is forecast or read from fixings."""

    def rate(self, trade: IborFutureTrade, market: MarketDataSnapshot) -> float:
        """Index rate for the future's fixing date."""
        future = trade.security
        rates = market.ibor_index_rates(future.index)
        return rates.rate(future.fixing_date, market.fixings(future.index))

    def price(self, trade: IborFutureTrade, market: MarketDataSnapshot) -> float:
        """Model price of one contract: 1 - rate."""
        return 1.0 - self.rate(trade, market)

    def present_value(self, trade: IborFutureTrade, market: MarketDataSnapshot) -> CurrencyAmount:
        """
        PV = (price - trade_price) * notional * accrual_factor * quantity * multiplier,
        plus the discounted upfront payment if it has not settled yet.
        """
        if trade.trade_price is None:
            raise ValueError("present value of a future needs a trade price")
        future = trade.security
        unit = (self.price(trade, market) - trade.trade_price) * future.notional * future.accrual_factor
        pv = CurrencyAmount.of(future.currency, unit * trade.quantity * trade.multiplier)
        payment = trade.payment_amount
        settlement = trade.info.settlement_date
        if payment is not None and settlement is not None and settlement >= market.valuation_date:
            df = market.discount_factors(payment.currency).discount_factor(settlement)
            pv = pv.plus(payment.multiplied_by(df))
        return pv

    def par_spread(self, trade: IborFutureTrade, market: MarketDataSnapshot) -> float:
        """Price difference that would make the trade worth zero: price - trade_price."""
        if trade.trade_price is None:
            raise ValueError("par spread of a future needs a trade price")
        return self.price(trade, market) - trade.trade_price
