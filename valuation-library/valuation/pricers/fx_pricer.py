"""Pricer for FX single-payment trades (discounting and CIP-based forwards)."""

from __future__ import annotations

from datetime import date

from valuation.currency import CurrencyAmount, FxRate, MultiCurrencyAmount
from valuation.market.snapshot import MarketDataSnapshot
from valuation.market.values import DiscountFactors
from valuation.pricers.base import BasePricer
from valuation.products.fx import FxTrade


class FxSinglePricer(BasePricer):
    """Pricer for FX single trades: each leg discounted in its own currency."""

    def present_value(self, trade: FxTrade, market: MarketDataSnapshot) -> MultiCurrencyAmount:
        """
        PV = base_amount * DF_base(T) + counter_amount * DF_counter(T), kept per currency.
        Once the payment date has passed the trade is worth nothing.
        """
        fx = trade.product
        if fx.payment_date < market.valuation_date:
            return MultiCurrencyAmount.empty()
        return MultiCurrencyAmount.of(
            self._discounted(fx.base_currency_amount, fx.payment_date, market),
            self._discounted(fx.counter_currency_amount, fx.payment_date, market),
        )

    def currency_exposure(self, trade: FxTrade, market: MarketDataSnapshot) -> MultiCurrencyAmount:
        """
        Exposure to each currency.

        Each leg is a fixed amount of its own currency, so the exposure equals
        the discounted legs.
        """
        return self.present_value(trade, market)

    def forward_fx_rate(self, trade: FxTrade, market: MarketDataSnapshot) -> FxRate:
        """
        Forward rate by covered interest rate parity:
        F = spot * DF_base(T) / DF_counter(T).
        """
        fx = trade.product
        pair = fx.currency_pair
        spot = market.fx_rate(pair.base, pair.counter)
        on = max(fx.payment_date, market.valuation_date)
        df_base = market.discount_factors(pair.base).discount_factor(on)
        df_counter = market.discount_factors(pair.counter).discount_factor(on)
        return FxRate(pair, spot * df_base / df_counter)

    def par_spread(self, trade: FxTrade, market: MarketDataSnapshot) -> float:
        """Spread to add to the contract rate to reach the forward rate: F - K."""
        return self.forward_fx_rate(trade, market).rate - trade.product.contract_rate

    @staticmethod
    def _discounted(
        amount: CurrencyAmount, payment_date: date, market: MarketDataSnapshot
    ) -> CurrencyAmount:
        dfs: DiscountFactors = market.discount_factors(amount.currency)
        return amount.multiplied_by(dfs.discount_factor(payment_date))
