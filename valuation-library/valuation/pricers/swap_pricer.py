"""Pricer for fixed-float interest rate swaps (single curve)."""

from __future__ import annotations

from valuation.currency import CurrencyAmount
from valuation.market.snapshot import MarketDataSnapshot
from valuation.market.values import DiscountFactors
from valuation.pricers.base import BasePricer
from valuation.products.swap import FixedFloatSwap, SwapTrade


class SwapPricer(BasePricer):
    """Pricer for fixed-float interest rate swaps (single curve)."""

    def present_value(self, trade: SwapTrade, market: MarketDataSnapshot) -> CurrencyAmount:
        """
        Fixed-float swap (single curve).
        Convention: receive float, pay fixed. PV = PV(float leg) - PV(fixed leg).
        Periods paid before the valuation date are ignored.
        """
        swap = trade.product
        dfs = market.discount_factors(swap.currency)
        pv = self._pv_float_leg(swap, dfs) - self._pv_fixed_leg(swap, dfs, swap.fixed_rate)
        return CurrencyAmount.of(swap.currency, pv if swap.pay_fixed else -pv)

    def par_rate(self, trade: SwapTrade, market: MarketDataSnapshot) -> float:
        """Fixed rate making PV zero: PV(float leg) / annuity."""
        swap = trade.product
        dfs = market.discount_factors(swap.currency)
        annuity = self._pv_fixed_leg(swap, dfs, 1.0)
        if annuity <= 0:
            raise ValueError("par rate undefined: no remaining fixed leg cashflows")
        return self._pv_float_leg(swap, dfs) / annuity

    def par_spread(self, trade: SwapTrade, market: MarketDataSnapshot) -> float:
        """Par rate minus the contractual fixed rate."""
        return self.par_rate(trade, market) - trade.product.fixed_rate

    @staticmethod
    def _pv_fixed_leg(swap: FixedFloatSwap, dfs: DiscountFactors, rate: float) -> float:
        """
        Fixed leg PV.
        CF_i = notional * rate * accrual_i, PV = sum_i CF_i * DF(end_i).
        """
        pv = 0.0
        for period in swap.schedule:
            if period.end_date < dfs.valuation_date:
                continue
            accrual = period.year_fraction(swap.day_count)
            pv += swap.notional * rate * accrual * dfs.discount_factor(period.end_date)
        return pv

    @staticmethod
    def _pv_float_leg(swap: FixedFloatSwap, dfs: DiscountFactors) -> float:
        """
        Float leg PV (single-curve).
        Forward rate from discount factors: f = (DF(start)/DF(end) - 1) / accrual.
        A period that started before the valuation date is forecast from today.
        """
        pv = 0.0
        for period in swap.schedule:
            if period.end_date < dfs.valuation_date:
                continue
            start = max(period.start_date, dfs.valuation_date)
            accrual = period.year_fraction(swap.day_count)
            df_start = dfs.discount_factor(start)
            df_end = dfs.discount_factor(period.end_date)
            fwd = (df_start / df_end - 1.0) / accrual if accrual > 0 else 0.0
            pv += swap.notional * fwd * accrual * df_end
        return pv
