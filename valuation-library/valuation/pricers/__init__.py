"""Pricer implementations shared by the calculation functions."""

from valuation.pricers.base import BasePricer
from valuation.pricers.future_pricer import IborFuturePricer
from valuation.pricers.fx_pricer import FxSinglePricer
from valuation.pricers.swap_pricer import SwapPricer

__all__ = [
    "BasePricer",
    "FxSinglePricer",
    "IborFuturePricer",
    "SwapPricer",
]
