"""Base pricer abstract class for product pricing implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from valuation.currency import CurrencyAmount, MultiCurrencyAmount
from valuation.market.snapshot import MarketDataSnapshot


class BasePricer(ABC):
    """Abstract base class for product pricers.

    Pricers hold the pricing formulas for one trade type and read market data
    only through the snapshot they are given. Calculation functions wrap them
    to add requirements and measure-specific packaging. This allows pricing
    logic to be isolated, testable, and shared by several measures.
    """

    @abstractmethod
    def present_value(
        self, trade: Any, market: MarketDataSnapshot
    ) -> CurrencyAmount | MultiCurrencyAmount:
        """Compute present value, labelled with its currency (or currencies)."""
        ...
