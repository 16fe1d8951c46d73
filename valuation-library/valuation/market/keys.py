"""
Typed market data keys.

A key carries only the fields that identify one piece of market data. The same
key objects are used as requirement tokens (what a function declares it needs)
and as lookup keys into a MarketDataSnapshot.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from valuation.currency import Currency, CurrencyPair
from valuation.index import IborIndex


class MarketDataKey:
    """Base class of all market data keys; `kind` names the variant."""

    kind: ClassVar[str] = "MarketData"


@dataclass(frozen=True)
class DiscountFactorsKey(MarketDataKey):
    """Discount factors for one currency."""

    kind: ClassVar[str] = "DiscountFactors"
    currency: Currency

    def __str__(self) -> str:
        return f"{self.kind}[{self.currency}]"


@dataclass(frozen=True)
class FxRateKey(MarketDataKey):
    """Spot FX rate for a currency pair, quoted counter per base."""

    kind: ClassVar[str] = "FxRate"
    base: Currency
    counter: Currency

    def __post_init__(self) -> None:
        if self.base == self.counter:
            raise ValueError(f"FxRateKey needs two different currencies, got {self.base}")

    @classmethod
    def of(cls, pair: CurrencyPair) -> FxRateKey:
        return cls(pair.base, pair.counter)

    @property
    def pair(self) -> CurrencyPair:
        return CurrencyPair(self.base, self.counter)

    def inverse(self) -> FxRateKey:
        return FxRateKey(self.counter, self.base)

    def __str__(self) -> str:
        return f"{self.kind}[{self.base}/{self.counter}]"


@dataclass(frozen=True)
class IborIndexRatesKey(MarketDataKey):
    """Forward curve used to forecast an Ibor index."""

    kind: ClassVar[str] = "IborIndexRates"
    index: IborIndex

    def __str__(self) -> str:
        return f"{self.kind}[{self.index}]"


@dataclass(frozen=True)
class IndexRateKey(MarketDataKey):
    """Time series of historic fixings of an index."""

    kind: ClassVar[str] = "IndexRate"
    index: IborIndex

    def __str__(self) -> str:
        return f"{self.kind}[{self.index}]"
