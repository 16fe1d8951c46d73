"""Market data: typed keys, values, requirements and snapshots."""

from valuation.market.keys import (
    DiscountFactorsKey,
    FxRateKey,
    IborIndexRatesKey,
    IndexRateKey,
    MarketDataKey,
)
from valuation.market.requirements import FunctionRequirements
from valuation.market.snapshot import MarketDataSnapshot, ScenarioMarketData
from valuation.market.values import DiscountFactors, IborIndexRates, TimeSeries

__all__ = [
    "MarketDataKey",
    "DiscountFactorsKey",
    "FxRateKey",
    "IborIndexRatesKey",
    "IndexRateKey",
    "FunctionRequirements",
    "MarketDataSnapshot",
    "ScenarioMarketData",
    "DiscountFactors",
    "IborIndexRates",
    "TimeSeries",
]
