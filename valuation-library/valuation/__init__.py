"""Valuation library: measures, function groups, market data, engine, and results."""

from valuation.currency import (
    CHF,
    EUR,
    GBP,
    JPY,
    USD,
    Currency,
    CurrencyAmount,
    CurrencyPair,
    FxRate,
    MultiCurrencyAmount,
)
from valuation.curves import ConstantCurve, ZeroRateCurve
from valuation.daycount import DayCount
from valuation.engine import CalculationEngine, CalculationResult, create_default_engine
from valuation.errors import (
    InvalidScheduleError,
    MissingFxRateError,
    MissingMarketDataError,
    ScheduleIndexError,
    ValuationError,
)
from valuation.functions import (
    CalculationFunction,
    DefaultFunctionGroup,
    FunctionConfig,
    FunctionGroup,
)
from valuation.index import IborIndex
from valuation.interfaces import Curve, FxConvertible, FxRateProvider, Trade
from valuation.market import (
    DiscountFactors,
    DiscountFactorsKey,
    FunctionRequirements,
    FxRateKey,
    IborIndexRates,
    IborIndexRatesKey,
    IndexRateKey,
    MarketDataKey,
    MarketDataSnapshot,
    ScenarioMarketData,
    TimeSeries,
)
from valuation.measure import Measure
from valuation.products import (
    FixedFloatSwap,
    FxSingle,
    FxTrade,
    IborFuture,
    IborFutureTrade,
    SwapTrade,
    TradeInfo,
    TradeType,
)
from valuation.result import (
    CurveSensitivities,
    CurveSensitivity,
    ResultAggregator,
    ScenarioResult,
)
from valuation.schedule import PeriodicSchedule, SchedulePeriod

__all__ = [
    "Currency",
    "CurrencyAmount",
    "CurrencyPair",
    "FxRate",
    "MultiCurrencyAmount",
    "GBP",
    "USD",
    "EUR",
    "JPY",
    "CHF",
    "Curve",
    "Trade",
    "FxRateProvider",
    "FxConvertible",
    "ZeroRateCurve",
    "ConstantCurve",
    "DayCount",
    "IborIndex",
    "Measure",
    "CalculationEngine",
    "CalculationResult",
    "create_default_engine",
    "CalculationFunction",
    "FunctionConfig",
    "FunctionGroup",
    "DefaultFunctionGroup",
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
    "TradeInfo",
    "TradeType",
    "FxSingle",
    "FxTrade",
    "IborFuture",
    "IborFutureTrade",
    "FixedFloatSwap",
    "SwapTrade",
    "CurveSensitivity",
    "CurveSensitivities",
    "ResultAggregator",
    "ScenarioResult",
    "PeriodicSchedule",
    "SchedulePeriod",
    "ValuationError",
    "MissingMarketDataError",
    "MissingFxRateError",
    "InvalidScheduleError",
    "ScheduleIndexError",
]
