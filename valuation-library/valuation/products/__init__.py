"""Products and trades: FX single, Ibor future, fixed-float swap."""

from valuation.products.future import IborFuture, IborFutureTrade, IborFutureTradeBuilder
from valuation.products.fx import FxSingle, FxTrade
from valuation.products.swap import FixedFloatSwap, SwapTrade
from valuation.products.trade import TradeInfo, TradeType

__all__ = [
    "TradeInfo",
    "TradeType",
    "FxSingle",
    "FxTrade",
    "IborFuture",
    "IborFutureTrade",
    "IborFutureTradeBuilder",
    "FixedFloatSwap",
    "SwapTrade",
]
