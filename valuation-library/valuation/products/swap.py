"""Fixed-float interest rate swap (single-curve; data only; calculations via function groups)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from valuation.currency import Currency
from valuation.daycount import DayCount
from valuation.products.trade import TradeInfo, TradeType
from valuation.schedule import PeriodicSchedule


@dataclass(frozen=True)
class FixedFloatSwap:
    """
    Fixed vs float swap (single curve).
    Receive float, pay fixed (set `pay_fixed=False` for the reverse).
    PV = PV_float_leg - PV_fixed_leg for the payer.
    Both legs accrue over `schedule` and pay at each period end date.
    """

    currency: Currency
    notional: float
    fixed_rate: float
    schedule: PeriodicSchedule
    day_count: DayCount = DayCount.ACT_360
    pay_fixed: bool = True

    def __post_init__(self) -> None:
        if self.notional <= 0:
            raise ValueError("notional must be positive")


@dataclass(frozen=True)
class SwapTrade:
    """A trade in a fixed-float swap."""

    trade_type: ClassVar[TradeType] = TradeType.SWAP

    product: FixedFloatSwap
    info: TradeInfo = field(default_factory=TradeInfo)
