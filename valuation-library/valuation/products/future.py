"""Ibor future security and trade (data only; calculations via function groups)."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import date
from typing import Any, ClassVar, Mapping, Optional

from valuation.currency import Currency, CurrencyAmount
from valuation.index import IborIndex
from valuation.products.trade import TradeInfo, TradeType


@dataclass(frozen=True)
class IborFuture:
    """
    Futures contract on an Ibor index, quoted as price = 1 - rate.

    The rate fixes on `last_trade_date`; one contract pays
    `notional * accrual_factor` per unit of price.
    """

    currency: Currency
    notional: float
    accrual_factor: float
    last_trade_date: date
    index: IborIndex

    def __post_init__(self) -> None:
        if self.notional <= 0:
            raise ValueError("notional must be positive")
        if self.accrual_factor <= 0:
            raise ValueError("accrual_factor must be positive")
        if self.index.currency != self.currency:
            raise ValueError(
                f"index {self.index} is in {self.index.currency}, future is in {self.currency}"
            )

    @property
    def fixing_date(self) -> date:
        return self.last_trade_date


@dataclass(frozen=True)
class IborFutureTrade:
    """
    A position in an Ibor future.

    `quantity` is the signed number of contracts. `trade_price` (optional) is
    the price the position was entered at; without it the present value is
    undefined. `payment_amount` (optional) is an upfront amount settled on
    `info.settlement_date`.
    """

    trade_type: ClassVar[TradeType] = TradeType.IBOR_FUTURE

    security: IborFuture
    quantity: float
    multiplier: float = 1.0
    trade_price: Optional[float] = None
    payment_amount: Optional[CurrencyAmount] = None
    info: TradeInfo = field(default_factory=TradeInfo)

    def __post_init__(self) -> None:
        if self.multiplier <= 0:
            raise ValueError("multiplier must be positive")
        if self.payment_amount is not None:
            if self.info.settlement_date is None:
                raise ValueError("payment_amount requires info.settlement_date")
            if self.payment_amount.currency != self.security.currency:
                raise ValueError(
                    f"payment_amount must be in {self.security.currency}, "
                    f"got {self.payment_amount.currency}"
                )

    @property
    def currency(self) -> Currency:
        return self.security.currency

    @property
    def trade_date(self) -> Optional[date]:
        return self.info.trade_date

    @property
    def attributes(self) -> Mapping[str, str]:
        return self.info.attributes

    @classmethod
    def builder(cls) -> IborFutureTradeBuilder:
        return IborFutureTradeBuilder()


@dataclass
class IborFutureTradeBuilder:
    """
    Mutable holder for building an IborFutureTrade step by step.

    Set the fields, then call `build()` once; a builder cannot be reused.
    """

    security: Optional[IborFuture] = None
    quantity: Optional[float] = None
    multiplier: float = 1.0
    trade_price: Optional[float] = None
    payment_amount: Optional[CurrencyAmount] = None
    trade_id: Optional[str] = None
    trade_date: Optional[date] = None
    settlement_date: Optional[date] = None
    attributes: dict[str, str] = field(default_factory=dict)
    _built: bool = field(default=False, init=False, repr=False)

    def set(self, **values: Any) -> IborFutureTradeBuilder:
        """Set several fields at once; unknown names raise AttributeError."""
        names = {f.name for f in fields(self) if f.init}
        for name, value in values.items():
            if name not in names:
                raise AttributeError(f"IborFutureTradeBuilder has no field {name!r}")
            setattr(self, name, value)
        return self

    def build(self) -> IborFutureTrade:
        if self._built:
            raise RuntimeError("builder already consumed; create a new one")
        if self.security is None:
            raise ValueError("security must be set")
        if self.quantity is None:
            raise ValueError("quantity must be set")
        self._built = True
        info = TradeInfo(
            trade_id=self.trade_id,
            trade_date=self.trade_date,
            settlement_date=self.settlement_date,
            attributes=self.attributes,
        )
        return IborFutureTrade(
            security=self.security,
            quantity=self.quantity,
            multiplier=self.multiplier,
            trade_price=self.trade_price,
            payment_amount=self.payment_amount,
            info=info,
        )
