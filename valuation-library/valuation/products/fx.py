"""FX single-payment trades (spot or forward exchange; data only)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import ClassVar

from valuation.currency import Currency, CurrencyAmount, CurrencyPair
from valuation.products.trade import TradeInfo, TradeType


@dataclass(frozen=True)
class FxSingle:
    """
    Exchange of two amounts in different currencies on a single payment date.

    The amounts are signed from the holder's perspective: a positive amount is
    received, a negative amount is paid. Unless both are zero they must have
    opposite signs. The rate implied by the amounts is counter per base.
    """

    base_currency_amount: CurrencyAmount
    counter_currency_amount: CurrencyAmount
    payment_date: date

    def __post_init__(self) -> None:
        base, counter = self.base_currency_amount, self.counter_currency_amount
        if base.currency == counter.currency:
            raise ValueError(
                f"FxSingle needs two different currencies, got {base.currency} twice"
            )
        both_zero = base.amount == 0 and counter.amount == 0
        if not both_zero and (base.amount > 0) == (counter.amount > 0):
            raise ValueError("FxSingle amounts must have opposite signs")

    @classmethod
    def of(
        cls, base: CurrencyAmount, counter: CurrencyAmount, payment_date: date
    ) -> FxSingle:
        return cls(base, counter, payment_date)

    @property
    def currency_pair(self) -> CurrencyPair:
        return CurrencyPair(
            self.base_currency_amount.currency, self.counter_currency_amount.currency
        )

    @property
    def currencies(self) -> frozenset[Currency]:
        return frozenset(
            (self.base_currency_amount.currency, self.counter_currency_amount.currency)
        )

    @property
    def contract_rate(self) -> float:
        """Agreed rate, counter units per base unit."""
        if self.base_currency_amount.amount == 0:
            raise ValueError("contract rate undefined for a zero base amount")
        return abs(self.counter_currency_amount.amount / self.base_currency_amount.amount)


@dataclass(frozen=True)
class FxTrade:
    """A trade in a single FX exchange."""

    trade_type: ClassVar[TradeType] = TradeType.FX_SINGLE

    product: FxSingle
    info: TradeInfo = field(default_factory=TradeInfo)
