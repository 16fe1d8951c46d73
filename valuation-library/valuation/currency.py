"""
Currencies, FX rates and currency-labelled amounts.

Every monetary number that leaves a calculation function is labelled with its
currency: a single `CurrencyAmount`, or a `MultiCurrencyAmount` holding at most
one amount per currency. Conversion between currencies is never implicit; it
always goes through an `FxRateProvider` (typically a market data snapshot).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterable, Iterator

if TYPE_CHECKING:
    from valuation.interfaces import FxRateProvider

_CODE = re.compile(r"^[A-Z]{3}$")


@dataclass(frozen=True, order=True)
class Currency:
    """ISO-4217 style three-letter currency code (e.g. 'GBP')."""

    code: str

    def __post_init__(self) -> None:
        if not _CODE.match(self.code):
            raise ValueError(
                f"Currency code must be three upper-case letters, got {self.code!r}"
            )

    @classmethod
    def of(cls, code: str) -> Currency:
        return cls(code.strip().upper())

    def __str__(self) -> str:
        return self.code


GBP = Currency("GBP")
USD = Currency("USD")
EUR = Currency("EUR")
JPY = Currency("JPY")
CHF = Currency("CHF")


@dataclass(frozen=True, order=True)
class CurrencyPair:
    """Ordered pair of currencies, quoted as counter units per one base unit."""

    base: Currency
    counter: Currency

    @classmethod
    def parse(cls, pair: str) -> CurrencyPair:
        """Parse 'EURUSD' or 'EUR/USD'."""
        text = pair.replace("/", "").strip().upper()
        if len(text) != 6:
            raise ValueError(f"Currency pair must look like 'EURUSD', got {pair!r}")
        return cls(Currency(text[:3]), Currency(text[3:]))

    def inverse(self) -> CurrencyPair:
        return CurrencyPair(self.counter, self.base)

    def is_identity(self) -> bool:
        return self.base == self.counter

    def __str__(self) -> str:
        return f"{self.base}/{self.counter}"


@dataclass(frozen=True)
class FxRate:
    """
    A single FX rate: `rate` units of counter currency per one unit of base.

    An FxRate for EUR/USD can also answer USD/EUR through its inverse.
    """

    pair: CurrencyPair
    rate: float

    def __post_init__(self) -> None:
        if self.rate <= 0:
            raise ValueError(f"FX rate must be positive, got {self.rate}")

    @classmethod
    def of(cls, base: Currency, counter: Currency, rate: float) -> FxRate:
        return cls(CurrencyPair(base, counter), rate)

    def inverse(self) -> FxRate:
        return FxRate(self.pair.inverse(), 1.0 / self.rate)

    def fx_rate(self, base: Currency, counter: Currency) -> float:
        """Rate for base/counter, using the inverse if the pair is reversed."""
        if base == counter:
            return 1.0
        if base == self.pair.base and counter == self.pair.counter:
            return self.rate
        if base == self.pair.counter and counter == self.pair.base:
            return 1.0 / self.rate
        raise ValueError(f"FxRate {self.pair} cannot provide {base}/{counter}")

    def __str__(self) -> str:
        return f"{self.pair} {self.rate}"


@dataclass(frozen=True)
class CurrencyAmount:
    """A signed amount of money in a single currency."""

    currency: Currency
    amount: float

    @classmethod
    def of(cls, currency: Currency, amount: float) -> CurrencyAmount:
        return cls(currency, float(amount))

    @classmethod
    def zero(cls, currency: Currency) -> CurrencyAmount:
        return cls(currency, 0.0)

    def plus(self, other: CurrencyAmount) -> CurrencyAmount:
        if other.currency != self.currency:
            raise ValueError(
                f"Cannot add {other.currency} to {self.currency}; "
                "use MultiCurrencyAmount for mixed currencies"
            )
        return CurrencyAmount(self.currency, self.amount + other.amount)

    def __add__(self, other: CurrencyAmount) -> CurrencyAmount:
        return self.plus(other)

    def __neg__(self) -> CurrencyAmount:
        return CurrencyAmount(self.currency, -self.amount)

    def multiplied_by(self, factor: float) -> CurrencyAmount:
        return CurrencyAmount(self.currency, self.amount * factor)

    def converted_to(
        self, currency: Currency, rates: FxRateProvider
    ) -> CurrencyAmount:
        """Convert into `currency` using the provider's base/counter rate."""
        if currency == self.currency:
            return self
        return CurrencyAmount(
            currency, self.amount * rates.fx_rate(self.currency, currency)
        )

    def __str__(self) -> str:
        return f"{self.currency} {self.amount}"


@dataclass(frozen=True)
class MultiCurrencyAmount:
    """
    Amounts in several currencies, at most one amount per currency.

    Amounts are kept sorted by currency so that equality and iteration do not
    depend on insertion order. Zero amounts are kept: an amount of GBP 0 is
    different from no GBP amount at all.
    """

    amounts: tuple[CurrencyAmount, ...] = ()

    def __post_init__(self) -> None:
        ordered = tuple(sorted(self.amounts, key=lambda a: a.currency))
        seen = set()
        for ca in ordered:
            if ca.currency in seen:
                raise ValueError(
                    f"MultiCurrencyAmount holds one amount per currency, "
                    f"duplicate {ca.currency}"
                )
            seen.add(ca.currency)
        object.__setattr__(self, "amounts", ordered)

    @classmethod
    def empty(cls) -> MultiCurrencyAmount:
        return cls(())

    @classmethod
    def of(cls, *amounts: CurrencyAmount) -> MultiCurrencyAmount:
        """Create from distinct-currency amounts; duplicates are rejected."""
        return cls(tuple(amounts))

    @classmethod
    def total(cls, amounts: Iterable[CurrencyAmount]) -> MultiCurrencyAmount:
        """Create by summing amounts, merging those of the same currency."""
        result = cls.empty()
        for ca in amounts:
            result = result.plus(ca)
        return result

    @property
    def currencies(self) -> frozenset[Currency]:
        return frozenset(ca.currency for ca in self.amounts)

    def __len__(self) -> int:
        return len(self.amounts)

    def __iter__(self) -> Iterator[CurrencyAmount]:
        return iter(self.amounts)

    def __contains__(self, currency: object) -> bool:
        return any(ca.currency == currency for ca in self.amounts)

    def is_empty(self) -> bool:
        return not self.amounts

    def amount(self, currency: Currency) -> CurrencyAmount:
        """Amount in `currency`. Raises ValueError if there is none."""
        for ca in self.amounts:
            if ca.currency == currency:
                return ca
        raise ValueError(f"No amount for {currency} in {self}")

    def amount_or_zero(self, currency: Currency) -> CurrencyAmount:
        if currency in self:
            return self.amount(currency)
        return CurrencyAmount.zero(currency)

    def plus(
        self, other: CurrencyAmount | MultiCurrencyAmount
    ) -> MultiCurrencyAmount:
        """Add an amount (or all amounts of another instance), merging per currency."""
        others = other.amounts if isinstance(other, MultiCurrencyAmount) else (other,)
        merged = {ca.currency: ca for ca in self.amounts}
        for ca in others:
            merged[ca.currency] = merged[ca.currency].plus(ca) if ca.currency in merged else ca
        return MultiCurrencyAmount(tuple(merged.values()))

    def __add__(
        self, other: CurrencyAmount | MultiCurrencyAmount
    ) -> MultiCurrencyAmount:
        return self.plus(other)

    def __sub__(self, other: MultiCurrencyAmount) -> MultiCurrencyAmount:
        return self.plus(other.negated())

    def map_amounts(self, fn: Callable[[float], float]) -> MultiCurrencyAmount:
        return MultiCurrencyAmount(
            tuple(CurrencyAmount(ca.currency, fn(ca.amount)) for ca in self.amounts)
        )

    def negated(self) -> MultiCurrencyAmount:
        return self.map_amounts(lambda a: -a)

    def converted_to(
        self, currency: Currency, rates: FxRateProvider
    ) -> CurrencyAmount:
        """Convert every amount into `currency` and sum into a single amount."""
        total = CurrencyAmount.zero(currency)
        for ca in self.amounts:
            total = total.plus(ca.converted_to(currency, rates))
        return total

    def __str__(self) -> str:
        return "[" + ", ".join(str(ca) for ca in self.amounts) + "]"
