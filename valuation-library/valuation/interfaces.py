"""
Protocol-based interfaces for all extension points in the valuation library.

Using typing.Protocol enables structural subtyping: any class that implements
the required methods satisfies the protocol without explicit inheritance.
New curves, trade types and calculation functions can therefore be plugged in
without modifying core code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from valuation.currency import Currency
    from valuation.market.requirements import FunctionRequirements
    from valuation.market.snapshot import MarketDataSnapshot
    from valuation.products.trade import TradeInfo, TradeType

T = TypeVar("T", contravariant=True)
R = TypeVar("R", covariant=True)


@runtime_checkable
class Curve(Protocol):
    """Protocol for discount curve implementations.

    Any class implementing df(), bumped() and the parameter accessors can be
    used behind DiscountFactors, enabling spline or parametric curves without
    changes to the market data layer.
    """

    name: str

    @property
    def parameter_count(self) -> int:
        """Number of bumpable curve parameters (pillars)."""
        ...

    @property
    def parameter_times(self) -> tuple[float, ...]:
        """Time (year fraction) associated with each parameter."""
        ...

    def df(self, t: float) -> float:
        """Return discount factor to time t (year-fraction)."""
        ...

    def bumped(self, bump: float) -> Curve:
        """Return new curve with parallel additive rate shift."""
        ...

    def bumped_parameter(self, index: int, bump: float) -> Curve:
        """Return new curve with a single parameter shifted."""
        ...


@runtime_checkable
class Trade(Protocol):
    """Protocol for all trades the engine can dispatch on.

    Trades are data-only; calculation logic lives in CalculationFunction
    implementations selected by `trade_type`.
    """

    @property
    def trade_type(self) -> TradeType:
        ...

    @property
    def info(self) -> TradeInfo:
        ...


@runtime_checkable
class FxRateProvider(Protocol):
    """Anything that can answer 'how many counter units per base unit'."""

    def fx_rate(self, base: Currency, counter: Currency) -> float:
        ...


@runtime_checkable
class FxConvertible(Protocol):
    """A result that can be expressed in a single reporting currency."""

    def converted_to(self, currency: Currency, rates: FxRateProvider) -> Any:
        ...


class CalculationFunction(Protocol[T, R]):
    """Protocol for the two-phase calculation contract.

    `requirements()` declares every market data key `execute()` will read;
    `execute()` is a pure function of (trade, snapshot).
    """

    def requirements(self, trade: T) -> FunctionRequirements:
        ...

    def default_reporting_currency(self, trade: T) -> Optional[Currency]:
        ...

    def execute(self, trade: T, market: MarketDataSnapshot) -> R:
        ...
