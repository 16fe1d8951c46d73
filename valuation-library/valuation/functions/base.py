"""Calculation function base class and the factory descriptor that creates them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from valuation.currency import Currency
from valuation.market.requirements import FunctionRequirements
from valuation.market.snapshot import MarketDataSnapshot

T = TypeVar("T")
R = TypeVar("R")


class CalculationFunction(ABC, Generic[T, R]):
    """Abstract base class for calculation functions.

    One subclass computes one measure for one trade type. Instances are
    stateless: all inputs arrive through `requirements()` and `execute()`,
    so a fresh instance per worker needs no locking.
    """

    @abstractmethod
    def requirements(self, trade: T) -> FunctionRequirements:
        """Declare every market data key `execute()` reads. Must not touch market data."""
        ...

    def default_reporting_currency(self, trade: T) -> Optional[Currency]:
        """Currency results are reported in when the caller does not choose one."""
        return None

    @abstractmethod
    def execute(self, trade: T, market: MarketDataSnapshot) -> R:
        """Compute the measure for one scenario."""
        ...


@dataclass(frozen=True)
class FunctionConfig(Generic[T]):
    """
    Descriptor that creates calculation functions on demand.

    `factory` builds a fresh function per call. `applies` restricts the config
    to trades of a particular runtime shape (e.g. with a trade price set).
    """

    factory: Callable[[], CalculationFunction[T, Any]]
    applies: Optional[Callable[[T], bool]] = None

    @classmethod
    def of(
        cls,
        factory: Callable[[], CalculationFunction[T, Any]],
        applies: Optional[Callable[[T], bool]] = None,
    ) -> FunctionConfig[T]:
        return cls(factory, applies)

    def create_function(self) -> CalculationFunction[T, Any]:
        return self.factory()

    def is_applicable(self, trade: T) -> bool:
        return self.applies is None or bool(self.applies(trade))
