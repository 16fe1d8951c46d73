"""Function groups: the measure -> function mapping for one trade type."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Generic, Mapping, Optional, TypeVar

from valuation.functions.base import CalculationFunction, FunctionConfig
from valuation.measure import Measure
from valuation.products.trade import TradeType

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FunctionGroup(ABC, Generic[T]):
    """Maps each supported measure to the config that computes it for trades of type T."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @property
    @abstractmethod
    def trade_type(self) -> TradeType:
        ...

    @abstractmethod
    def configured_measures(self, trade: T) -> frozenset[Measure]:
        """Every measure with a function registered and applicable to `trade`."""
        ...

    @abstractmethod
    def function_config(self, trade: T, measure: Measure) -> Optional[FunctionConfig[T]]:
        """Config for `measure`, or None when the measure is not supported for `trade`."""
        ...


class DefaultFunctionGroup(FunctionGroup[T]):
    """
    FunctionGroup backed by a mapping fixed at construction.

    The mapping is never mutated afterwards, so lookups are safe from any
    number of threads without locking.
    """

    def __init__(
        self, name: str, trade_type: TradeType, configs: Mapping[Measure, FunctionConfig[T]]
    ) -> None:
        self._name = name
        self._trade_type = trade_type
        self._configs: Mapping[Measure, FunctionConfig[T]] = MappingProxyType(dict(configs))

    @classmethod
    def builder(cls, name: str, trade_type: TradeType) -> FunctionGroupBuilder[T]:
        return FunctionGroupBuilder(name, trade_type)

    @property
    def name(self) -> str:
        return self._name

    @property
    def trade_type(self) -> TradeType:
        return self._trade_type

    @property
    def all_measures(self) -> frozenset[Measure]:
        """Measures registered for any trade of this type, ignoring applicability."""
        return frozenset(self._configs)

    def configured_measures(self, trade: T) -> frozenset[Measure]:
        return frozenset(m for m, cfg in self._configs.items() if cfg.is_applicable(trade))

    def function_config(self, trade: T, measure: Measure) -> Optional[FunctionConfig[T]]:
        config = self._configs.get(measure)
        if config is None or not config.is_applicable(trade):
            logger.debug("%s: %s not available for %s", self._name, measure, type(trade).__name__)
            return None
        return config

    def __repr__(self) -> str:
        measures = ", ".join(m.name for m in sorted(self._configs))
        return f"DefaultFunctionGroup({self._name!r}, {self._trade_type}, [{measures}])"


@dataclass
class FunctionGroupBuilder(Generic[T]):
    """Collects measure registrations; `build()` may be called once."""

    name: str
    trade_type: TradeType
    _configs: dict[Measure, FunctionConfig[T]] = field(default_factory=dict, init=False)
    _built: bool = field(default=False, init=False)

    def add_function(
        self,
        measure: Measure,
        factory: Callable[[], CalculationFunction[T, Any]],
        applies: Optional[Callable[[T], bool]] = None,
    ) -> FunctionGroupBuilder[T]:
        if self._built:
            raise RuntimeError("builder already consumed; create a new one")
        if measure in self._configs:
            raise ValueError(f"{self.name}: a function is already registered for {measure}")
        self._configs[measure] = FunctionConfig(factory, applies)
        return self

    def build(self) -> DefaultFunctionGroup[T]:
        if self._built:
            raise RuntimeError("builder already consumed; create a new one")
        self._built = True
        return DefaultFunctionGroup(self.name, self.trade_type, self._configs)
