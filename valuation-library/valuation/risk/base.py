"""Base class for risk measure implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from valuation.market.snapshot import MarketDataSnapshot
from valuation.pricers.base import BasePricer


class BaseRiskMeasure(ABC):
    """Base class for risk measure implementations."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name."""
        ...

    @abstractmethod
    def compute(self, pricer: BasePricer, trade: Any, market: MarketDataSnapshot) -> Any:
        """Compute the risk measure value."""
        ...
