"""Trade-level metadata shared by all trade types."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class TradeType(str, Enum):
    """Closed set of trade variants the engine can dispatch on."""

    FX_SINGLE = "FxSingle"
    IBOR_FUTURE = "IborFuture"
    SWAP = "Swap"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TradeInfo:
    """Identifier, dates and free-form attributes of a trade; every field optional."""

    trade_id: Optional[str] = None
    trade_date: Optional[date] = None
    settlement_date: Optional[date] = None
    attributes: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
        if (
            self.trade_date is not None
            and self.settlement_date is not None
            and self.settlement_date < self.trade_date
        ):
            raise ValueError("settlement_date must not be before trade_date")

    @classmethod
    def empty(cls) -> TradeInfo:
        return cls()
