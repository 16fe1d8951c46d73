"""
Exception hierarchy for the valuation library.

Every failure the engine can surface derives from `ValuationError`, so a caller
evaluating many (trade, measure, scenario) combinations can isolate failures per
combination with a single `except ValuationError`. Each class also derives from
the closest builtin so code written against `KeyError`/`ValueError`/`IndexError`
keeps working.

Unsupported measures are not an error: lookups return None instead.
"""

from __future__ import annotations

from typing import Any


class ValuationError(Exception):
    """Base class for all valuation failures."""


class MissingMarketDataError(ValuationError, LookupError):
    """A market data key was requested that the snapshot does not hold."""

    def __init__(self, key: Any, kind: str = "value") -> None:
        self.key = key
        self.kind = kind
        super().__init__(f"Market data {kind} not found for key: {key}")


class MissingFxRateError(ValuationError, LookupError):
    """An FX rate needed for currency conversion is not available."""

    def __init__(self, base: Any, counter: Any) -> None:
        self.base = base
        self.counter = counter
        super().__init__(
            f"No FX rate available for {base}/{counter}; "
            "conversion never assumes parity"
        )


class InvalidScheduleError(ValuationError, ValueError):
    """A schedule was constructed from an invalid set of periods."""


class ScheduleIndexError(ValuationError, IndexError):
    """A schedule period was requested with an index outside the schedule."""

    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(
            f"Schedule period index {index} out of range, must be 0 to {size - 1}"
        )
