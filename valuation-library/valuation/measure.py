"""Catalog of the measures a calculation function can produce."""

from __future__ import annotations

from enum import Enum


class Measure(str, Enum):
    """
    Identifier of a requested output.

    Members compare by identity and sort by their string value, so a set of
    measures can be iterated deterministically with `sorted()`.
    """

    PRESENT_VALUE = "PresentValue"
    PV01 = "PV01"
    BUCKETED_PV01 = "BucketedPV01"
    PAR_SPREAD = "ParSpread"
    CURRENCY_EXPOSURE = "CurrencyExposure"
    FORWARD_FX_RATE = "ForwardFxRate"
    FORWARD_RATE = "ForwardRate"

    @classmethod
    def of(cls, name: str) -> Measure:
        """Look up a measure by member name ('PRESENT_VALUE') or value ('PresentValue')."""
        for measure in cls:
            if name in (measure.name, measure.value):
                return measure
        raise ValueError(
            f"Unknown measure {name!r}. Known measures: {[m.name for m in cls]}"
        )

    def __str__(self) -> str:
        return self.value
