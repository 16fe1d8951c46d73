"""
Interest-rate curve primitives.

This module deliberately keeps curve math minimal and explicit:
- Times are **year fractions** (e.g. 2.0 = 2Y from the curve reference).
- Rates are **continuously compounded zero rates**.
- Interpolation is **linear in zero rates** between pillar points.

Curves know nothing about dates or currencies; `valuation.market.values` wraps
them with a valuation date and day count to answer date-based questions.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class ZeroRateCurve:
    """
    Zero rate curve (continuously compounded) with linear interpolation.

    - **Pillars** are increasing times (year fractions) where the curve is defined.
    - `zero_rates_cc[i]` is the CC zero rate at `pillars[i]`.
    - Each pillar is one curve parameter; `bumped_parameter` shifts a single one,
      which is the building block for bucketed sensitivities.

    Implements the Curve protocol structurally (no explicit inheritance).
    """

    name: str
    pillars: tuple[float, ...]
    zero_rates_cc: tuple[float, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "pillars", tuple(self.pillars))
        object.__setattr__(self, "zero_rates_cc", tuple(self.zero_rates_cc))
        self._validate()

    def _validate(self) -> None:
        if not self.pillars:
            raise ValueError("curve must have at least one pillar")
        if len(self.pillars) != len(self.zero_rates_cc):
            raise ValueError("pillars and zero_rates_cc must have the same length")
        for i in range(1, len(self.pillars)):
            if self.pillars[i] <= self.pillars[i - 1]:
                raise ValueError("pillars must be strictly increasing")

    @property
    def parameter_count(self) -> int:
        return len(self.pillars)

    @property
    def parameter_times(self) -> tuple[float, ...]:
        return self.pillars

    def zero_rate_cc(self, t: float) -> float:
        """
        Continuously compounded zero rate at time t (year-fraction).
        Linear interpolation in zero rates. t must be >= 0.
        """
        if t < 0:
            raise ValueError("t must be >= 0")
        # Flat extrapolation beyond the end pillars.
        if t <= self.pillars[0]:
            return self.zero_rates_cc[0]
        if t >= self.pillars[-1]:
            return self.zero_rates_cc[-1]
        for i in range(len(self.pillars) - 1):
            if self.pillars[i] <= t <= self.pillars[i + 1]:
                t0, t1 = self.pillars[i], self.pillars[i + 1]
                r0, r1 = self.zero_rates_cc[i], self.zero_rates_cc[i + 1]
                return r0 + (r1 - r0) * (t - t0) / (t1 - t0)
        return self.zero_rates_cc[-1]

    def df(self, t: float) -> float:
        r"""
        Discount factor to time t.

        With CC zero rate r(t), the discount factor is:
        DF(t) = exp(-r(t)*t).
        """
        r = self.zero_rate_cc(t)
        return math.exp(-r * t)

    def bumped(self, bump: float) -> ZeroRateCurve:
        """
        Return a new curve with a *parallel* additive shift to all zero rates.

        `bump` is expressed in absolute rate terms (e.g. 1bp = 0.0001).
        """
        return ZeroRateCurve(
            name=self.name,
            pillars=self.pillars,
            zero_rates_cc=tuple(r + bump for r in self.zero_rates_cc),
        )

    def bumped_parameter(self, index: int, bump: float) -> ZeroRateCurve:
        """Return a new curve with only the zero rate at pillar `index` shifted."""
        if not 0 <= index < self.parameter_count:
            raise IndexError(f"parameter index {index} out of range for {self.name}")
        rates = list(self.zero_rates_cc)
        rates[index] += bump
        return ZeroRateCurve(name=self.name, pillars=self.pillars, zero_rates_cc=tuple(rates))


@dataclass(frozen=True)
class ConstantCurve:
    """
    Curve whose discount factor is the same at every time.

    Handy for tests and for settled cashflows. A rate bump still moves it:
    after `bumped(b)` the discount factor is `value * exp(-b * t)`, so
    sensitivities stay meaningful. The single parameter is the shift itself.
    """

    name: str
    value: float
    shift: float = 0.0

    def __post_init__(self) -> None:
        if self.value <= 0:
            raise ValueError("constant discount factor must be positive")

    @property
    def parameter_count(self) -> int:
        return 1

    @property
    def parameter_times(self) -> tuple[float, ...]:
        return (0.0,)

    def df(self, t: float) -> float:
        if t < 0:
            raise ValueError("t must be >= 0")
        return self.value * math.exp(-self.shift * t)

    def bumped(self, bump: float) -> ConstantCurve:
        return ConstantCurve(name=self.name, value=self.value, shift=self.shift + bump)

    def bumped_parameter(self, index: int, bump: float) -> ConstantCurve:
        if index != 0:
            raise IndexError(f"parameter index {index} out of range for {self.name}")
        return self.bumped(bump)
