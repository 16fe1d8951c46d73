"""GraphQL types for the valuation API."""

from __future__ import annotations

from datetime import date
from typing import Optional

import strawberry


# --- Input types (request payloads) ---


@strawberry.input
class CurveInput:
    """Curve definition: name, pillars (year fractions), zero rates (continuously compounded)."""

    name: str
    pillars: list[float]
    zero_rates_cc: list[float]


@strawberry.input
class DiscountCurveInput:
    """Discount curve for one currency."""

    currency: str
    curve: CurveInput
    day_count: str = "ACT_360"


@strawberry.input
class IborIndexInput:
    """Ibor index (e.g. GBP-LIBOR-3M)."""

    name: str
    currency: str
    tenor_months: int
    day_count: str = "ACT_360"


@strawberry.input
class IndexCurveInput:
    """Forward curve for an Ibor index."""

    index: IborIndexInput
    curve: CurveInput


@strawberry.input
class FxRateInput:
    """FX rate for a pair (e.g. GBPUSD), counter units per base unit."""

    pair: str
    rate: float


@strawberry.input
class FixingInput:
    """Historic fixing of an index; the index must have a forward curve in the same scenario."""

    index: str
    fixing_date: date
    value: float


@strawberry.input
class ScenarioInput:
    """Market data for one scenario."""

    discount_curves: list[DiscountCurveInput]
    index_curves: Optional[list[IndexCurveInput]] = None
    fx_rates: Optional[list[FxRateInput]] = None
    fixings: Optional[list[FixingInput]] = None


@strawberry.input
class MarketInput:
    """Valuation date and one or more scenarios."""

    valuation_date: date
    scenarios: list[ScenarioInput]


@strawberry.input
class FxSingleInput:
    """FX single payment: signed amounts in two currencies exchanged on one date."""

    base_currency: str
    base_amount: float
    counter_currency: str
    counter_amount: float
    payment_date: date


@strawberry.input
class IborFutureInput:
    """Ibor future position; without trade_price only risk and forward rate are available."""

    currency: str
    notional: float
    accrual_factor: float
    last_trade_date: date
    index: IborIndexInput
    quantity: float
    multiplier: float = 1.0
    trade_price: Optional[float] = None


@strawberry.input
class TradeInput:
    """A trade: exactly one of fx_single / ibor_future."""

    trade_id: Optional[str] = None
    trade_date: Optional[date] = None
    fx_single: Optional[FxSingleInput] = None
    ibor_future: Optional[IborFutureInput] = None


# --- Output types (response payloads) ---


@strawberry.type
class AmountResult:
    currency: str
    amount: float


@strawberry.type
class SensitivityResult:
    """Bucketed sensitivity of one curve, one value per curve parameter."""

    curve: str
    currency: str
    parameter_times: list[float]
    sensitivities: list[float]


@strawberry.type
class ScenarioValue:
    """
    One scenario's value. Which fields are set depends on the measure:
    `amount` for single-currency values, `amounts` for unconverted multi-currency
    values, `rate` for rates and spreads, `sensitivities` for bucketed PV01.
    """

    scenario: int
    amount: Optional[AmountResult] = None
    amounts: Optional[list[AmountResult]] = None
    rate: Optional[float] = None
    sensitivities: Optional[list[SensitivityResult]] = None


@strawberry.type
class MeasureResult:
    """Results of one measure across all scenarios, in scenario order."""

    measure: str
    supported: bool
    reporting_currency: Optional[str] = None
    values: list[ScenarioValue] = strawberry.field(default_factory=list)
