"""PV01 risk measures (bump curves, reprice)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from valuation.currency import CurrencyAmount, MultiCurrencyAmount
from valuation.market.keys import MarketDataKey
from valuation.market.snapshot import MarketDataSnapshot
from valuation.pricers.base import BasePricer
from valuation.result import CurveSensitivities, CurveSensitivity
from valuation.risk.base import BaseRiskMeasure


def _as_multi(pv: CurrencyAmount | MultiCurrencyAmount) -> MultiCurrencyAmount:
    if isinstance(pv, CurrencyAmount):
        return MultiCurrencyAmount.of(pv)
    return pv


def _pv(pricer: BasePricer, trade: Any, market: MarketDataSnapshot) -> MultiCurrencyAmount:
    return _as_multi(pricer.present_value(trade, market))


@dataclass(frozen=True)
class PV01Parallel(BaseRiskMeasure):
    """
    Parallel PV01: PV(bumped) - PV(base) when every curve in `curve_keys` is
    shifted by `bump_bp` basis points at once. Reported per currency.
    """

    curve_keys: Sequence[MarketDataKey]
    bump_bp: float = 1.0

    @property
    def name(self) -> str:
        return "PV01_" + "_".join(sorted(str(k) for k in self.curve_keys))

    def compute(
        self, pricer: BasePricer, trade: Any, market: MarketDataSnapshot
    ) -> MultiCurrencyAmount:
        bump = self.bump_bp / 10000.0
        bumped_market = market
        for key in self.curve_keys:
            bumped_market = bumped_market.with_value(key, market.get(key).bumped(bump))
        return _pv(pricer, trade, bumped_market) - _pv(pricer, trade, market)


@dataclass(frozen=True)
class PV01Bucketed(BaseRiskMeasure):
    """
    Bucketed PV01: for each curve and each of its parameters, PV(bumped) -
    PV(base) when only that parameter is shifted by `bump_bp` basis points.
    Currencies whose PV does not move are left out.
    """

    curve_keys: Sequence[MarketDataKey]
    bump_bp: float = 1.0

    @property
    def name(self) -> str:
        return "BucketedPV01_" + "_".join(sorted(str(k) for k in self.curve_keys))

    def compute(
        self, pricer: BasePricer, trade: Any, market: MarketDataSnapshot
    ) -> CurveSensitivities:
        bump = self.bump_bp / 10000.0
        base = _pv(pricer, trade, market)
        entries: list[CurveSensitivity] = []
        for key in self.curve_keys:
            value = market.get(key)
            deltas = []
            for i in range(value.parameter_count):
                bumped_market = market.with_value(key, value.bumped_parameter(i, bump))
                deltas.append(_pv(pricer, trade, bumped_market) - base)
            currencies = sorted(set().union(*(d.currencies for d in deltas)))
            for ccy in currencies:
                sens = tuple(d.amount_or_zero(ccy).amount for d in deltas)
                if any(s != 0.0 for s in sens):
                    entries.append(
                        CurveSensitivity(key, ccy, value.curve.parameter_times, sens)
                    )
        return CurveSensitivities(tuple(entries))
