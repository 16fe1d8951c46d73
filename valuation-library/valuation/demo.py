"""Demo: sample GBP/USD market, three trades, every configured measure over two scenarios."""

import logging
from datetime import date

from valuation.currency import GBP, USD, CurrencyAmount, FxRate
from valuation.curves import ZeroRateCurve
from valuation.engine import create_default_engine
from valuation.index import IborIndex
from valuation.market import (
    DiscountFactors,
    DiscountFactorsKey,
    FxRateKey,
    IborIndexRates,
    IborIndexRatesKey,
    IndexRateKey,
    MarketDataSnapshot,
    ScenarioMarketData,
    TimeSeries,
)
from valuation.products import (
    FixedFloatSwap,
    FxSingle,
    FxTrade,
    IborFuture,
    IborFutureTrade,
    SwapTrade,
    TradeInfo,
)
from valuation.schedule import PeriodicSchedule, SchedulePeriod

GBP_LIBOR_3M = IborIndex("GBP-LIBOR-3M", GBP, 3)


def _snapshot(valuation_date: date, shift: float, spot: float) -> MarketDataSnapshot:
    pillars = [0.25, 0.5, 1.0, 2.0, 5.0]
    gbp = ZeroRateCurve("GBP-DSC", pillars, [r + shift for r in [0.045, 0.043, 0.040, 0.038, 0.037]])
    usd = ZeroRateCurve("USD-DSC", pillars, [r + shift for r in [0.050, 0.048, 0.046, 0.044, 0.042]])
    libor = ZeroRateCurve("GBP-L3M", pillars, [r + shift for r in [0.047, 0.045, 0.042, 0.040, 0.039]])
    return MarketDataSnapshot(
        valuation_date,
        {
            DiscountFactorsKey(GBP): DiscountFactors(GBP, valuation_date, gbp),
            DiscountFactorsKey(USD): DiscountFactors(USD, valuation_date, usd),
            IborIndexRatesKey(GBP_LIBOR_3M): IborIndexRates(GBP_LIBOR_3M, valuation_date, libor),
            FxRateKey(GBP, USD): FxRate.of(GBP, USD, spot),
        },
        {IndexRateKey(GBP_LIBOR_3M): TimeSeries("GBP-LIBOR-3M", {date(2015, 5, 29): 0.0052})},
    )


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    valuation_date = date(2015, 6, 1)
    market = ScenarioMarketData.of(
        _snapshot(valuation_date, 0.0, 1.55),
        _snapshot(valuation_date, 0.001, 1.60),
    )

    fx = FxTrade(
        FxSingle.of(CurrencyAmount.of(GBP, 1_000_000), CurrencyAmount.of(USD, -1_560_000), date(2016, 6, 1)),
        TradeInfo(trade_id="FX-1", trade_date=valuation_date),
    )
    future = IborFutureTrade(
        security=IborFuture(GBP, 1_000_000, 0.25, date(2015, 12, 16), GBP_LIBOR_3M),
        quantity=20,
        trade_price=0.9550,
        info=TradeInfo(trade_id="FUT-1", trade_date=valuation_date),
    )
    periods = [
        SchedulePeriod(date(2015, 6, 1), date(2015, 12, 1)),
        SchedulePeriod(date(2015, 12, 1), date(2016, 6, 1)),
        SchedulePeriod(date(2016, 6, 1), date(2016, 12, 1)),
        SchedulePeriod(date(2016, 12, 1), date(2017, 6, 1)),
    ]
    swap = SwapTrade(
        FixedFloatSwap(GBP, 10_000_000, 0.04, PeriodicSchedule.of(periods)),
        TradeInfo(trade_id="SWP-1", trade_date=valuation_date),
    )

    engine = create_default_engine()
    print("=== Valuation Demo ===\n")
    print(f"Valuation date {valuation_date}, {market.scenario_count} scenarios\n")
    for trade in (fx, future, swap):
        print(f"{trade.info.trade_id} ({trade.trade_type})")
        for measure in sorted(engine.configured_measures(trade)):
            result = engine.calculate(trade, measure, market)
            values = ", ".join(str(v) for v in result)
            print(f"   {measure.name:<18} {values}")
        print()
    print("Done.")


if __name__ == "__main__":
    main()
