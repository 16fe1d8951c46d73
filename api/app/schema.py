"""GraphQL schema: measure discovery and calculation queries."""

from typing import Optional

import strawberry

from app.services import calculate, configured_measures
from app.types import MarketInput, MeasureResult, TradeInput


@strawberry.type
class Query:
    @strawberry.field
    def version(self) -> str:
        return "0.1.0"

    @strawberry.field
    def configured_measures(self, trade: TradeInput) -> list[str]:
        """Measures available for the trade (e.g. PV and par spread need a future's trade price)."""
        return configured_measures(trade)

    @strawberry.field
    def calculate(
        self,
        trade: TradeInput,
        market: MarketInput,
        measures: list[str],
        reporting_currency: Optional[str] = None,
        convert: bool = True,
    ) -> list[MeasureResult]:
        """
        Calculate measures for one trade across all market scenarios.

        Monetary results are converted to `reporting_currency` (default: the
        trade's natural currency) using each scenario's own FX rates. Set
        `convert: false` to get raw per-currency amounts.
        """
        return calculate(
            trade=trade,
            market=market,
            measures=measures,
            reporting_currency=reporting_currency,
            convert=convert,
        )


schema = strawberry.Schema(query=Query)
