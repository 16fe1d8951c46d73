"""
Risk measures implemented via "bump and reprice".

PV01Parallel and PV01Bucketed work with any pricer and any curve-backed
market data value that supports bumped() / bumped_parameter().
"""

from valuation.risk.base import BaseRiskMeasure
from valuation.risk.pv01 import PV01Bucketed, PV01Parallel

__all__ = [
    "BaseRiskMeasure",
    "PV01Parallel",
    "PV01Bucketed",
]
