"""Calculation functions, function configs and function groups per trade type."""

from valuation.functions.base import CalculationFunction, FunctionConfig
from valuation.functions.future import ibor_future_group
from valuation.functions.fx import fx_single_group
from valuation.functions.group import DefaultFunctionGroup, FunctionGroup, FunctionGroupBuilder
from valuation.functions.swap import swap_group

__all__ = [
    "CalculationFunction",
    "FunctionConfig",
    "FunctionGroup",
    "DefaultFunctionGroup",
    "FunctionGroupBuilder",
    "fx_single_group",
    "ibor_future_group",
    "swap_group",
]
