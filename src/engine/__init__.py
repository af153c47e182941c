"""Calculation Engine Layer.

This module provides the performance calculations. It processes raw price
bars from the data layer and outputs monthly balance series and summary
statistics for use by the business layer.

Architecture:
- models/: Result types (Historic, PerformanceResult, TrailingReturns)
- returns/: Return and risk statistics (CAGR, stdev, drawdown, Sharpe)
- performance/: Monthly balance series simulation
"""

from src.engine.models import Historic, PerformanceResult, TrailingReturns
from src.engine.performance import (
    DataAlignmentError,
    InsufficientHistoricalDataError,
    PerformanceError,
    build_monthly_balances,
    check_alignment,
)
from src.engine.returns import (
    calc_annualized_std,
    calc_best_worst_year,
    calc_cagr,
    calc_max_drawdown,
    calc_monthly_returns,
    calc_sharpe_ratio,
    calc_trailing_returns,
    calc_yearly_returns,
    calc_years,
)

__all__ = [
    "Historic",
    "PerformanceResult",
    "TrailingReturns",
    "DataAlignmentError",
    "InsufficientHistoricalDataError",
    "PerformanceError",
    "build_monthly_balances",
    "check_alignment",
    "calc_annualized_std",
    "calc_best_worst_year",
    "calc_cagr",
    "calc_max_drawdown",
    "calc_monthly_returns",
    "calc_sharpe_ratio",
    "calc_trailing_returns",
    "calc_yearly_returns",
    "calc_years",
]
