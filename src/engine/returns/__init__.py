"""Returns and risk calculation module."""

from src.engine.returns.basic import (
    calc_cagr,
    calc_monthly_returns,
    calc_trailing_returns,
    calc_yearly_returns,
    calc_years,
)
from src.engine.returns.risk import (
    calc_annualized_std,
    calc_best_worst_year,
    calc_max_drawdown,
    calc_sharpe_ratio,
)

__all__ = [
    # Basic returns
    "calc_cagr",
    "calc_monthly_returns",
    "calc_trailing_returns",
    "calc_yearly_returns",
    "calc_years",
    # Risk metrics
    "calc_annualized_std",
    "calc_best_worst_year",
    "calc_max_drawdown",
    "calc_sharpe_ratio",
]
