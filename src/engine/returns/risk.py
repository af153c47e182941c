"""Risk metrics calculations."""

import math

import numpy as np

MONTHS_PER_YEAR = 12


def calc_annualized_std(
    returns: list[float],
    periods_per_year: int = MONTHS_PER_YEAR,
) -> float:
    """Calculate annualized standard deviation of periodic returns.

    Uses the population formula (divides by N, not N - 1).

    Formula: Stdev = σ(returns) × sqrt(periods_per_year)

    Args:
        returns: List of periodic returns (as decimals).
        periods_per_year: Number of periods in a year (12 for monthly).

    Returns:
        Annualized standard deviation as a decimal. 0 for an empty series.
    """
    if not returns:
        return 0.0

    return float(np.std(returns, ddof=0)) * math.sqrt(periods_per_year)


def calc_max_drawdown(returns: list[float]) -> float:
    """Calculate max drawdown as the worst single-period return.

    Not a peak-to-trough drawdown: a run of losing months is not
    compounded. The accumulator starts at 0, so a series without any
    losing period reports 0.

    Args:
        returns: List of periodic returns (as decimals).

    Returns:
        Worst periodic return as a non-positive decimal.

    Example:
        >>> calc_max_drawdown([0.1, -0.05, -0.08, 0.02])
        -0.08
    """
    max_drawdown = 0.0
    for r in returns:
        max_drawdown = min(max_drawdown, r)
    return max_drawdown


def calc_best_worst_year(yearly_returns: list[float]) -> tuple[float, float]:
    """Find the best and worst yearly returns.

    Both accumulators start at 0: an all-negative history reports a best
    year of 0, an all-positive one a worst year of 0.

    Args:
        yearly_returns: Calendar-year returns (as decimals).

    Returns:
        (best_year, worst_year)
    """
    best_year = 0.0
    worst_year = 0.0
    for r in yearly_returns:
        best_year = max(best_year, r)
        worst_year = min(worst_year, r)
    return best_year, worst_year


def calc_sharpe_ratio(
    annualized_return: float,
    risk_free_rate: float,
    annualized_std: float,
) -> float:
    """Calculate Sharpe ratio from annualized figures.

    Formula: Sharpe = (Annualized Return - Risk Free Rate) / Annualized Std

    Args:
        annualized_return: CAGR as decimal.
        risk_free_rate: Annual risk-free yield as decimal.
        annualized_std: Annualized standard deviation as decimal.

    Returns:
        Sharpe ratio. 0 when volatility is zero.

    Example:
        >>> round(calc_sharpe_ratio(0.10, 0.02, 0.16), 2)
        0.5
    """
    if annualized_std == 0:
        return 0.0

    return (annualized_return - risk_free_rate) / annualized_std
