"""Performance result models.

Historic entries form a reconstructed monthly value history of a
portfolio. PerformanceResult carries the summary statistics derived
from one such history. All percentage fields are in percent
(e.g., 7.18 means 7.18%).
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any


@dataclass(frozen=True)
class Historic:
    """One month of a reconstructed portfolio value history."""

    date: date
    open: float
    close: float


@dataclass
class TrailingReturns:
    """Trailing returns snapshot in percent.

    Horizons longer than the available history are None. The 3/5/10-year
    figures are annualized; the others are cumulative.
    """

    one_month: float | None = None
    three_month: float | None = None
    six_month: float | None = None
    ytd: float | None = None
    one_year: float | None = None
    three_year: float | None = None
    five_year: float | None = None
    ten_year: float | None = None
    max: float | None = None

    def to_dict(self) -> dict[str, float | None]:
        """Convert to an ordered dictionary keyed by display label."""
        return {
            "1-Month": self.one_month,
            "3-Month": self.three_month,
            "6-Month": self.six_month,
            "YTD": self.ytd,
            "1-Year": self.one_year,
            "3-Year": self.three_year,
            "5-Year": self.five_year,
            "10-Year": self.ten_year,
            "Max": self.max,
        }


@dataclass
class PerformanceResult:
    """Summary statistics for one monthly balance series.

    Attributes:
        name: Portfolio (or benchmark symbol) the series belongs to
        historic: Monthly balance series, oldest first
        initial_balance: Simulated amount invested at the start date
        final_balance: Close of the last month
        cagr: Compound annual growth rate (%)
        stdev: Annualized standard deviation of monthly returns (%)
        best_year: Best calendar-year return, never below 0 (%)
        worst_year: Worst calendar-year return, never above 0 (%)
        max_drawdown: Worst single-month return, never above 0 (%)
        sharpe_ratio: (CAGR - risk free rate) / stdev
    """

    name: str
    historic: list[Historic] = field(default_factory=list)
    initial_balance: float = 0.0
    final_balance: float = 0.0
    cagr: float = 0.0
    stdev: float = 0.0
    best_year: float = 0.0
    worst_year: float = 0.0
    max_drawdown: float = 0.0
    sharpe_ratio: float = 0.0
    returns: TrailingReturns = field(default_factory=TrailingReturns)
    monthly_returns: list[float] = field(default_factory=list)
    yearly_returns: dict[int, float] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (without the full historic series)."""
        return {
            "name": self.name,
            "months": len(self.historic),
            "initial_balance": self.initial_balance,
            "final_balance": self.final_balance,
            "cagr": self.cagr,
            "stdev": self.stdev,
            "best_year": self.best_year,
            "worst_year": self.worst_year,
            "max_drawdown": self.max_drawdown,
            "sharpe_ratio": self.sharpe_ratio,
            "returns": self.returns.to_dict(),
        }
