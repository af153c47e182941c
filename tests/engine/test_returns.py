"""Tests for return and risk calculations."""

import math
from datetime import date

import numpy as np
import pytest

from src.engine.models import Historic
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


def monthly_series(closes: list[float], start_year: int = 2020, first_open: float | None = None) -> list[Historic]:
    """Historic series with each month opening at the previous close."""
    series = []
    open_ = closes[0] if first_open is None else first_open
    for i, close in enumerate(closes):
        series.append(Historic(date(start_year + i // 12, i % 12 + 1, 1), open_, close))
        open_ = close
    return series


class TestBasicReturns:
    """Tests for basic return calculations."""

    def test_calc_years(self):
        assert calc_years(date(2020, 1, 1), date(2020, 12, 31)) == pytest.approx(365 / 365)
        assert calc_years(date(2020, 1, 1), date(2020, 1, 1)) == 0

    def test_calc_cagr_doubling_in_ten_years(self):
        """100000 -> 200000 over 10 years is about 7.177% per year."""
        cagr = calc_cagr(100000, 200000, 10)
        assert cagr == pytest.approx(0.07177, abs=1e-5)

    def test_calc_cagr_zero_years(self):
        assert calc_cagr(100000, 200000, 0) == 0.0
        assert calc_cagr(100000, 200000, -1) == 0.0

    def test_calc_monthly_returns(self):
        """First month from its own open, later months from the prior close."""
        series = [
            Historic(date(2020, 1, 1), 100.0, 110.0),
            Historic(date(2020, 2, 1), 110.0, 121.0),
            Historic(date(2020, 3, 1), 121.0, 108.9),
        ]
        returns = calc_monthly_returns(series)
        assert returns == pytest.approx([0.10, 0.10, -0.10])

    def test_calc_monthly_returns_uses_prior_close_not_open(self):
        series = [
            Historic(date(2020, 1, 1), 100.0, 110.0),
            Historic(date(2020, 2, 1), 999.0, 121.0),
        ]
        assert calc_monthly_returns(series)[1] == pytest.approx(0.10)

    def test_calc_monthly_returns_empty(self):
        assert calc_monthly_returns([]) == []

    def test_calc_yearly_returns(self):
        """Years chain year-end closes, anchored at the opening balance."""
        closes = [10100.0] * 11 + [11000.0] + [11500.0] * 11 + [12100.0] + [12705.0] * 3
        series = monthly_series(closes, first_open=10000.0)

        yearly = calc_yearly_returns(series, 10000.0)

        assert list(yearly) == [2020, 2021, 2022]
        assert yearly[2020] == pytest.approx(0.10)
        assert yearly[2021] == pytest.approx(0.10)
        assert yearly[2022] == pytest.approx(0.05)


class TestRiskMetrics:
    """Tests for risk metrics."""

    def test_calc_annualized_std(self):
        """Population standard deviation scaled by sqrt(12)."""
        returns = [0.01, 0.02, -0.005, 0.015, 0.01, -0.01]
        expected = float(np.std(returns)) * math.sqrt(12)
        assert calc_annualized_std(returns) == pytest.approx(expected)

    def test_calc_annualized_std_uses_population_formula(self):
        returns = [0.0, 0.02]
        assert calc_annualized_std(returns) == pytest.approx(0.01 * math.sqrt(12))

    def test_calc_annualized_std_empty(self):
        assert calc_annualized_std([]) == 0.0

    def test_calc_max_drawdown_is_worst_month(self):
        returns = [0.05, -0.03, -0.08, 0.02, -0.01]
        assert calc_max_drawdown(returns) == min(returns)

    def test_calc_max_drawdown_all_positive(self):
        assert calc_max_drawdown([0.01, 0.02, 0.03]) == 0.0

    def test_calc_best_worst_year(self):
        assert calc_best_worst_year([0.1, -0.2, 0.3]) == (0.3, -0.2)

    def test_calc_best_worst_year_all_negative(self):
        """Both accumulators start at 0, so best year never drops below 0."""
        best, worst = calc_best_worst_year([-0.1, -0.2])
        assert best == 0.0
        assert worst == -0.2

    def test_calc_best_worst_year_all_positive(self):
        best, worst = calc_best_worst_year([0.1, 0.05])
        assert best == 0.1
        assert worst == 0.0

    def test_calc_sharpe_ratio(self):
        assert calc_sharpe_ratio(0.10, 0.02, 0.16) == pytest.approx(0.5)

    def test_calc_sharpe_ratio_zero_vol(self):
        assert calc_sharpe_ratio(0.10, 0.02, 0.0) == 0.0


class TestTrailingReturns:
    """Tests for trailing returns."""

    def test_short_history_leaves_long_horizons_empty(self):
        series = monthly_series([100.0 + i for i in range(6)], start_year=2023)
        returns = calc_trailing_returns(series, 100.0)

        assert returns.one_month == pytest.approx((105 / 104 - 1) * 100)
        assert returns.three_month == pytest.approx((105 / 102 - 1) * 100)
        assert returns.six_month is None
        assert returns.one_year is None
        assert returns.ten_year is None
        assert returns.max == pytest.approx(5.0)

    def test_ytd_anchored_at_previous_year_end(self):
        closes = [100.0] * 11 + [120.0] + [126.0, 132.0]
        series = monthly_series(closes, start_year=2022)
        returns = calc_trailing_returns(series, 100.0)

        assert returns.ytd == pytest.approx(10.0)

    def test_ytd_anchored_at_initial_balance_in_first_year(self):
        series = monthly_series([105.0, 110.0], start_year=2023, first_open=100.0)
        returns = calc_trailing_returns(series, 100.0)

        assert returns.ytd == pytest.approx(10.0)

    def test_multi_year_figures_are_annualized(self):
        closes = [100.0 * 1.01 ** (i + 1) for i in range(37)]
        series = monthly_series(closes, start_year=2020, first_open=100.0)
        returns = calc_trailing_returns(series, 100.0)

        total = closes[-1] / closes[0] - 1
        assert returns.three_year == pytest.approx(((1 + total) ** (1 / 3) - 1) * 100)
        assert returns.five_year is None

    def test_empty_history(self):
        returns = calc_trailing_returns([], 100.0)
        assert all(value is None for value in returns.to_dict().values())
