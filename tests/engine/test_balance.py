"""Tests for monthly balance series construction."""

from datetime import date, datetime

import pytest

from src.data.models import KlineBar
from src.data.models.stock import KlineType
from src.engine.performance import (
    DataAlignmentError,
    InsufficientHistoricalDataError,
    PerformanceError,
    build_monthly_balances,
    calc_share_quantity,
    check_alignment,
)


def bar(symbol: str, year: int, month: int, open_: float, close: float, adjusted: float | None = None) -> KlineBar:
    return KlineBar(
        symbol=symbol,
        timestamp=datetime(year, month, 1),
        ktype=KlineType.MONTH,
        open=open_,
        high=max(open_, close),
        low=min(open_, close),
        close=close,
        adjusted_close=close if adjusted is None else adjusted,
    )


class TestShareQuantity:
    """Tests for simulated share counts."""

    def test_calc_share_quantity(self):
        assert calc_share_quantity(10000, 60, 50.0) == pytest.approx(120.0)

    def test_zero_weight(self):
        assert calc_share_quantity(10000, 0, 50.0) == 0.0

    def test_invalid_open(self):
        with pytest.raises(PerformanceError):
            calc_share_quantity(10000, 60, 0.0)


class TestAlignment:
    """Tests for bar series alignment checks."""

    def test_aligned(self):
        bars = {
            "A": [bar("A", 2020, 1, 1, 1), bar("A", 2020, 2, 1, 1)],
            "B": [bar("B", 2020, 1, 1, 1), bar("B", 2020, 2, 1, 1)],
        }
        assert check_alignment(bars) == 2

    def test_length_mismatch(self):
        bars = {
            "A": [bar("A", 2020, 1, 1, 1), bar("A", 2020, 2, 1, 1)],
            "B": [bar("B", 2020, 2, 1, 1)],
        }
        with pytest.raises(DataAlignmentError):
            check_alignment(bars)

    def test_month_mismatch(self):
        bars = {
            "A": [bar("A", 2020, 1, 1, 1), bar("A", 2020, 2, 1, 1)],
            "B": [bar("B", 2020, 2, 1, 1), bar("B", 2020, 3, 1, 1)],
        }
        with pytest.raises(DataAlignmentError):
            check_alignment(bars)

    def test_empty_series(self):
        with pytest.raises(InsufficientHistoricalDataError):
            check_alignment({"A": [bar("A", 2020, 1, 1, 1)], "B": []})

    def test_no_symbols(self):
        with pytest.raises(InsufficientHistoricalDataError):
            check_alignment({})


class TestBuildMonthlyBalances:
    """Tests for the weighted balance series."""

    def test_sixty_forty(self):
        bars = {
            "VTI": [bar("VTI", 2020, 1, 100.0, 110.0), bar("VTI", 2020, 2, 110.0, 121.0)],
            "BND": [bar("BND", 2020, 1, 50.0, 50.0), bar("BND", 2020, 2, 50.0, 55.0)],
        }
        historic = build_monthly_balances(bars, {"VTI": 60, "BND": 40}, 10000.0)

        # 60 VTI shares, 80 BND shares
        assert historic[0].date == date(2020, 1, 1)
        assert historic[0].open == pytest.approx(10000.0)
        assert historic[0].close == pytest.approx(60 * 110 + 80 * 50)
        assert historic[1].open == pytest.approx(60 * 110 + 80 * 50)
        assert historic[1].close == pytest.approx(60 * 121 + 80 * 55)

    def test_closes_use_adjusted_close(self):
        bars = {"VTI": [bar("VTI", 2020, 1, 100.0, 110.0, adjusted=111.0)]}
        historic = build_monthly_balances(bars, {"VTI": 100}, 1000.0)

        assert historic[0].close == pytest.approx(10 * 111.0)

    def test_misaligned_series_are_not_truncated(self):
        bars = {
            "VTI": [bar("VTI", 2020, 1, 100.0, 110.0), bar("VTI", 2020, 2, 110.0, 121.0)],
            "BND": [bar("BND", 2020, 1, 50.0, 50.0)],
        }
        with pytest.raises(DataAlignmentError):
            build_monthly_balances(bars, {"VTI": 60, "BND": 40}, 10000.0)
