"""Basic return calculations over a monthly balance series."""

from datetime import date

from src.engine.models.performance import Historic, TrailingReturns

DAYS_PER_YEAR = 365


def calc_years(start_date: date, end_date: date) -> float:
    """Elapsed years between two dates (days / 365)."""
    return (end_date - start_date).days / DAYS_PER_YEAR


def calc_cagr(
    initial_balance: float,
    final_balance: float,
    years: float,
) -> float:
    """Calculate compound annual growth rate.

    Formula: CAGR = (final / initial) ^ (1 / years) - 1

    Args:
        initial_balance: Starting balance.
        final_balance: Ending balance.
        years: Elapsed time in years.

    Returns:
        CAGR as a decimal. 0 when years or initial_balance is not positive.

    Example:
        >>> round(calc_cagr(100000, 200000, 10), 5)
        0.07177
    """
    if years <= 0 or initial_balance <= 0:
        return 0.0

    return (final_balance / initial_balance) ** (1 / years) - 1


def calc_monthly_returns(historic: list[Historic]) -> list[float]:
    """Calculate month-over-month returns.

    The first month has no prior close and is measured from its own open;
    every later month chains off the previous month's close.

    Args:
        historic: Monthly balance series, oldest first.

    Returns:
        List of returns as decimals, one per month.

    Example:
        >>> series = [
        ...     Historic(date(2020, 1, 1), 100, 110),
        ...     Historic(date(2020, 2, 1), 110, 121),
        ... ]
        >>> [round(r, 4) for r in calc_monthly_returns(series)]
        [0.1, 0.1]
    """
    returns = []
    for i, entry in enumerate(historic):
        base = entry.open if i == 0 else historic[i - 1].close
        returns.append((entry.close - base) / base if base else 0.0)
    return returns


def calc_yearly_returns(
    historic: list[Historic],
    initial_balance: float,
) -> dict[int, float]:
    """Calculate calendar-year returns.

    Each year runs from the previous year-end close to this year's last
    close. The first (possibly partial) year is anchored at the opening
    balance and the last partial year ends at the closing balance.

    Args:
        historic: Monthly balance series, oldest first.
        initial_balance: Opening balance of the window.

    Returns:
        Mapping of year -> return as a decimal, in chronological order.
    """
    year_end: dict[int, float] = {}
    for entry in historic:
        year_end[entry.date.year] = entry.close

    returns = {}
    previous = initial_balance
    for year, close in year_end.items():
        returns[year] = (close - previous) / previous if previous else 0.0
        previous = close
    return returns


def _total_return(final: float, base: float) -> float | None:
    if not base:
        return None
    return final / base - 1


def _trailing(historic: list[Historic], months: int) -> float | None:
    if len(historic) <= months:
        return None
    return _total_return(historic[-1].close, historic[-1 - months].close)


def _annualize(total: float | None, years: int) -> float | None:
    if total is None or total <= -1:
        return total
    return (1 + total) ** (1 / years) - 1


def calc_trailing_returns(
    historic: list[Historic],
    initial_balance: float,
) -> TrailingReturns:
    """Calculate the trailing returns snapshot.

    Args:
        historic: Monthly balance series, oldest first.
        initial_balance: Opening balance of the window.

    Returns:
        TrailingReturns in percent; horizons without enough history are None.
    """
    if not historic:
        return TrailingReturns()

    final = historic[-1].close
    current_year = historic[-1].date.year

    ytd_base = initial_balance
    for entry in historic:
        if entry.date.year < current_year:
            ytd_base = entry.close

    def pct(value: float | None) -> float | None:
        return None if value is None else value * 100

    return TrailingReturns(
        one_month=pct(_trailing(historic, 1)),
        three_month=pct(_trailing(historic, 3)),
        six_month=pct(_trailing(historic, 6)),
        ytd=pct(_total_return(final, ytd_base)),
        one_year=pct(_trailing(historic, 12)),
        three_year=pct(_annualize(_trailing(historic, 36), 3)),
        five_year=pct(_annualize(_trailing(historic, 60), 5)),
        ten_year=pct(_annualize(_trailing(historic, 120), 10)),
        max=pct(_total_return(final, initial_balance)),
    )
