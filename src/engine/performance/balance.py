"""Monthly balance series construction.

Simulates investing a fixed initial balance into a set of symbols at
their target weights on the first month of the window, then values the
resulting share counts every month:

    quantity[s] = initial_balance × weight[s] / 100 / first_open[s]
    open[i]     = Σ open[s][i] × quantity[s]
    close[i]    = Σ adjusted_close[s][i] × quantity[s]

The bar series of all symbols must cover the same months.
"""

from src.data.models import KlineBar
from src.engine.models.performance import Historic
from src.engine.performance.errors import (
    DataAlignmentError,
    InsufficientHistoricalDataError,
    PerformanceError,
)


def calc_share_quantity(
    initial_balance: float,
    weight: float,
    first_open: float,
) -> float:
    """Calculate the simulated share count bought on the first month.

    Args:
        initial_balance: Amount invested in the whole portfolio.
        weight: Target weight of the symbol in percent (0-100).
        first_open: Opening price of the symbol's first bar.

    Returns:
        Number of shares (fractional).

    Example:
        >>> calc_share_quantity(10000, 60, 50.0)
        120.0
    """
    if first_open <= 0:
        raise PerformanceError(f"Invalid opening price {first_open}")

    return initial_balance * weight / 100 / first_open


def check_alignment(bars_by_symbol: dict[str, list[KlineBar]]) -> int:
    """Verify that every bar series covers the same months.

    Args:
        bars_by_symbol: Symbol -> monthly bars, oldest first.

    Returns:
        The common series length.

    Raises:
        InsufficientHistoricalDataError: A symbol has no bars.
        DataAlignmentError: Lengths or months differ between symbols.
    """
    length = None
    reference_symbol = None
    reference: list[tuple[int, int]] = []

    for symbol, bars in bars_by_symbol.items():
        if not bars:
            raise InsufficientHistoricalDataError(f"No monthly bars for {symbol}")

        months = [bar.month for bar in bars]
        if length is None:
            length = len(bars)
            reference_symbol = symbol
            reference = months
            continue

        if len(bars) != length:
            raise DataAlignmentError(
                f"{symbol} has {len(bars)} monthly bars, "
                f"{reference_symbol} has {length}"
            )

        for i, (month, expected) in enumerate(zip(months, reference)):
            if month != expected:
                raise DataAlignmentError(
                    f"{symbol} bar {i} is {month[0]}-{month[1]:02d}, "
                    f"{reference_symbol} bar {i} is {expected[0]}-{expected[1]:02d}"
                )

    if length is None:
        raise InsufficientHistoricalDataError("No symbols to build a balance series from")

    return length


def build_monthly_balances(
    bars_by_symbol: dict[str, list[KlineBar]],
    weights: dict[str, float],
    initial_balance: float,
) -> list[Historic]:
    """Build the monthly balance series of a weighted portfolio.

    Args:
        bars_by_symbol: Symbol -> monthly bars, oldest first.
        weights: Symbol -> target weight in percent. Missing symbols weigh 0.
        initial_balance: Amount invested at the start.

    Returns:
        One Historic entry per month, oldest first, dated by the bars of
        the first symbol.

    Raises:
        InsufficientHistoricalDataError: A symbol has no bars.
        DataAlignmentError: Bar series are not month-aligned.
    """
    length = check_alignment(bars_by_symbol)

    quantities = {
        symbol: calc_share_quantity(initial_balance, weights.get(symbol, 0.0), bars[0].open)
        for symbol, bars in bars_by_symbol.items()
    }

    first_bars = next(iter(bars_by_symbol.values()))
    historic = []
    for i in range(length):
        open_ = 0.0
        close = 0.0
        for symbol, bars in bars_by_symbol.items():
            open_ += bars[i].open * quantities[symbol]
            close += bars[i].adjusted_close * quantities[symbol]
        historic.append(Historic(date=first_bars[i].trade_date, open=open_, close=close))

    return historic
