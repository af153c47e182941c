#!/usr/bin/env python3
"""Calculation Engine Demo.

Demonstrates the performance calculations of the engine layer on a
synthetic two-fund portfolio (no network access needed).
"""

import argparse
import logging
import math
from datetime import date, datetime

from src.data.models import KlineBar
from src.data.models.stock import KlineType
from src.engine import (
    build_monthly_balances,
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

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def synthetic_bars(symbol: str, months: int, start_price: float, drift: float, wave: float) -> list[KlineBar]:
    """Monthly bars following a drifting sine wave."""
    bars = []
    price = start_price
    for i in range(months):
        year, month = 2015 + i // 12, i % 12 + 1
        close = price * (1 + drift + wave * math.sin(i / 3))
        bars.append(
            KlineBar(
                symbol=symbol,
                timestamp=datetime(year, month, 1),
                ktype=KlineType.MONTH,
                open=price,
                high=max(price, close),
                low=min(price, close),
                close=close,
                adjusted_close=close,
            )
        )
        price = close
    return bars


def demo_performance(months: int, initial_balance: float) -> None:
    """Demonstrate a 60/40 portfolio simulation."""
    logger.info("=" * 60)
    logger.info(f"60/40 portfolio over {months} months, {initial_balance:,.0f} invested")
    logger.info("=" * 60)

    bars = {
        "VTI": synthetic_bars("VTI", months, 100.0, 0.008, 0.04),
        "BND": synthetic_bars("BND", months, 80.0, 0.002, 0.01),
    }
    historic = build_monthly_balances(bars, {"VTI": 60, "BND": 40}, initial_balance)

    start = historic[0].date
    end = date(historic[-1].date.year, historic[-1].date.month, 28)
    years = calc_years(start, end)

    monthly = calc_monthly_returns(historic)
    yearly = calc_yearly_returns(historic, initial_balance)
    cagr = calc_cagr(initial_balance, historic[-1].close, years)
    stdev = calc_annualized_std(monthly)
    best, worst = calc_best_worst_year(list(yearly.values()))

    logger.info(f"Final balance: {historic[-1].close:,.2f}")
    logger.info(f"CAGR:          {cagr:.2%}")
    logger.info(f"Stdev:         {stdev:.2%}")
    logger.info(f"Best year:     {best:.2%}")
    logger.info(f"Worst year:    {worst:.2%}")
    logger.info(f"Max drawdown:  {calc_max_drawdown(monthly):.2%}")
    logger.info(f"Sharpe (2%):   {calc_sharpe_ratio(cagr, 0.02, stdev):.2f}")

    for label, value in calc_trailing_returns(historic, initial_balance).to_dict().items():
        shown = "-" if value is None else f"{value:.2f}%"
        logger.info(f"  {label:<8} {shown:>9}")


def main():
    parser = argparse.ArgumentParser(description="Performance engine demo")
    parser.add_argument("--months", type=int, default=60, help="Length of the synthetic history")
    parser.add_argument("--balance", type=float, default=10000.0, help="Initial balance")
    args = parser.parse_args()

    demo_performance(args.months, args.balance)


if __name__ == "__main__":
    main()
