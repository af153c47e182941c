"""
Pytest fixtures shared by all test layers.

Provides an in-memory data provider serving canned quotes and bars so the
business layer can be tested without network access.
"""

import threading
from datetime import date, datetime, timedelta
from pathlib import Path

import pytest
import yaml

from src.business.portfolio import INDICES
from src.data.models import KlineBar, StockQuote
from src.data.models.stock import KlineType
from src.data.providers import DataProvider, DataProviderError, QuoteUnavailableError


# ============================================================================
# Sample Data Generation
# ============================================================================


def make_quote(symbol: str, price: float, change: float = 0.0) -> StockQuote:
    """Create a quote with the given price and daily change."""
    prev_close = price - change
    return StockQuote(
        symbol=symbol,
        timestamp=datetime(2024, 1, 2, 16, 0),
        close=price,
        prev_close=prev_close,
        change=change,
        change_percent=change / prev_close * 100 if prev_close else 0.0,
        source="fake",
    )


def make_monthly_bars(
    symbol: str,
    start: date,
    closes: list[float],
    first_open: float,
) -> list[KlineBar]:
    """Create consecutive monthly bars; each month opens at the previous close."""
    bars = []
    open_ = first_open
    year, month = start.year, start.month
    for close in closes:
        bars.append(
            KlineBar(
                symbol=symbol,
                timestamp=datetime(year, month, 1),
                ktype=KlineType.MONTH,
                open=open_,
                high=max(open_, close),
                low=min(open_, close),
                close=close,
                adjusted_close=close,
                source="fake",
            )
        )
        open_ = close
        month += 1
        if month > 12:
            year, month = year + 1, 1
    return bars


def make_daily_bars(symbol: str, start: date, days: int, price: float = 100.0) -> list[KlineBar]:
    """Create daily bars on weekdays only."""
    bars = []
    day = start
    while len(bars) < days:
        if day.weekday() < 5:
            bars.append(
                KlineBar(
                    symbol=symbol,
                    timestamp=datetime(day.year, day.month, day.day),
                    ktype=KlineType.DAY,
                    open=price,
                    high=price,
                    low=price,
                    close=price,
                    adjusted_close=price,
                    source="fake",
                )
            )
        day += timedelta(days=1)
    return bars


def growth_closes(start: float, rate: float, months: int) -> list[float]:
    """Closes compounding at a fixed monthly rate."""
    return [start * (1 + rate) ** (i + 1) for i in range(months)]


# ============================================================================
# Fake Provider
# ============================================================================


class FakeProvider(DataProvider):
    """In-memory provider serving canned quotes and bars.

    Set ``history_gate`` to a threading.Event to block history requests
    until the event is set; ``history_entered`` is set as soon as a
    request is waiting.
    """

    def __init__(self) -> None:
        self.quotes: dict[str, StockQuote] = {}
        self.daily: dict[str, list[KlineBar]] = {}
        self.monthly: dict[str, list[KlineBar]] = {}
        self.fail_quotes = False
        self.history_gate: threading.Event | None = None
        self.history_entered = threading.Event()
        self.quote_calls: list[list[str]] = []
        self.history_calls: list[tuple[str, KlineType, date, date]] = []

    @property
    def name(self) -> str:
        return "fake"

    def get_stock_quote(self, symbol: str) -> StockQuote:
        if self.fail_quotes or symbol not in self.quotes:
            raise QuoteUnavailableError(f"No quote for {symbol}")
        return self.quotes[symbol]

    def get_stock_quotes(self, symbols: list[str]) -> list[StockQuote]:
        self.quote_calls.append(list(symbols))
        if self.fail_quotes:
            raise DataProviderError("quote service down")
        return [self.quotes[s] for s in symbols if s in self.quotes]

    def get_history_kline(
        self,
        symbol: str,
        ktype: KlineType,
        start_date: date,
        end_date: date,
    ) -> list[KlineBar]:
        self.history_calls.append((symbol, ktype, start_date, end_date))
        if self.history_gate is not None:
            self.history_entered.set()
            self.history_gate.wait(timeout=10)

        if ktype is KlineType.MONTH:
            # Monthly bars are dated the 1st: keep the month containing start_date
            first = (start_date.year, start_date.month)
            return [
                bar
                for bar in self.monthly.get(symbol, [])
                if (bar.timestamp.year, bar.timestamp.month) >= first
                and bar.timestamp.date() < end_date
            ]

        return [
            bar
            for bar in self.daily.get(symbol, [])
            if start_date <= bar.timestamp.date() < end_date
        ]


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def fake_provider() -> FakeProvider:
    """Provider with quotes for the market indices and a few funds."""
    provider = FakeProvider()
    for index in INDICES:
        provider.quotes[index.symbol] = make_quote(index.symbol, 100.0, 1.0)
    provider.quotes["VTI"] = make_quote("VTI", 200.0, 2.0)
    provider.quotes["BND"] = make_quote("BND", 75.0, -0.5)
    provider.quotes["QQQ"] = make_quote("QQQ", 400.0, 4.0)
    provider.quotes["^IRX"] = make_quote("^IRX", 5.0)
    return provider


@pytest.fixture
def history_provider(fake_provider) -> FakeProvider:
    """Provider with 24 months of history (Jan 2022 - Dec 2023).

    - VTI: opens at 100, gains 1% every month
    - BND: flat at 50
    - QQQ: opens at 300, gains 2% every month
    - SPY: opens at 400, gains 0.5% every month
    """
    start = date(2022, 1, 1)
    fake_provider.monthly["VTI"] = make_monthly_bars("VTI", start, growth_closes(100.0, 0.01, 24), 100.0)
    fake_provider.monthly["BND"] = make_monthly_bars("BND", start, [50.0] * 24, 50.0)
    fake_provider.monthly["QQQ"] = make_monthly_bars("QQQ", start, growth_closes(300.0, 0.02, 24), 300.0)
    fake_provider.monthly["SPY"] = make_monthly_bars("SPY", start, growth_closes(400.0, 0.005, 24), 400.0)
    for symbol in ("VTI", "BND", "QQQ", "SPY"):
        fake_provider.daily[symbol] = make_daily_bars(symbol, date(2022, 1, 3), 30)
    return fake_provider


@pytest.fixture
def profile_data() -> dict:
    """Two portfolios sharing VTI, plus cash."""
    return {
        "name": "Main",
        "cash": {"value": 1000, "allocation": 10},
        "portfolios": [
            {
                "name": "Core",
                "allocation": 60,
                "holdings": [
                    {"symbol": "VTI", "allocation": 60, "quantity": 10, "basis": 1500},
                    {"symbol": "BND", "allocation": 40, "quantity": 20, "basis": 1600},
                ],
            },
            {
                "name": "Growth",
                "allocation": 30,
                "holdings": [
                    {"symbol": "QQQ", "quantity": 2, "basis": 700},
                    {"symbol": "VTI", "quantity": 5, "basis": 900},
                ],
            },
        ],
    }


@pytest.fixture
def profile_file(tmp_path: Path, profile_data: dict) -> Path:
    """Profile YAML written to a temporary directory."""
    path = tmp_path / "profile.yaml"
    path.write_text(yaml.safe_dump(profile_data), encoding="utf-8")
    return path
