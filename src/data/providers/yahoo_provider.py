"""Yahoo Finance data provider implementation."""

import logging
import math
import time
from datetime import date, datetime
from threading import Lock

import pandas as pd
import yfinance as yf

from src.data.models import KlineBar, StockQuote
from src.data.models.stock import KlineType
from src.data.providers.base import (
    DataProvider,
    DataProviderError,
    QuoteFetchFailedError,
    QuoteUnavailableError,
)

logger = logging.getLogger(__name__)

# Mapping from our KlineType to yfinance interval
KLINE_INTERVAL_MAP = {
    KlineType.DAY: "1d",
    KlineType.MONTH: "1mo",
}


def _float_or_none(value) -> float | None:
    if value is None:
        return None
    try:
        value = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(value) else value


class YahooProvider(DataProvider):
    """Yahoo Finance data provider.

    Provides market data through yfinance library.
    No authentication required, but has rate limits. Safe to share
    between background refresh threads.
    """

    def __init__(self, rate_limit: float = 0.2) -> None:
        """Initialize Yahoo Finance provider.

        Args:
            rate_limit: Minimum seconds between requests (default 0.2).
        """
        self._rate_limit = rate_limit
        self._last_request_time = 0.0
        self._lock = Lock()

    @property
    def name(self) -> str:
        """Provider name."""
        return "yahoo"

    def _check_rate_limit(self) -> None:
        """Enforce rate limiting between requests."""
        with self._lock:
            current_time = time.time()
            elapsed = current_time - self._last_request_time

            if elapsed < self._rate_limit:
                time.sleep(self._rate_limit - elapsed)

            self._last_request_time = time.time()

    def get_stock_quote(self, symbol: str) -> StockQuote:
        """Get real-time stock quote."""
        self._check_rate_limit()
        symbol = self.normalize_symbol(symbol)

        try:
            info = yf.Ticker(symbol).info
        except Exception as e:
            logger.error(f"Error getting stock quote for {symbol}: {e}")
            raise QuoteUnavailableError(f"Quote request failed for {symbol}: {e}") from e

        if not info or info.get("regularMarketPrice") is None:
            logger.warning(f"No quote data available for {symbol}")
            raise QuoteUnavailableError(f"No quote data available for {symbol}")

        return StockQuote(
            symbol=symbol,
            timestamp=datetime.now(),
            close=_float_or_none(info.get("regularMarketPrice")),
            prev_close=_float_or_none(info.get("regularMarketPreviousClose")),
            change=_float_or_none(info.get("regularMarketChange")),
            change_percent=_float_or_none(info.get("regularMarketChangePercent")),
            source=self.name,
        )

    def get_stock_quotes(self, symbols: list[str]) -> list[StockQuote]:
        """Get real-time quotes for multiple stocks.

        All-or-nothing: the first failing symbol fails the batch.
        """
        results = []
        for symbol in symbols:
            try:
                results.append(self.get_stock_quote(symbol))
            except QuoteUnavailableError as e:
                raise QuoteFetchFailedError(f"Batch quote failed at {symbol}: {e}") from e
        return results

    def get_history_kline(
        self,
        symbol: str,
        ktype: KlineType,
        start_date: date,
        end_date: date,
    ) -> list[KlineBar]:
        """Get historical K-line data."""
        self._check_rate_limit()
        symbol = self.normalize_symbol(symbol)
        interval = KLINE_INTERVAL_MAP.get(ktype, "1d")

        try:
            hist = yf.Ticker(symbol).history(
                start=start_date.strftime("%Y-%m-%d"),
                end=end_date.strftime("%Y-%m-%d"),
                interval=interval,
                auto_adjust=False,
            )
        except Exception as e:
            logger.error(f"Error getting history kline for {symbol}: {e}")
            raise DataProviderError(f"History request failed for {symbol}: {e}") from e

        if hist.empty:
            logger.warning(f"No history data for {symbol} ({start_date} - {end_date})")
            return []

        # Monthly bars occasionally carry a trailing partial row without prices
        hist = hist.dropna(subset=["Open", "Close"])

        results = []
        for timestamp, row in hist.iterrows():
            adjusted = row.get("Adj Close", row["Close"])
            if pd.isna(adjusted):
                adjusted = row["Close"]
            results.append(
                KlineBar(
                    symbol=symbol,
                    timestamp=timestamp.to_pydatetime(),
                    ktype=ktype,
                    open=float(row["Open"]),
                    high=float(row["High"]),
                    low=float(row["Low"]),
                    close=float(row["Close"]),
                    adjusted_close=float(adjusted),
                    volume=int(row["Volume"]) if not pd.isna(row["Volume"]) else 0,
                    source=self.name,
                )
            )

        logger.debug(f"Fetched {len(results)} {ktype.value} bars for {symbol}")
        return results
