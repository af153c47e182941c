"""Data providers for fetching market data."""

from src.data.providers.base import (
    DataProvider,
    DataProviderError,
    HistoricalDataUnavailableError,
    QuoteFetchFailedError,
    QuoteUnavailableError,
)
from src.data.providers.yahoo_provider import YahooProvider

__all__ = [
    "DataProvider",
    "DataProviderError",
    "HistoricalDataUnavailableError",
    "QuoteFetchFailedError",
    "QuoteUnavailableError",
    "YahooProvider",
]
