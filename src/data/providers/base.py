"""Abstract base class for data providers."""

from abc import ABC, abstractmethod
from datetime import date

from src.data.models import KlineBar, StockQuote
from src.data.models.stock import KlineType


class DataProvider(ABC):
    """Market data source for live quotes and historical bars.

    Implementations are shared by the UI-side loader and every background
    refresh task, so they must be safe to call from several threads.
    Every method is a fallible network call: failures raise
    DataProviderError subclasses.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name (e.g., 'yahoo'), recorded as the source of each quote."""

    @abstractmethod
    def get_stock_quote(self, symbol: str) -> StockQuote:
        """Get the live quote of one symbol.

        Raises:
            QuoteUnavailableError: Provider failed or returned no data.
        """

    @abstractmethod
    def get_stock_quotes(self, symbols: list[str]) -> list[StockQuote]:
        """Get live quotes for several symbols in one request.

        Symbols the provider knows nothing about may be missing from the
        result; callers decide whether a partial batch is acceptable.

        Raises:
            DataProviderError: The batch request failed.
        """

    @abstractmethod
    def get_history_kline(
        self,
        symbol: str,
        ktype: KlineType,
        start_date: date,
        end_date: date,
    ) -> list[KlineBar]:
        """Get historical bars in ``[start_date, end_date)``.

        Monthly requests return every month bar whose month contains a
        day of the range, stamped with the first of the month.

        Returns:
            Bars sorted by timestamp. Empty when the symbol has no bars in
            the range (before inception, or a market holiday).

        Raises:
            DataProviderError: The request itself failed.
        """

    def normalize_symbol(self, symbol: str) -> str:
        """Provider-specific symbol spelling (upper case by default)."""
        return symbol.strip().upper()


class DataProviderError(Exception):
    """Base exception for data provider errors."""


class QuoteUnavailableError(DataProviderError):
    """A quote could not be fetched for a symbol."""


class QuoteFetchFailedError(DataProviderError):
    """A batch quote refresh failed or came back incomplete."""


class HistoricalDataUnavailableError(DataProviderError):
    """No price bar exists for the requested date (weekend, holiday, pre-inception)."""
