"""
Market - 市场概览

固定的一组大盘指数/参考标的，按需批量刷新。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from src.data.models import StockQuote
from src.data.providers import DataProvider, DataProviderError, QuoteFetchFailedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarketIndex:
    """市场参考标的"""

    name: str
    symbol: str


INDICES: tuple[MarketIndex, ...] = (
    MarketIndex("Dow", "^DJI"),
    MarketIndex("S&P 500", "^GSPC"),
    MarketIndex("Nasdaq", "^IXIC"),
    MarketIndex("Russell 2000", "^RUT"),
    MarketIndex("Foreign", "VXUS"),
    MarketIndex("China", "000001.SS"),
    MarketIndex("US Bond", "BND"),
    MarketIndex("Treasury 10Y", "^TNX"),
    MarketIndex("Gold", "GC=F"),
    MarketIndex("Oil", "CL=F"),
    MarketIndex("Bitcoin", "BTC-USD"),
    MarketIndex("Ethereum", "ETH-USD"),
)


class Market:
    """市场概览"""

    def __init__(self, indices: tuple[MarketIndex, ...] = INDICES) -> None:
        self.indices = indices
        self.quotes: dict[str, StockQuote] = {}

    @property
    def symbols(self) -> list[str]:
        return [index.symbol for index in self.indices]

    @property
    def refreshed(self) -> bool:
        return bool(self.quotes)

    def refresh(self, provider: DataProvider) -> None:
        """批量刷新所有指数报价

        Raises:
            QuoteFetchFailedError: 行情源出错或缺少任一指数，此时不修改报价
        """
        try:
            quotes = provider.get_stock_quotes(self.symbols)
        except QuoteFetchFailedError:
            raise
        except DataProviderError as e:
            raise QuoteFetchFailedError(f"Market refresh failed: {e}") from e

        by_symbol = {quote.symbol: quote for quote in quotes}
        missing = [symbol for symbol in self.symbols if symbol not in by_symbol]
        if missing:
            raise QuoteFetchFailedError(f"Market refresh missing: {', '.join(missing)}")

        self.quotes = {symbol: by_symbol[symbol] for symbol in self.symbols}
        logger.debug(f"Refreshed {len(self.quotes)} market quotes")
