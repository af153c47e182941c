"""Stock data models.

Quotes feed the live holdings view; monthly and daily bars feed the
historical performance simulation.
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class KlineType(Enum):
    """Bar resolutions used by the performance simulation."""

    DAY = "day"
    MONTH = "month"


@dataclass
class StockQuote:
    """Live (or delayed) price snapshot.

    ``close`` holds the regular market price; ``change`` and
    ``change_percent`` are relative to ``prev_close`` (``change_percent``
    is already in percent).
    """

    symbol: str
    timestamp: datetime
    close: float | None = None
    prev_close: float | None = None
    change: float | None = None
    change_percent: float | None = None
    source: str = "unknown"

    @property
    def price(self) -> float:
        """Regular market price (0 when unknown)."""
        return self.close or 0.0

    @property
    def daily_change(self) -> float:
        """Change since the previous close (0 when unknown)."""
        return self.change or 0.0


@dataclass
class KlineBar:
    """One OHLC bar plus the dividend/split adjusted close.

    Monthly bars are stamped with the first day of their month.
    """

    symbol: str
    timestamp: datetime
    ktype: KlineType
    open: float
    high: float
    low: float
    close: float
    adjusted_close: float
    volume: int = 0
    source: str = "unknown"

    @property
    def trade_date(self) -> date:
        """Calendar date the bar is stamped with."""
        return self.timestamp.date()

    @property
    def month(self) -> tuple[int, int]:
        """(year, month) the bar belongs to."""
        return self.timestamp.year, self.timestamp.month
