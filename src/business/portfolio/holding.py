"""
Holding - 单个持仓

持仓 = 标的 + 数量 + 成本 + 实时报价，派生出市值和浮动盈亏：

    value              = price × quantity
    unrealized         = value - cost_basis
    unrealized_percent = unrealized / cost_basis × 100（成本为 0 时为 0）
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from datetime import date, timedelta

from src.data.models import Asset, KlineBar, StockQuote, classify
from src.data.models.stock import KlineType
from src.data.providers import (
    DataProvider,
    DataProviderError,
    HistoricalDataUnavailableError,
    QuoteUnavailableError,
)

logger = logging.getLogger(__name__)


def safe_percent(numerator: float, denominator: float) -> float:
    """百分比，分母为 0 时返回 0"""
    if not denominator:
        return 0.0
    return numerator / denominator * 100


@dataclass(frozen=True)
class HoldingStatus:
    """持仓实时状态（整体替换，不原地修改）"""

    value: float = 0.0
    unrealized: float = 0.0
    unrealized_percent: float = 0.0


@dataclass
class Holding:
    """单个持仓

    Attributes:
        asset: 标的分类信息
        target_allocation: 目标配置比例（0-100）
        quantity: 持有数量
        cost_basis: 成本
        quote: 最近一次报价，首次刷新前为 None
        status: 实时状态
    """

    asset: Asset
    target_allocation: float = 0.0
    quantity: float = 0.0
    cost_basis: float = 0.0
    quote: StockQuote | None = None
    status: HoldingStatus = field(default_factory=HoldingStatus)

    @classmethod
    def create(
        cls,
        symbol: str,
        target_allocation: float = 0.0,
        quantity: float = 0.0,
        cost_basis: float = 0.0,
    ) -> Holding:
        """按标的代码创建持仓（自动分类）"""
        return cls(
            asset=classify(symbol),
            target_allocation=target_allocation,
            quantity=quantity,
            cost_basis=cost_basis,
        )

    @property
    def symbol(self) -> str:
        return self.asset.symbol

    @property
    def price(self) -> float:
        """当前价格，无报价时为 0"""
        return self.quote.price if self.quote else 0.0

    @property
    def change(self) -> float:
        """当日每股涨跌额"""
        return self.quote.daily_change if self.quote else 0.0

    @property
    def value_change(self) -> float:
        """当日市值变化"""
        return self.change * self.quantity

    def refresh_quote(self, provider: DataProvider) -> None:
        """刷新报价

        Raises:
            QuoteUnavailableError: 行情源出错或无数据
        """
        try:
            quote = provider.get_stock_quote(self.symbol)
        except QuoteUnavailableError:
            raise
        except DataProviderError as e:
            raise QuoteUnavailableError(f"Quote request failed for {self.symbol}: {e}") from e

        if quote is None:
            raise QuoteUnavailableError(f"No quote returned for {self.symbol}")

        self.quote = quote

    def refresh_status(self) -> None:
        """根据当前报价重新计算状态（不会失败）"""
        value = self.price * self.quantity
        unrealized = value - self.cost_basis
        self.status = HoldingStatus(
            value=value,
            unrealized=unrealized,
            unrealized_percent=safe_percent(unrealized, self.cost_basis),
        )

    def refresh(self, provider: DataProvider) -> None:
        """刷新报价并重算状态"""
        self.refresh_quote(provider)
        self.refresh_status()

    def historical_quote_on(self, provider: DataProvider, day: date) -> KlineBar:
        """获取指定交易日的日线

        Raises:
            HistoricalDataUnavailableError: 当天没有日线（周末、节假日、上市前）
        """
        bars = provider.get_history_kline(
            self.symbol, KlineType.DAY, day, day + timedelta(days=1)
        )
        for bar in bars:
            if bar.trade_date == day:
                return bar

        raise HistoricalDataUnavailableError(f"No daily bar for {self.symbol} on {day}")

    def clone(self) -> Holding:
        """独立副本"""
        return copy.deepcopy(self)
