"""
Portfolio - 投资组合

一组带目标配置的持仓，汇总市值、当日涨跌、浮动盈亏和实际配置比例。

目标配置总和必须为 0（不设目标）或 100，否则加载时报错。
每个 Portfolio 只有一个写者（刷新任务）。刷新结果整体发布为不可变快照，
界面线程只读取快照。
"""

from __future__ import annotations

import copy
import logging
import math
from dataclasses import dataclass, field, replace

from src.business.config import InvalidAllocationError, PortfolioConfig
from src.business.portfolio.holding import Holding, safe_percent
from src.data.models import StockQuote
from src.data.providers import DataProvider, DataProviderError, QuoteFetchFailedError

logger = logging.getLogger(__name__)


def check_allocation_total(total: float, where: str) -> None:
    """目标配置总和只能是 0 或 100"""
    if math.isclose(total, 0.0, abs_tol=1e-6) or math.isclose(total, 100.0, abs_tol=1e-6):
        return
    raise InvalidAllocationError(f"{where}: target allocation totals {total:g}%, expected 0 or 100")


@dataclass(frozen=True)
class PortfolioStatus:
    """组合实时状态

    Attributes:
        value: 总市值
        regular_market_change: 当日市值变化 Σ(change × quantity)
        regular_market_change_percent: 当日涨跌幅 change / (value - change) × 100
        unrealized: 浮动盈亏
        unrealized_percent: 浮动盈亏比例
        allocation: 实际配置比例（key → 占总市值百分比）
    """

    value: float = 0.0
    regular_market_change: float = 0.0
    regular_market_change_percent: float = 0.0
    unrealized: float = 0.0
    unrealized_percent: float = 0.0
    allocation: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class PortfolioSnapshot:
    """一次刷新的完整结果（持仓 + 汇总状态）

    刷新任务先在局部变量中算好整张快照，再一次性替换 Portfolio 上的引用；
    发布后的快照及其中的持仓不再修改，界面取一次引用即可读到一致的数据。
    """

    holdings: dict[str, Holding] = field(default_factory=dict)
    status: PortfolioStatus = field(default_factory=PortfolioStatus)
    refreshed: bool = False


def aggregate(holdings: dict[str, Holding], symbols: list[str], cost_basis: float) -> PortfolioStatus:
    """汇总持仓状态"""
    value = 0.0
    change = 0.0
    unrealized = 0.0
    for holding in holdings.values():
        value += holding.status.value
        change += holding.value_change
        unrealized += holding.status.unrealized

    return PortfolioStatus(
        value=value,
        regular_market_change=change,
        regular_market_change_percent=safe_percent(change, value - change),
        unrealized=unrealized,
        unrealized_percent=safe_percent(unrealized, cost_basis),
        allocation={symbol: safe_percent(holdings[symbol].status.value, value) for symbol in symbols},
    )


class Portfolio:
    """投资组合

    holdings / status / refreshed 都读自当前快照（snapshot）。
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.cost_basis = 0.0
        self.symbols: list[str] = []
        self.target_allocation: dict[str, float] = {}
        self.snapshot = PortfolioSnapshot()

    @classmethod
    def load(cls, config: PortfolioConfig) -> Portfolio:
        """从配置加载

        Raises:
            InvalidAllocationError: 目标配置总和不是 0/100，或标的重复
        """
        portfolio = cls(config.name)
        for holding in config.holdings:
            if holding.symbol in portfolio.holdings:
                raise InvalidAllocationError(
                    f"portfolio {config.name}: duplicate symbol {holding.symbol}"
                )
            portfolio.add_holding(
                Holding.create(
                    holding.symbol,
                    target_allocation=holding.allocation,
                    quantity=holding.quantity,
                    cost_basis=holding.basis,
                )
            )

        check_allocation_total(portfolio.total_target_allocation, f"portfolio {config.name}")
        logger.debug(f"Loaded portfolio {config.name} with {len(portfolio.symbols)} holdings")
        return portfolio

    @property
    def holdings(self) -> dict[str, Holding]:
        return self.snapshot.holdings

    @property
    def status(self) -> PortfolioStatus:
        return self.snapshot.status

    @property
    def refreshed(self) -> bool:
        return self.snapshot.refreshed

    @property
    def total_target_allocation(self) -> float:
        return sum(self.target_allocation.values())

    @property
    def has_target_allocation(self) -> bool:
        """是否设置了目标配置（总和非 0）"""
        return not math.isclose(self.total_target_allocation, 0.0, abs_tol=1e-6)

    def add_holding(self, holding: Holding) -> None:
        """添加持仓（按添加顺序记录 symbols），只在加载阶段使用"""
        symbol = holding.symbol
        if symbol not in self.holdings:
            self.symbols.append(symbol)
        holdings = {**self.holdings, symbol: holding}
        self.target_allocation[symbol] = holding.target_allocation
        self.cost_basis = sum(h.cost_basis for h in holdings.values())
        self.snapshot = replace(self.snapshot, holdings=holdings)

    def refresh(self, provider: DataProvider) -> None:
        """批量刷新报价并重算状态

        全部成功才生效：任何标的缺失都不会修改持仓。

        Raises:
            QuoteFetchFailedError: 行情源出错或返回不完整
        """
        try:
            quotes = provider.get_stock_quotes(self.symbols)
        except QuoteFetchFailedError:
            raise
        except DataProviderError as e:
            raise QuoteFetchFailedError(f"Quote refresh failed for {self.name}: {e}") from e

        self.apply_quotes({quote.symbol: quote for quote in quotes})

    def apply_quotes(self, quotes: dict[str, StockQuote]) -> None:
        """应用一批报价（必须覆盖所有标的）

        Raises:
            QuoteFetchFailedError: 缺少部分标的报价
        """
        self.snapshot = self.build_snapshot(quotes)

    def build_snapshot(self, quotes: dict[str, StockQuote]) -> PortfolioSnapshot:
        """用一批报价算出新快照（不修改当前快照）

        Raises:
            QuoteFetchFailedError: 缺少部分标的报价
        """
        missing = [symbol for symbol in self.symbols if symbol not in quotes]
        if missing:
            raise QuoteFetchFailedError(
                f"Quote refresh for {self.name} missing: {', '.join(missing)}"
            )

        holdings = {}
        for symbol in self.symbols:
            holding = replace(self.holdings[symbol], quote=quotes[symbol])
            holding.refresh_status()
            holdings[symbol] = holding

        return PortfolioSnapshot(
            holdings=holdings,
            status=aggregate(holdings, self.symbols, self.cost_basis),
            refreshed=True,
        )

    def refresh_status(self) -> None:
        """按当前持仓重新汇总状态"""
        holdings = self.holdings
        self.snapshot = replace(
            self.snapshot, status=aggregate(holdings, self.symbols, self.cost_basis)
        )

    def clone(self) -> Portfolio:
        """深拷贝（持仓和配置映射都独立）"""
        return copy.deepcopy(self)

    def __repr__(self) -> str:
        return f"Portfolio(name={self.name!r}, symbols={self.symbols})"
