"""
Profile - 账户全景

多个投资组合 + 现金。合并组合（merged_portfolio）把所有组合的持仓
汇总成一个组合，用于整体业绩回测：同一标的在多个组合中出现时
数量和成本相加，目标配置全部为 0（回测按实际市值权重）。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from src.business.config import (
    ConfigError,
    InvalidAllocationError,
    ProfileConfig,
)
from src.business.portfolio.holding import Holding, safe_percent
from src.business.portfolio.portfolio import (
    Portfolio,
    PortfolioSnapshot,
    PortfolioStatus,
    check_allocation_total,
)
from src.data.providers import DataProvider, DataProviderError, QuoteFetchFailedError

logger = logging.getLogger(__name__)

CASH_KEY = "cash"


@dataclass(frozen=True)
class ProfileSnapshot:
    """账户全景的一次刷新结果

    portfolios 与 Profile.portfolios 一一对应，和 status 同时发布，
    全景表格只读这一份快照。
    """

    portfolios: tuple[PortfolioSnapshot, ...] = ()
    status: PortfolioStatus = field(default_factory=PortfolioStatus)
    refreshed: bool = False


class Profile:
    """账户全景（组合 + 现金）"""

    def __init__(self, name: str, cash: float = 0.0) -> None:
        self.name = name
        self.cash = cash
        self.cost_basis = cash
        self.portfolios: list[Portfolio] = []
        self.target_allocation: dict[str, float] = {CASH_KEY: 0.0}
        self.merged_portfolio = Portfolio(name)
        self.snapshot = ProfileSnapshot()

    @classmethod
    def load(cls, config: ProfileConfig) -> Profile:
        """从配置加载

        Raises:
            ConfigError: 组合名称重复
            InvalidAllocationError: 任一层级目标配置总和不是 0/100
        """
        profile = cls(config.name, cash=config.cash.value)
        profile.target_allocation[CASH_KEY] = config.cash.allocation

        for portfolio_config in config.portfolios:
            if portfolio_config.name == CASH_KEY or any(
                p.name == portfolio_config.name for p in profile.portfolios
            ):
                raise ConfigError(f"Duplicate portfolio name: {portfolio_config.name}")

            portfolio = Portfolio.load(portfolio_config)
            profile.portfolios.append(portfolio)
            profile.target_allocation[portfolio.name] = portfolio_config.allocation
            profile.cost_basis += portfolio.cost_basis

        check_allocation_total(
            sum(profile.target_allocation.values()), f"profile {config.name}"
        )
        profile.merged_portfolio = profile.merge()
        logger.debug(
            f"Loaded profile {config.name}: {len(profile.portfolios)} portfolios, "
            f"{len(profile.merged_portfolio.symbols)} distinct symbols"
        )
        return profile

    @property
    def status(self) -> PortfolioStatus:
        return self.snapshot.status

    @property
    def refreshed(self) -> bool:
        return self.snapshot.refreshed

    @property
    def symbols(self) -> list[str]:
        """所有组合的标的（去重，保持首次出现顺序）"""
        return list(self.merged_portfolio.symbols)

    def merge(self) -> Portfolio:
        """合并所有组合为一个组合（持仓为独立副本）"""
        merged = Portfolio(self.name)
        for portfolio in self.portfolios:
            for symbol in portfolio.symbols:
                source = portfolio.holdings[symbol]
                existing = merged.holdings.get(symbol)
                if existing is None:
                    merged.add_holding(
                        Holding.create(
                            symbol,
                            quantity=source.quantity,
                            cost_basis=source.cost_basis,
                        )
                    )
                else:
                    existing.quantity += source.quantity
                    existing.cost_basis += source.cost_basis
                    merged.cost_basis = sum(h.cost_basis for h in merged.holdings.values())

        if merged.has_target_allocation:
            raise InvalidAllocationError("Merged portfolio must not carry target allocations")
        return merged

    def refresh(self, provider: DataProvider) -> None:
        """一次批量报价刷新所有组合（含合并组合）

        Raises:
            QuoteFetchFailedError: 行情源出错或返回不完整，此时不修改任何组合
        """
        try:
            quotes = provider.get_stock_quotes(self.symbols)
        except QuoteFetchFailedError:
            raise
        except DataProviderError as e:
            raise QuoteFetchFailedError(f"Quote refresh failed for {self.name}: {e}") from e

        by_symbol = {quote.symbol: quote for quote in quotes}
        missing = [symbol for symbol in self.symbols if symbol not in by_symbol]
        if missing:
            raise QuoteFetchFailedError(
                f"Quote refresh for {self.name} missing: {', '.join(missing)}"
            )

        # 先算好全部快照再发布，任何一步失败都不会留下部分结果
        snapshots = [portfolio.build_snapshot(by_symbol) for portfolio in self.portfolios]
        merged = self.merged_portfolio.build_snapshot(by_symbol)
        snapshot = self.build_snapshot(snapshots)

        for portfolio, portfolio_snapshot in zip(self.portfolios, snapshots):
            portfolio.snapshot = portfolio_snapshot
        self.merged_portfolio.snapshot = merged
        self.snapshot = snapshot

    def refresh_status(self) -> None:
        """按各组合当前快照重新汇总"""
        self.snapshot = self.build_snapshot([portfolio.snapshot for portfolio in self.portfolios])

    def build_snapshot(self, snapshots: list[PortfolioSnapshot]) -> ProfileSnapshot:
        """汇总各组合快照和现金（不修改当前快照）"""
        value = self.cash
        change = 0.0
        unrealized = 0.0
        for snapshot in snapshots:
            value += snapshot.status.value
            change += snapshot.status.regular_market_change
            unrealized += snapshot.status.unrealized

        allocation = {
            portfolio.name: safe_percent(snapshot.status.value, value)
            for portfolio, snapshot in zip(self.portfolios, snapshots)
        }
        allocation[CASH_KEY] = safe_percent(self.cash, value)

        status = PortfolioStatus(
            value=value,
            regular_market_change=change,
            regular_market_change_percent=safe_percent(change, value - change),
            unrealized=unrealized,
            unrealized_percent=safe_percent(unrealized, self.cost_basis),
            allocation=allocation,
        )
        return ProfileSnapshot(portfolios=tuple(snapshots), status=status, refreshed=True)

    def __repr__(self) -> str:
        return f"Profile(name={self.name!r}, portfolios={[p.name for p in self.portfolios]})"
