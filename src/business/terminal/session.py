"""
Session - 一次加载的全部状态

每次加载（启动或按 r 重新加载）创建一个新的 Session，generation 递增。
后台任务只写入自己所属 Session 的对象；旧 Session 被替换后，
它的任务仍可能运行完，但界面不会再读取它。
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field

from src.business.config import AppConfig, ProfileConfig
from src.business.performance import Performance, PerformanceState
from src.business.portfolio import Market, Portfolio, Profile
from src.business.terminal.views import PortfolioView, View
from src.data.providers import DataProvider

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """一次加载

    Attributes:
        generation: 加载序号（单调递增）
        profile: 账户全景
        market: 市场概览
        performances: 回测，第 0 个为合并组合，之后依次对应各组合
        refresh_lock: 组合刷新写锁（同一时刻只有一个刷新任务写入）
        market_lock: 市场刷新写锁
        performance_lock: 回测任务锁（同一时刻只有一个任务依次计算）
    """

    generation: int
    profile: Profile
    market: Market
    performances: list[Performance]
    refresh_lock: threading.Lock = field(default_factory=threading.Lock)
    market_lock: threading.Lock = field(default_factory=threading.Lock)
    performance_lock: threading.Lock = field(default_factory=threading.Lock)

    @classmethod
    def build(
        cls,
        generation: int,
        profile_config: ProfileConfig,
        app_config: AppConfig,
        provider: DataProvider,
    ) -> Session:
        """由配置创建 Session（不做网络请求）

        Raises:
            ConfigError: 配置无效
        """
        profile = Profile.load(profile_config)
        portfolios = [profile.merged_portfolio, *profile.portfolios]
        performances = [Performance.from_config(p, provider, app_config) for p in portfolios]
        logger.debug(f"Built session {generation} for profile {profile.name}")
        return cls(
            generation=generation,
            profile=profile,
            market=Market(),
            performances=performances,
        )

    def contains(self, view: View) -> bool:
        """视图在本 Session 中是否有效"""
        if isinstance(view, PortfolioView):
            return 0 <= view.index < len(self.profile.portfolios)
        return True

    def portfolio_for(self, view: View) -> Portfolio | None:
        if isinstance(view, PortfolioView) and self.contains(view):
            return self.profile.portfolios[view.index]
        return None

    def performance_for(self, view: View) -> Performance:
        """全景对应合并组合的回测，组合视图对应该组合的回测"""
        if isinstance(view, PortfolioView) and self.contains(view):
            return self.performances[view.index + 1]
        return self.performances[0]

    def can_compute(self, performance: Performance) -> bool:
        """回测尚未开始，且权重已可确定

        没有目标配置的组合（包括合并组合）按实际市值加权，
        需要等该组合至少成功刷新过一次报价。
        """
        if performance.state is not PerformanceState.UNINITIALIZED:
            return False
        portfolio = performance.portfolio
        return portfolio.has_target_allocation or portfolio.refreshed

    def has_pending_performances(self) -> bool:
        return any(self.can_compute(p) for p in self.performances)


__all__ = ["Session"]
