"""
Portfolio Module - 持仓与组合

- Holding: 单个持仓
- Portfolio: 投资组合
- Profile: 账户全景（多个组合 + 现金）
- Market: 市场概览
"""

from src.business.portfolio.holding import Holding, HoldingStatus
from src.business.portfolio.market import INDICES, Market, MarketIndex
from src.business.portfolio.portfolio import Portfolio, PortfolioSnapshot, PortfolioStatus
from src.business.portfolio.profile import CASH_KEY, Profile, ProfileSnapshot

__all__ = [
    "CASH_KEY",
    "Holding",
    "HoldingStatus",
    "INDICES",
    "Market",
    "MarketIndex",
    "Portfolio",
    "PortfolioSnapshot",
    "PortfolioStatus",
    "Profile",
    "ProfileSnapshot",
]
