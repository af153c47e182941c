"""
Views & Commands - 视图和按键命令

视图是一个标签联合: HomeView（账户全景）| PortfolioView(index)（单个组合）。

按键:
    h      显示/隐藏帮助
    0 / m  返回全景
    1..9   切换到第 N 个组合
    r      重新加载配置
    q      退出
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


@dataclass(frozen=True)
class HomeView:
    """账户全景视图"""


@dataclass(frozen=True)
class PortfolioView:
    """单个组合视图（index 从 0 开始）"""

    index: int


View = Union[HomeView, PortfolioView]

HOME = HomeView()


class CommandKind(str, Enum):
    """界面命令"""

    TOGGLE_HELP = "toggle_help"
    SWITCH_VIEW = "switch_view"
    RELOAD = "reload"
    QUIT = "quit"


@dataclass(frozen=True)
class Command:
    kind: CommandKind
    view: View | None = None


def parse_key(key: str, portfolio_count: int) -> Command | None:
    """按键 → 命令，无效按键返回 None"""
    key = key.lower()
    if key == "h":
        return Command(CommandKind.TOGGLE_HELP)
    if key in ("0", "m"):
        return Command(CommandKind.SWITCH_VIEW, HOME)
    if key == "r":
        return Command(CommandKind.RELOAD)
    if key == "q":
        return Command(CommandKind.QUIT)
    if key.isdigit() and 1 <= int(key) <= min(portfolio_count, 9):
        return Command(CommandKind.SWITCH_VIEW, PortfolioView(int(key) - 1))
    return None
