"""
Terminal Module - 实时刷新终端

- views: 视图（HomeView | PortfolioView）和按键命令
- session: 一次加载的全部状态（带 generation）
- scheduler: 后台刷新调度，单槽信号队列
- terminal: 单线程界面循环

Terminal 依赖 cli.dashboard 渲染器，需从 src.business.terminal.terminal 导入。
"""

from src.business.terminal.scheduler import (
    RedrawSignal,
    RefreshScheduler,
    SignalKind,
    new_signal_queue,
)
from src.business.terminal.session import Session
from src.business.terminal.views import (
    HOME,
    Command,
    CommandKind,
    HomeView,
    PortfolioView,
    View,
    parse_key,
)

__all__ = [
    "HOME",
    "Command",
    "CommandKind",
    "HomeView",
    "PortfolioView",
    "RedrawSignal",
    "RefreshScheduler",
    "Session",
    "SignalKind",
    "View",
    "new_signal_queue",
    "parse_key",
]
