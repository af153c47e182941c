"""
Terminal - 单线程界面循环

界面线程独占所有渲染状态（当前 Session、视图、帮助开关）：

- 从单槽信号队列取 RedrawSignal，generation 与当前 Session 不符的直接丢弃
- 从命令队列取按键（按键由独立线程通过 click.getchar 读取）
- 重新加载只解析配置并创建新 Session，网络请求全部在后台任务中完成
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable
from pathlib import Path

import click

from src.business.cli.dashboard import DashboardRenderer
from src.business.config import AppConfig, ConfigError, ProfileConfig
from src.business.terminal.scheduler import RedrawSignal, RefreshScheduler, new_signal_queue
from src.business.terminal.session import Session
from src.business.terminal.views import HOME, Command, CommandKind, View, parse_key
from src.data.providers import DataProvider

logger = logging.getLogger(__name__)


class Terminal:
    """组合终端"""

    def __init__(
        self,
        profile_path: str | Path,
        app_config: AppConfig,
        provider: DataProvider,
        renderer: DashboardRenderer | None = None,
        echo: Callable[[str], None] = click.echo,
        clear: Callable[[], None] = click.clear,
        read_key: Callable[[], str] = click.getchar,
    ) -> None:
        self.profile_path = Path(profile_path)
        self.app_config = app_config
        self.provider = provider
        self.renderer = renderer or DashboardRenderer()
        self._echo = echo
        self._clear = clear
        self._read_key = read_key

        self.signals = new_signal_queue()
        self.commands: queue.Queue = queue.Queue()
        self.scheduler = RefreshScheduler(provider, self.signals, app_config.refresh_interval)

        self.session: Session | None = None
        self.view: View = HOME
        self.show_help = False
        self.message: str | None = None
        self.running = False

    def load_session(self, generation: int) -> Session:
        """解析配置并创建 Session

        Raises:
            ConfigError: 配置无效
        """
        profile_config = ProfileConfig.from_yaml(self.profile_path)
        return Session.build(generation, profile_config, self.app_config, self.provider)

    def open(self) -> None:
        """加载首个 Session，启动后台调度并首次绘制

        Raises:
            ConfigError: 配置无效（界面不会启动）
        """
        self.session = self.load_session(1)
        self.scheduler.start(self.session, self.view)
        self.redraw()

    def run(self) -> None:
        """界面主循环，直到按 q 退出"""
        self.open()
        self.running = True
        reader = threading.Thread(target=self._read_keys, name="key-reader", daemon=True)
        reader.start()

        try:
            while self.running:
                self.process_pending(timeout=0.1)
                self.drain_commands()
        except KeyboardInterrupt:
            logger.debug("Interrupted")
        finally:
            self.running = False
            self.scheduler.stop()

    def _read_keys(self) -> None:
        while self.running:
            try:
                key = self._read_key()
            except (EOFError, KeyboardInterrupt):
                self.commands.put("q")
                return
            self.commands.put(key)

    # ------------------------------------------------------------------
    # 信号与命令（界面线程）
    # ------------------------------------------------------------------

    def process_pending(self, timeout: float = 0.1) -> bool:
        """取一个信号并处理，返回是否重绘"""
        try:
            signal = self.signals.get(timeout=timeout)
        except queue.Empty:
            return False
        return self.handle_signal(signal)

    def handle_signal(self, signal: RedrawSignal) -> bool:
        """当前 Session 的信号触发重绘，旧 Session 的信号丢弃"""
        if self.session is None or signal.generation != self.session.generation:
            logger.debug(f"Ignoring stale {signal.kind.value} signal from session {signal.generation}")
            return False
        self.redraw()
        return True

    def drain_commands(self) -> None:
        while True:
            try:
                key = self.commands.get_nowait()
            except queue.Empty:
                return
            self.handle_key(key)

    def handle_key(self, key: str) -> None:
        if self.session is None:
            return
        command = parse_key(key, len(self.session.profile.portfolios))
        if command is not None:
            self.handle_command(command)

    def handle_command(self, command: Command) -> None:
        if command.kind is CommandKind.QUIT:
            self.running = False
            self.scheduler.stop()
            return

        if command.kind is CommandKind.TOGGLE_HELP:
            self.show_help = not self.show_help
        elif command.kind is CommandKind.SWITCH_VIEW:
            self.view = command.view
            self.scheduler.retarget(command.view)
        elif command.kind is CommandKind.RELOAD:
            self.reload()
            return

        self.redraw()

    def reload(self) -> None:
        """丢弃当前 Session，按最新配置创建新 Session（generation + 1）

        配置无效时保留当前 Session 并在状态行提示。
        """
        generation = self.session.generation + 1 if self.session else 1
        try:
            session = self.load_session(generation)
        except ConfigError as e:
            logger.warning(f"Reload failed: {e}")
            self.message = f"Reload failed: {e}"
            self.redraw()
            return

        if not session.contains(self.view):
            self.view = HOME
        self.session = session
        self.message = None
        self.scheduler.replace(session, self.view)
        logger.info(f"Reloaded profile {self.profile_path} as session {generation}")
        self.redraw()

    # ------------------------------------------------------------------
    # 绘制
    # ------------------------------------------------------------------

    def render(self) -> str:
        return self.renderer.render(self.session, self.view, self.show_help, self.message)

    def redraw(self) -> None:
        screen = self.render()
        self._clear()
        self._echo(screen)
