"""
Refresh Scheduler - 后台刷新调度

- 定时线程每 refresh_interval 秒触发一次：刷新市场 + 刷新当前视图
  （全景 → 整个 Profile；组合视图 → 该组合）
- 每个刷新任务是一个独立线程，完成后向单槽信号队列投递 RedrawSignal
- 加载任务在每个 Session 开始时运行一次：首次刷新，然后依次计算回测
- 按实际市值加权的回测要等报价刷新成功；首次刷新失败时，之后任一次
  成功的刷新会补算这些回测

后台任务从不触碰界面状态，只写入所属 Session 的对象并投递信号。
刷新失败只记录日志，等下一次触发（不重试）。
"""

from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass
from enum import Enum

from src.business.terminal.session import Session
from src.business.terminal.views import HOME, PortfolioView, View
from src.data.providers import DataProvider, DataProviderError

logger = logging.getLogger(__name__)


class SignalKind(str, Enum):
    """重绘信号类型"""

    MARKET = "market"
    PROFILE = "profile"
    PORTFOLIO = "portfolio"
    PERFORMANCE = "performance"


@dataclass(frozen=True)
class RedrawSignal:
    """重绘信号（generation 用于丢弃旧 Session 的信号）"""

    kind: SignalKind
    generation: int
    view: View | None = None


def new_signal_queue() -> queue.Queue:
    """单槽信号队列"""
    return queue.Queue(maxsize=1)


class RefreshScheduler:
    """后台刷新调度器"""

    def __init__(
        self,
        provider: DataProvider,
        signals: queue.Queue,
        interval: float = 10.0,
    ) -> None:
        self.provider = provider
        self.signals = signals
        self.interval = interval

        self._lock = threading.Lock()
        self._session: Session | None = None
        self._view: View = HOME
        self._stopped = threading.Event()
        self._ticker: threading.Thread | None = None

    # ------------------------------------------------------------------
    # 目标控制（界面线程调用）
    # ------------------------------------------------------------------

    def start(self, session: Session, view: View = HOME) -> None:
        """设置初始 Session，启动加载任务和定时线程"""
        self.replace(session, view)
        self._ticker = threading.Thread(target=self._run, name="refresh-ticker", daemon=True)
        self._ticker.start()

    def stop(self) -> None:
        self._stopped.set()

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()

    def retarget(self, view: View) -> None:
        """切换视图：之后的触发刷新新视图，进行中的任务不取消"""
        with self._lock:
            self._view = view

    def replace(self, session: Session, view: View = HOME) -> None:
        """切换到新 Session 并启动它的加载任务"""
        with self._lock:
            self._session = session
            self._view = view
        self.launch_load(session)

    def tick(self) -> None:
        """触发一次刷新（市场 + 当前视图）"""
        with self._lock:
            session = self._session
            view = self._view
        if session is None:
            return
        self.launch_market_refresh(session)
        self.launch_view_refresh(session, view)

    def _run(self) -> None:
        while not self._stopped.wait(self.interval):
            self.tick()

    # ------------------------------------------------------------------
    # 后台任务
    # ------------------------------------------------------------------

    def _spawn(self, target, name: str, *args) -> threading.Thread:
        thread = threading.Thread(target=target, args=args, name=name, daemon=True)
        thread.start()
        return thread

    def launch_market_refresh(self, session: Session) -> threading.Thread:
        return self._spawn(self._refresh_market, f"market-{session.generation}", session)

    def launch_view_refresh(self, session: Session, view: View) -> threading.Thread:
        return self._spawn(self._refresh_view, f"refresh-{session.generation}", session, view)

    def launch_load(self, session: Session) -> threading.Thread:
        return self._spawn(self._load, f"load-{session.generation}", session)

    def launch_performances(self, session: Session) -> threading.Thread:
        return self._spawn(
            self.compute_performances, f"performance-{session.generation}", session
        )

    def _refresh_market(self, session: Session) -> None:
        if not session.market_lock.acquire(blocking=False):
            logger.debug("Market refresh still running, skipping tick")
            return
        try:
            session.market.refresh(self.provider)
        except DataProviderError as e:
            logger.warning(f"Market refresh failed: {e}")
            return
        finally:
            session.market_lock.release()
        self.post(RedrawSignal(SignalKind.MARKET, session.generation))

    def _refresh_view(
        self,
        session: Session,
        view: View,
        blocking: bool = False,
        launch_pending: bool = True,
    ) -> bool:
        if not session.refresh_lock.acquire(blocking=blocking):
            logger.debug("Holdings refresh still running, skipping tick")
            return False
        try:
            portfolio = session.portfolio_for(view)
            if portfolio is None:
                session.profile.refresh(self.provider)
                kind = SignalKind.PROFILE
            else:
                portfolio.refresh(self.provider)
                kind = SignalKind.PORTFOLIO
        except DataProviderError as e:
            logger.warning(f"Holdings refresh failed: {e}")
            return False
        finally:
            session.refresh_lock.release()
        self.post(RedrawSignal(kind, session.generation, view))
        if launch_pending and session.has_pending_performances():
            self.launch_performances(session)
        return True

    def _load(self, session: Session) -> None:
        """首次刷新，然后依次计算合并组合和各组合的回测"""
        self._refresh_market(session)
        self._refresh_view(session, HOME, blocking=True, launch_pending=False)
        self.compute_performances(session)

    def compute_performances(self, session: Session) -> None:
        """依次计算可以开始的回测（合并组合在前）"""
        if not session.performance_lock.acquire(blocking=False):
            logger.debug("Performance computation already running, skipping")
            return
        try:
            for index, performance in enumerate(session.performances):
                if self.stopped:
                    return
                if not session.can_compute(performance):
                    continue
                try:
                    performance.compute()
                except Exception:
                    logger.exception(f"Performance computation failed for {performance.name}")
                    continue
                view = HOME if index == 0 else PortfolioView(index - 1)
                self.post(RedrawSignal(SignalKind.PERFORMANCE, session.generation, view))
        finally:
            session.performance_lock.release()

    def post(self, signal: RedrawSignal) -> None:
        """投递信号；槽位被占用时等待界面线程取走"""
        while not self._stopped.is_set():
            try:
                self.signals.put(signal, timeout=0.1)
                return
            except queue.Full:
                continue
