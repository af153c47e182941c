"""
Performance - 历史业绩回测

以固定初始资金按组合权重模拟买入，重建月度净值序列，并与基准对比：

1. 分析区间：结束日为市场时区的今天；起始日为 max(回溯下限, 各标的及基准的上市日)，
   再对齐到最近的交易日
2. 权重：组合设置了目标配置则使用目标配置，否则使用当前实际市值权重
3. 基准：单一标的、100% 权重的组合
4. 月度净值序列 + 统计指标（CAGR、波动率、最佳/最差年度、最大回撤、
   Sharpe、区间收益）

状态机: UNINITIALIZED → COMPUTING → READY
compute() 只能调用一次，在后台线程执行；失败时状态停留在 COMPUTING，
error 记录异常并向调用方重新抛出。
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import date, datetime, timedelta
from enum import Enum
from zoneinfo import ZoneInfo

from src.business.config import AppConfig
from src.business.portfolio import Holding, Portfolio
from src.data.models import KlineBar
from src.data.models.stock import KlineType
from src.data.providers import DataProvider, HistoricalDataUnavailableError
from src.engine import (
    Historic,
    InsufficientHistoricalDataError,
    PerformanceError,
    PerformanceResult,
    build_monthly_balances,
    check_alignment,
    calc_annualized_std,
    calc_best_worst_year,
    calc_cagr,
    calc_max_drawdown,
    calc_monthly_returns,
    calc_sharpe_ratio,
    calc_trailing_returns,
    calc_yearly_returns,
    calc_years,
)

logger = logging.getLogger(__name__)

# 起始日对齐交易日时最多向后查找的天数
TRADING_DAY_LOOKAHEAD = 7


class PerformanceState(str, Enum):
    """回测状态"""

    UNINITIALIZED = "uninitialized"
    COMPUTING = "computing"
    READY = "ready"


def years_before(day: date, years: int) -> date:
    """day 往前推 years 年（2/29 落到 2/28）"""
    year = max(day.year - years, 1)
    try:
        return day.replace(year=year)
    except ValueError:
        return day.replace(year=year, day=28)


def summarize(
    name: str,
    historic: list[Historic],
    initial_balance: float,
    start_date: date,
    end_date: date,
    risk_free_rate: float,
) -> PerformanceResult:
    """由月度净值序列计算统计指标

    Args:
        name: 组合名称或基准代码
        historic: 月度净值序列（旧 → 新）
        initial_balance: 初始资金
        start_date: 分析起始日
        end_date: 分析结束日
        risk_free_rate: 无风险年化收益率（小数）

    Returns:
        PerformanceResult（百分比字段以 % 表示）
    """
    final_balance = historic[-1].close if historic else initial_balance
    years = calc_years(start_date, end_date)

    cagr = calc_cagr(initial_balance, final_balance, years)
    monthly_returns = calc_monthly_returns(historic)
    stdev = calc_annualized_std(monthly_returns)
    yearly_returns = calc_yearly_returns(historic, initial_balance)
    best_year, worst_year = calc_best_worst_year(list(yearly_returns.values()))

    return PerformanceResult(
        name=name,
        historic=historic,
        initial_balance=initial_balance,
        final_balance=final_balance,
        cagr=cagr * 100,
        stdev=stdev * 100,
        best_year=best_year * 100,
        worst_year=worst_year * 100,
        max_drawdown=calc_max_drawdown(monthly_returns) * 100,
        sharpe_ratio=calc_sharpe_ratio(cagr, risk_free_rate, stdev),
        returns=calc_trailing_returns(historic, initial_balance),
        monthly_returns=[r * 100 for r in monthly_returns],
        yearly_returns={year: r * 100 for year, r in yearly_returns.items()},
    )


class Performance:
    """组合历史业绩（与基准对比）

    Attributes:
        portfolio: 被回测的组合（只引用，不拥有；计算时使用其副本）
        benchmark_symbol: 基准标的
        start_date: 分析起始日（计算后设置）
        end_date: 分析结束日（计算后设置）
        result: 组合的统计结果
        benchmark: 基准的统计结果
        state: 当前状态
        error: 计算失败时的异常
    """

    def __init__(
        self,
        portfolio: Portfolio,
        provider: DataProvider,
        benchmark_symbol: str = "SPY",
        initial_balance: float = 10000.0,
        risk_free_symbol: str = "^IRX",
        history_years: int = 100,
        timezone: str = "America/New_York",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.portfolio = portfolio
        self.provider = provider
        self.benchmark_symbol = benchmark_symbol.upper()
        self.initial_balance = initial_balance
        self.risk_free_symbol = risk_free_symbol
        self.history_years = history_years
        self.tz = ZoneInfo(timezone)
        self._clock = clock or (lambda: datetime.now(self.tz))

        self.start_date: date | None = None
        self.end_date: date | None = None
        self.result: PerformanceResult | None = None
        self.benchmark: PerformanceResult | None = None
        self.state = PerformanceState.UNINITIALIZED
        self.error: Exception | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_config(
        cls,
        portfolio: Portfolio,
        provider: DataProvider,
        config: AppConfig,
        benchmark_symbol: str | None = None,
    ) -> Performance:
        """按应用配置创建"""
        return cls(
            portfolio,
            provider,
            benchmark_symbol=benchmark_symbol or config.benchmark_symbol,
            initial_balance=config.initial_balance,
            risk_free_symbol=config.risk_free_symbol,
            history_years=config.history_years,
            timezone=config.timezone,
        )

    @property
    def name(self) -> str:
        return self.portfolio.name

    @property
    def ready(self) -> bool:
        """结果是否可读"""
        return self.state is PerformanceState.READY

    def compute(self) -> None:
        """执行回测（只允许调用一次）

        Raises:
            RuntimeError: 重复或并发调用
            PerformanceError / DataProviderError: 计算失败（状态停留在 COMPUTING）
        """
        with self._lock:
            if self.state is not PerformanceState.UNINITIALIZED:
                raise RuntimeError(
                    f"Performance for {self.name} already {self.state.value}; compute() runs once"
                )
            self.state = PerformanceState.COMPUTING

        try:
            self._compute()
        except Exception as e:
            self.error = e
            raise

    def _compute(self) -> None:
        end_date = self._clock().astimezone(self.tz).date()

        portfolio = self.portfolio.clone()
        weights = self._effective_weights(portfolio)
        holdings = [portfolio.holdings[symbol] for symbol in weights]
        benchmark_portfolio = self._benchmark_portfolio()
        benchmark_holding = benchmark_portfolio.holdings[self.benchmark_symbol]

        start_date = self._start_date(holdings, benchmark_holding, end_date)
        logger.info(f"Performance window for {self.name}: {start_date} - {end_date}")

        risk_free_rate = self._risk_free_rate()

        bars = self._monthly_bars(list(weights), start_date, end_date)
        benchmark_bars = self._monthly_bars([self.benchmark_symbol], start_date, end_date)
        # 组合与基准必须覆盖相同的月份，否则两者的统计不可比
        check_alignment({**bars, **benchmark_bars})

        balances = build_monthly_balances(bars, weights, self.initial_balance)
        benchmark_balances = build_monthly_balances(
            benchmark_bars, benchmark_portfolio.target_allocation, self.initial_balance
        )

        result = summarize(
            self.name, balances, self.initial_balance, start_date, end_date, risk_free_rate
        )
        benchmark = summarize(
            self.benchmark_symbol,
            benchmark_balances,
            self.initial_balance,
            start_date,
            end_date,
            risk_free_rate,
        )

        self.start_date = start_date
        self.end_date = end_date
        self.result = result
        self.benchmark = benchmark
        self.state = PerformanceState.READY
        logger.info(
            f"Performance ready for {self.name}: CAGR {result.cagr:.2f}% "
            f"vs {self.benchmark_symbol} {benchmark.cagr:.2f}%"
        )

    def _effective_weights(self, portfolio: Portfolio) -> dict[str, float]:
        """目标配置优先，否则使用实际市值权重

        权重为 0 的标的不参与模拟，起始日也不受其上市日约束。
        """
        if portfolio.has_target_allocation:
            source = portfolio.target_allocation
        else:
            source = portfolio.status.allocation

        weights = {symbol: source.get(symbol, 0.0) for symbol in portfolio.symbols}
        weights = {symbol: weight for symbol, weight in weights.items() if weight > 0}
        if not weights:
            raise PerformanceError(
                f"Portfolio {self.name} has no target allocation and no market value to weight by"
            )
        return weights

    def _benchmark_portfolio(self) -> Portfolio:
        benchmark = Portfolio(self.benchmark_symbol)
        benchmark.add_holding(Holding.create(self.benchmark_symbol, target_allocation=100.0))
        return benchmark

    def _start_date(self, holdings: list[Holding], benchmark: Holding, end_date: date) -> date:
        """max(回溯下限, 各标的及基准的上市日)，再对齐到交易日"""
        start_date = years_before(end_date, self.history_years)

        for holding in [*holdings, benchmark]:
            bars = self.provider.get_history_kline(
                holding.symbol, KlineType.DAY, start_date, end_date + timedelta(days=1)
            )
            if not bars:
                raise InsufficientHistoricalDataError(
                    f"No daily history for {holding.symbol} since {start_date}"
                )
            inception = bars[0].trade_date
            if inception > start_date:
                logger.debug(f"{holding.symbol} first traded on {inception}")
                start_date = inception

        return self._snap_to_trading_day(holdings[0], start_date, end_date)

    def _snap_to_trading_day(self, holding: Holding, day: date, end_date: date) -> date:
        for offset in range(TRADING_DAY_LOOKAHEAD + 1):
            candidate = day + timedelta(days=offset)
            if candidate > end_date:
                break
            try:
                holding.historical_quote_on(self.provider, candidate)
            except HistoricalDataUnavailableError:
                logger.debug(f"{candidate} is not a trading day for {holding.symbol}")
                continue
            return candidate

        raise InsufficientHistoricalDataError(
            f"No trading day for {holding.symbol} within {TRADING_DAY_LOOKAHEAD} days of {day}"
        )

    def _monthly_bars(
        self,
        symbols: list[str],
        start_date: date,
        end_date: date,
    ) -> dict[str, list[KlineBar]]:
        bars_by_symbol = {}
        for symbol in symbols:
            bars = self.provider.get_history_kline(
                symbol, KlineType.MONTH, start_date, end_date + timedelta(days=1)
            )
            if not bars:
                raise InsufficientHistoricalDataError(
                    f"No monthly history for {symbol} between {start_date} and {end_date}"
                )
            bars_by_symbol[symbol] = bars
        return bars_by_symbol

    def _risk_free_rate(self) -> float:
        """无风险利率（^IRX 报价为百分比收益率）"""
        quote = self.provider.get_stock_quote(self.risk_free_symbol)
        return quote.price / 100

    def __repr__(self) -> str:
        return f"Performance(name={self.name!r}, state={self.state.value})"
