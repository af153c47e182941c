"""
Performance Command - 历史业绩报告

加载 Profile，刷新一次报价，同步计算历史业绩并输出：
- 业绩表（CAGR、波动率、最佳/最差年度、最大回撤、Sharpe）
- 区间收益（1 个月 ... 全部）
- 年度收益
"""

import json
import logging
import sys
from typing import Optional

import click

from src.business.cli.dashboard import DashboardRenderer
from src.business.config import AppConfig, ConfigError, ProfileConfig
from src.business.performance import Performance
from src.business.portfolio import Profile
from src.data.providers import DataProviderError, YahooProvider
from src.engine import PerformanceError

logger = logging.getLogger(__name__)


@click.command()
@click.option(
    "--profile",
    "-p",
    type=click.Path(dir_okay=False),
    default=None,
    help="Profile 文件路径（默认 $PORTFOLIO_PROFILE 或 ./examples/profile.yaml）",
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="应用配置文件路径",
)
@click.option(
    "--portfolio",
    "portfolio_name",
    default=None,
    help="只计算指定组合（默认整个账户的合并组合）",
)
@click.option(
    "--benchmark",
    "-b",
    default=None,
    help="业绩比较基准（默认使用配置中的 benchmark_symbol）",
)
@click.option(
    "--output",
    "-o",
    type=click.Choice(["text", "json"]),
    default="text",
    help="输出格式",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="显示详细日志",
)
def performance(
    profile: Optional[str],
    config: Optional[str],
    portfolio_name: Optional[str],
    benchmark: Optional[str],
    output: str,
    verbose: bool,
) -> None:
    """计算历史业绩

    \b
    示例：
      portfolio performance
      portfolio performance --portfolio Core --benchmark QQQ
      portfolio performance -o json
    """
    log_level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        app_config = AppConfig.load(config)
        loaded = Profile.load(ProfileConfig.from_yaml(ProfileConfig.resolve_path(profile)))
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    if portfolio_name is None:
        portfolio = loaded.merged_portfolio
    else:
        matches = [p for p in loaded.portfolios if p.name == portfolio_name]
        if not matches:
            names = ", ".join(p.name for p in loaded.portfolios)
            raise click.BadParameter(
                f"Unknown portfolio {portfolio_name!r} (available: {names})",
                param_hint="--portfolio",
            )
        portfolio = matches[0]

    provider = YahooProvider(rate_limit=app_config.rate_limit)
    result = Performance.from_config(portfolio, provider, app_config, benchmark_symbol=benchmark)

    try:
        if not portfolio.has_target_allocation:
            click.echo(f"⏳ 获取 {portfolio.name} 实时报价...", err=True)
            loaded.refresh(provider)
        click.echo(f"⏳ 计算 {portfolio.name} 历史业绩...", err=True)
        result.compute()
    except (DataProviderError, PerformanceError) as e:
        logger.exception("业绩计算失败")
        click.echo(f"❌ 错误: {e}", err=True)
        sys.exit(1)

    if output == "json":
        data = {
            "start_date": result.start_date.isoformat(),
            "end_date": result.end_date.isoformat(),
            "portfolio": result.result.to_dict(),
            "benchmark": result.benchmark.to_dict(),
        }
        click.echo(json.dumps(data, indent=2, ensure_ascii=False))
    else:
        click.echo(DashboardRenderer().render_report(result))
