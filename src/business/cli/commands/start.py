"""
Start Command - 启动组合终端

实时刷新的组合终端：
- 市场概览（指数报价）
- 账户全景 / 单个组合持仓
- 历史业绩（组合 vs 基准）
"""

import logging
from typing import Optional

import click

from src.business.config import AppConfig, ConfigError, ProfileConfig
from src.data.providers import YahooProvider

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
    help="应用配置文件路径（默认 $PORTFOLIO_APP_CONFIG 或 config/app.yaml）",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="显示详细日志",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="日志输出文件（避免日志打乱全屏界面）",
)
def start(
    profile: Optional[str],
    config: Optional[str],
    verbose: bool,
    log_file: Optional[str],
) -> None:
    """启动组合终端

    \b
    按键：
      h      帮助
      0 / m  账户全景
      1..9   第 N 个组合
      r      重新加载配置
      q      退出

    \b
    示例：
      portfolio start
      portfolio start -p ~/profile.yaml --log-file /tmp/portfolio.log -v
    """
    # 配置日志
    log_level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        filename=log_file,
    )

    from src.business.terminal.terminal import Terminal

    try:
        app_config = AppConfig.load(config)
        profile_path = ProfileConfig.resolve_path(profile)
        terminal = Terminal(
            profile_path,
            app_config,
            YahooProvider(rate_limit=app_config.rate_limit),
        )
        terminal.run()
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    click.echo("👋 已退出")
