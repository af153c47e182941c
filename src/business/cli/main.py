"""
CLI Main Entry Point - 命令行主入口

使用 Click 库构建命令行工具。
"""

import click
from dotenv import load_dotenv

from src.business.cli.commands.performance import performance
from src.business.cli.commands.start import start

# PORTFOLIO_PROFILE / PORTFOLIO_APP_CONFIG 可写在 .env 中
load_dotenv()


@click.group()
@click.version_option(version="0.1.0", prog_name="portfolio")
def cli() -> None:
    """组合业绩终端 - 命令行工具

    实时持仓看板、历史业绩回测与基准对比。
    """
    pass


# 注册子命令
cli.add_command(start)
cli.add_command(performance)


if __name__ == "__main__":
    cli()
