"""
CLI Commands - 命令行子命令
"""

from src.business.cli.commands.performance import performance
from src.business.cli.commands.start import start

__all__ = ["performance", "start"]
