"""
App Configuration - 应用配置

运行参数（刷新间隔、基准、初始资金等）。

配置来源: YAML 文件 (config/app.yaml) > dataclass 默认值
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from src.business.config.errors import ConfigError

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent.parent / "config" / "app.yaml"


@dataclass
class AppConfig:
    """应用配置

    Attributes:
        refresh_interval: 实时行情刷新间隔（秒）
        benchmark_symbol: 业绩比较基准
        initial_balance: 回测模拟初始资金
        risk_free_symbol: 无风险利率标的（13 周国债收益率）
        timezone: 市场时区，决定"今天"和月份边界
        history_years: 历史数据最长回溯年数
        rate_limit: 行情请求最小间隔（秒）
    """

    refresh_interval: float = 10.0
    benchmark_symbol: str = "SPY"
    initial_balance: float = 10000.0
    risk_free_symbol: str = "^IRX"
    timezone: str = "America/New_York"
    history_years: int = 100
    rate_limit: float = 0.2

    def __post_init__(self) -> None:
        if self.refresh_interval <= 0:
            raise ConfigError(f"refresh_interval must be positive, got {self.refresh_interval}")
        if self.initial_balance <= 0:
            raise ConfigError(f"initial_balance must be positive, got {self.initial_balance}")
        if self.history_years <= 0:
            raise ConfigError(f"history_years must be positive, got {self.history_years}")
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigError(f"Unknown timezone: {self.timezone}") from e

    @property
    def tz(self) -> ZoneInfo:
        """市场时区"""
        return ZoneInfo(self.timezone)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "AppConfig":
        """从 YAML 文件加载配置"""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read app config {path}: {e}") from e
        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AppConfig":
        """从字典创建配置，未知字段报错"""
        if not isinstance(data, dict):
            raise ConfigError("App config must be a mapping")

        known = {f.name: f.type for f in fields(cls)}
        unknown = set(data) - set(known)
        if unknown:
            raise ConfigError(f"Unknown app config keys: {', '.join(sorted(unknown))}")

        try:
            return cls(**data)
        except TypeError as e:
            raise ConfigError(f"Invalid app config: {e}") from e

    @classmethod
    def load(cls, path: str | Path | None = None) -> "AppConfig":
        """加载配置

        优先级: 显式路径 > PORTFOLIO_APP_CONFIG 环境变量 > config/app.yaml > 默认值
        """
        explicit = path or os.getenv("PORTFOLIO_APP_CONFIG")
        if explicit:
            return cls.from_yaml(explicit)
        if DEFAULT_CONFIG_PATH.exists():
            return cls.from_yaml(DEFAULT_CONFIG_PATH)
        return cls()
