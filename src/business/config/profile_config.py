"""
Profile Configuration - 组合配置

从 YAML 加载投资组合配置：

    name: Main
    cash:
      value: 5000
      allocation: 10
    portfolios:
      - name: Core
        allocation: 90
        holdings:
          - {symbol: VTI, allocation: 60, quantity: 100, basis: 18000}
          - {symbol: BND, allocation: 40, quantity: 120, basis: 9500}

只做结构解析和字段校验；目标配置总和（0 或 100）的校验在
Portfolio.load / Profile.load 中完成。
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from src.business.config.errors import ConfigError

DEFAULT_PROFILE_PATH = Path("examples") / "profile.yaml"


def _number(data: dict[str, Any], key: str, where: str, default: float = 0.0) -> float:
    """读取非负数值字段"""
    value = data.get(key, default)
    if value is None:
        return default
    try:
        value = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{where}: '{key}' must be a number, got {value!r}") from e
    if value < 0:
        raise ConfigError(f"{where}: '{key}' must not be negative, got {value}")
    return value


def _allocation(data: dict[str, Any], where: str) -> float:
    value = _number(data, "allocation", where)
    if value > 100:
        raise ConfigError(f"{where}: 'allocation' must be within 0-100, got {value}")
    return value


@dataclass
class HoldingConfig:
    """单个持仓配置

    Attributes:
        symbol: 标的代码
        allocation: 目标配置比例（0-100）
        quantity: 持有数量
        basis: 成本
    """

    symbol: str
    allocation: float = 0.0
    quantity: float = 0.0
    basis: float = 0.0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HoldingConfig":
        """从字典创建配置"""
        if not isinstance(data, dict) or not data.get("symbol"):
            raise ConfigError(f"Holding entry needs a 'symbol': {data!r}")

        symbol = str(data["symbol"]).upper()
        where = f"holding {symbol}"
        return cls(
            symbol=symbol,
            allocation=_allocation(data, where),
            quantity=_number(data, "quantity", where),
            basis=_number(data, "basis", where),
        )


@dataclass
class PortfolioConfig:
    """单个投资组合配置"""

    name: str
    allocation: float = 0.0
    holdings: list[HoldingConfig] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any], default_name: str = "Portfolio") -> "PortfolioConfig":
        """从字典创建配置

        Args:
            data: YAML 中的组合配置
            default_name: 未配置 name 时使用的名称
        """
        if not isinstance(data, dict):
            raise ConfigError(f"Portfolio entry must be a mapping: {data!r}")

        name = str(data.get("name") or default_name)
        holdings = data.get("holdings") or []
        if not isinstance(holdings, list):
            raise ConfigError(f"portfolio {name}: 'holdings' must be a list")

        return cls(
            name=name,
            allocation=_allocation(data, f"portfolio {name}"),
            holdings=[HoldingConfig.from_dict(h) for h in holdings],
        )


@dataclass
class CashConfig:
    """现金配置"""

    value: float = 0.0
    allocation: float = 0.0

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "CashConfig":
        """从字典创建配置"""
        if not data:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"'cash' must be a mapping: {data!r}")
        return cls(
            value=_number(data, "value", "cash"),
            allocation=_allocation(data, "cash"),
        )


@dataclass
class ProfileConfig:
    """Profile 配置（多个投资组合 + 现金）"""

    name: str = "Main"
    cash: CashConfig = field(default_factory=CashConfig)
    portfolios: list[PortfolioConfig] = field(default_factory=list)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "ProfileConfig":
        """从 YAML 文件加载配置"""
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise ConfigError(f"Profile file not found: {path}") from e
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read profile {path}: {e}") from e

        return cls.from_dict(data or {}, default_name=path.stem.capitalize())

    @classmethod
    def from_dict(cls, data: dict[str, Any], default_name: str = "Main") -> "ProfileConfig":
        """从字典创建配置"""
        if not isinstance(data, dict):
            raise ConfigError("Profile must be a mapping with a 'portfolios' list")

        portfolios = data.get("portfolios") or []
        if not isinstance(portfolios, list) or not portfolios:
            raise ConfigError("Profile needs at least one entry under 'portfolios'")

        return cls(
            name=str(data.get("name") or default_name),
            cash=CashConfig.from_dict(data.get("cash")),
            portfolios=[
                PortfolioConfig.from_dict(p, default_name=f"Portfolio {i + 1}")
                for i, p in enumerate(portfolios)
            ],
        )

    @staticmethod
    def resolve_path(path: str | Path | None = None) -> Path:
        """确定 profile 文件路径

        优先级: 显式路径 > PORTFOLIO_PROFILE 环境变量 > ./examples/profile.yaml
        """
        return Path(path or os.getenv("PORTFOLIO_PROFILE") or DEFAULT_PROFILE_PATH)
