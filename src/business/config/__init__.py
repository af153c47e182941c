"""
Configuration Management - 配置管理

加载和管理配置：
- ProfileConfig: 投资组合配置 (profile.yaml)
- AppConfig: 运行参数 (config/app.yaml)
- ConfigError / InvalidAllocationError: 配置错误
"""

from src.business.config.app_config import AppConfig
from src.business.config.errors import ConfigError, InvalidAllocationError
from src.business.config.profile_config import (
    CashConfig,
    HoldingConfig,
    PortfolioConfig,
    ProfileConfig,
)

__all__ = [
    "AppConfig",
    "CashConfig",
    "ConfigError",
    "HoldingConfig",
    "InvalidAllocationError",
    "PortfolioConfig",
    "ProfileConfig",
]
