"""
Configuration Errors - 配置错误
"""


class ConfigError(Exception):
    """配置缺失或无效（启动时致命）"""

    pass


class InvalidAllocationError(ConfigError):
    """目标配置总和既不是 0 也不是 100，或存在重复项"""

    pass
