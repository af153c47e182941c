"""
Performance Module - 历史业绩回测

- Performance: 组合 vs 基准的历史业绩（状态机 + compute 流水线）
- PerformanceState: 回测状态
"""

from src.business.performance.performance import (
    Performance,
    PerformanceState,
    summarize,
    years_before,
)

__all__ = ["Performance", "PerformanceState", "summarize", "years_before"]
