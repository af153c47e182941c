"""Engine data models."""

from src.engine.models.performance import Historic, PerformanceResult, TrailingReturns

__all__ = [
    "Historic",
    "PerformanceResult",
    "TrailingReturns",
]
