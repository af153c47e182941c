"""Historical performance simulation.

- balance: monthly balance series of a weighted portfolio
- errors: computation failure taxonomy
"""

from src.engine.performance.balance import (
    build_monthly_balances,
    calc_share_quantity,
    check_alignment,
)
from src.engine.performance.errors import (
    DataAlignmentError,
    InsufficientHistoricalDataError,
    PerformanceError,
)

__all__ = [
    "build_monthly_balances",
    "calc_share_quantity",
    "check_alignment",
    "DataAlignmentError",
    "InsufficientHistoricalDataError",
    "PerformanceError",
]
