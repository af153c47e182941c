"""Performance computation errors."""


class PerformanceError(Exception):
    """Base exception for performance computation failures."""

    pass


class InsufficientHistoricalDataError(PerformanceError):
    """A symbol returned no price bars for the analysis window."""

    pass


class DataAlignmentError(PerformanceError):
    """Constituent bar series differ in length or month alignment."""

    pass
