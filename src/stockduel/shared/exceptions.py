"""Consolidated exceptions for stockduel.

All custom exceptions are defined here to provide a single source of truth
for error handling across loading, analysis and reporting.
"""

from pathlib import Path


class StockDuelError(Exception):
    """Base exception for stockduel errors"""

    pass


class ResourceUnavailable(StockDuelError):
    """Raised when an input table cannot be opened"""

    def __init__(self, path: str | Path, cause: Exception | None = None):
        self.path = Path(path)
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Cannot open input file {self.path}{detail}")


class MalformedRecord(StockDuelError):
    """Raised when a row holds a field that cannot be parsed"""

    def __init__(self, path: str | Path, line_number: int, reason: str):
        self.path = Path(path)
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"{self.path}:{line_number}: {reason}")


class MetricError(StockDuelError):
    """Base metric computation error"""

    def __init__(self, metric: str, message: str):
        self.metric = metric
        super().__init__(message)


class EmptySeries(MetricError):
    """Raised when a metric needing at least one record receives none"""

    def __init__(self, metric: str):
        super().__init__(
            metric, f"{metric} requires at least one price record"
        )


class DivisionByZero(MetricError):
    """Raised when the baseline close of a return calculation is zero"""

    def __init__(self, metric: str):
        super().__init__(
            metric, f"{metric} is undefined: first close price is zero"
        )


class OutputWriteFailure(StockDuelError):
    """Raised when the chart or summary file cannot be written"""

    def __init__(self, path: str | Path, cause: Exception | None = None):
        self.path = Path(path)
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Cannot write output file {self.path}{detail}")
