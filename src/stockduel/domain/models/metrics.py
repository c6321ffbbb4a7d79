"""Derived per-security metrics"""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class SeriesMetrics:
    """Aggregate metrics for one security over the loaded period"""

    average_close: float
    total_return_percent: float
    average_volume: float
    volatility: float
    max_close: float
    min_close: float
    total_dividends: float

    def to_dict(self) -> dict[str, float]:
        return asdict(self)
