"""Domain models"""

from .chart import ChartEntry, ChartSpec
from .comparison import (
    ComparisonResult,
    CriterionResult,
    Scorecard,
    SecurityAnalysis,
    Side,
    Verdict,
    decide_verdict,
)
from .metrics import SeriesMetrics
from .records import DividendRecord, PriceRecord
from .security import SecurityConfig

__all__ = [
    "PriceRecord",
    "DividendRecord",
    "SeriesMetrics",
    "SecurityConfig",
    "SecurityAnalysis",
    "Side",
    "Verdict",
    "CriterionResult",
    "Scorecard",
    "ComparisonResult",
    "ChartEntry",
    "ChartSpec",
    "decide_verdict",
]
