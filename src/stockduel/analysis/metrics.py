"""
Metric calculations over price and dividend series, and pairwise scoring.
"""

import statistics
from collections.abc import Sequence

import polars as pl

from stockduel.analysis.record_loader import prices_to_frame
from stockduel.domain.models import (
    CriterionResult,
    DividendRecord,
    PriceRecord,
    Scorecard,
    SeriesMetrics,
    Side,
)
from stockduel.shared.exceptions import DivisionByZero, EmptySeries

# (criterion name, SeriesMetrics attribute, higher is better)
SCORING_CRITERIA: tuple[tuple[str, str, bool], ...] = (
    ("Average Close", "average_close", True),
    ("Total Return", "total_return_percent", True),
    ("Average Volume", "average_volume", True),
    ("Volatility", "volatility", False),
    ("Max Close", "max_close", True),
    ("Total Dividends", "total_dividends", True),
)


def _require_records(series: Sequence[PriceRecord], metric: str) -> None:
    if len(series) == 0:
        raise EmptySeries(metric)


def _closes(series: Sequence[PriceRecord], metric: str) -> pl.Series:
    _require_records(series, metric)
    return pl.Series("close", [r.close for r in series], dtype=pl.Float64)


def average_close(series: Sequence[PriceRecord]) -> float:
    """Arithmetic mean of closing prices."""
    return float(_closes(series, "average_close").mean())


def total_return_percent(series: Sequence[PriceRecord]) -> float:
    """Percentage change from the first to the last close, in file order.

    Raises:
        EmptySeries: If the series is empty
        DivisionByZero: If the first close is zero
    """
    _require_records(series, "total_return_percent")
    first = series[0].close
    last = series[-1].close
    if first == 0:
        raise DivisionByZero("total_return_percent")
    return (last - first) / first * 100


def average_volume(series: Sequence[PriceRecord]) -> float:
    """Mean daily volume, summed as 64-bit integers."""
    _require_records(series, "average_volume")
    total = prices_to_frame(series)["volume"].sum()
    return int(total) / len(series)


def volatility(series: Sequence[PriceRecord]) -> float:
    """Population standard deviation of closing prices (divides by n)."""
    _require_records(series, "volatility")
    return statistics.pstdev([r.close for r in series])


def max_close(series: Sequence[PriceRecord]) -> float:
    return float(_closes(series, "max_close").max())


def min_close(series: Sequence[PriceRecord]) -> float:
    return float(_closes(series, "min_close").min())


def total_dividends(dividends: Sequence[DividendRecord]) -> float:
    """Sum of dividend amounts; 0.0 when no dividends were paid."""
    amounts = pl.Series("amount", [d.amount for d in dividends], dtype=pl.Float64)
    return float(amounts.sum())


def compute_series_metrics(
    prices: Sequence[PriceRecord], dividends: Sequence[DividendRecord]
) -> SeriesMetrics:
    """Compute every metric for one security.

    Raises:
        EmptySeries: If there are no price records
        DivisionByZero: If the first close is zero
    """
    return SeriesMetrics(
        average_close=average_close(prices),
        total_return_percent=total_return_percent(prices),
        average_volume=average_volume(prices),
        volatility=volatility(prices),
        max_close=max_close(prices),
        min_close=min_close(prices),
        total_dividends=total_dividends(dividends),
    )


def compare_metrics(a: SeriesMetrics, b: SeriesMetrics) -> Scorecard:
    """Score two securities across the fixed criteria.

    B takes a point only when strictly better; every other outcome,
    including equality, goes to A. Each criterion awards exactly one point.
    """
    results = []
    for name, attr, higher_is_better in SCORING_CRITERIA:
        value_a = getattr(a, attr)
        value_b = getattr(b, attr)
        if higher_is_better:
            b_better = value_b > value_a
        else:
            b_better = value_b < value_a
        results.append(
            CriterionResult(
                name=name,
                value_a=value_a,
                value_b=value_b,
                higher_is_better=higher_is_better,
                winner=Side.B if b_better else Side.A,
            )
        )
    return Scorecard(criteria=tuple(results))


def score_comparison(a: SeriesMetrics, b: SeriesMetrics) -> tuple[int, int]:
    """Return (score_a, score_b); the two always sum to the criteria count."""
    scorecard = compare_metrics(a, b)
    return scorecard.score_a, scorecard.score_b
