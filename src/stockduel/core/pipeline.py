"""Load, compute and emit a two-security comparison."""

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from loguru import logger

from stockduel.analysis.metrics import compare_metrics, compute_series_metrics
from stockduel.analysis.record_loader import (
    load_dividend_records,
    load_price_records,
)
from stockduel.core.config import ComparisonConfig
from stockduel.domain.models import (
    ComparisonResult,
    SecurityAnalysis,
    SecurityConfig,
)
from stockduel.reporting.sinks import ReportSink


class ComparisonPipeline:
    """Runs load -> metrics -> sinks for a security pair.

    Every load and metric completes before any sink runs, so a failure
    leaves no partial output behind.
    """

    def __init__(self, config: ComparisonConfig):
        self.config = config

    @staticmethod
    def analyse_security(security: SecurityConfig) -> SecurityAnalysis:
        """Load one security's tables and compute its metrics.

        Raises:
            ResourceUnavailable: If an input file cannot be opened
            MalformedRecord: If an input row cannot be parsed
            EmptySeries: If the price table has no data rows
            DivisionByZero: If the first close is zero
        """
        prices = load_price_records(security.price_path)
        dividends = load_dividend_records(security.dividend_path)
        metrics = compute_series_metrics(prices, dividends)
        logger.debug(f"{security.symbol} metrics: {metrics.to_dict()}")
        return SecurityAnalysis(
            security=security,
            prices=tuple(prices),
            dividends=tuple(dividends),
            metrics=metrics,
        )

    def analyse(self) -> ComparisonResult:
        """Analyse both securities and score them against each other."""
        securities = (self.config.security_a, self.config.security_b)

        if self.config.parallel:
            with ThreadPoolExecutor(max_workers=2) as executor:
                futures = [
                    executor.submit(self.analyse_security, s)
                    for s in securities
                ]
                analysis_a, analysis_b = (f.result() for f in futures)
        else:
            analysis_a, analysis_b = (
                self.analyse_security(s) for s in securities
            )

        scorecard = compare_metrics(analysis_a.metrics, analysis_b.metrics)
        logger.info(
            f"Score: {analysis_a.security.symbol}={scorecard.score_a} "
            f"{analysis_b.security.symbol}={scorecard.score_b} "
            f"({scorecard.verdict.value})"
        )
        return ComparisonResult(
            security_a=analysis_a,
            security_b=analysis_b,
            scorecard=scorecard,
        )

    def run(self, sinks: Sequence[ReportSink]) -> ComparisonResult:
        """Analyse, then hand the result to each sink in order."""
        result = self.analyse()
        for sink in sinks:
            sink.emit(result)
        return result
