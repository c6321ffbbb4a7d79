"""Unit tests for metric calculations and pairwise scoring."""

import pytest

from stockduel.analysis.metrics import (
    SCORING_CRITERIA,
    average_close,
    average_volume,
    compare_metrics,
    compute_series_metrics,
    max_close,
    min_close,
    score_comparison,
    total_dividends,
    total_return_percent,
    volatility,
)
from stockduel.domain.models import Side, Verdict, decide_verdict
from stockduel.shared.exceptions import DivisionByZero, EmptySeries

from factories import MetricsFactory, RecordFactory

SAMPLE_CLOSES = [
    [50.0, 55.0, 60.0],
    [100.0, 90.0, 95.0],
    [12.5],
    [3.2, 7.9, 1.1, 4.4, 9.3, 0.7],
    [0.1, 0.1, 0.1, 0.1],
]


class TestPriceMetrics:
    """Tests for the per-series price metrics."""

    def test_average_close(self):
        assert average_close(RecordFactory.prices([50, 55, 60])) == 55.0
        assert average_close(RecordFactory.prices([100, 90, 95])) == 95.0

    def test_total_return_uses_first_and_last_in_order(self):
        assert total_return_percent(
            RecordFactory.prices([50, 55, 60])
        ) == pytest.approx(20.0)
        assert total_return_percent(
            RecordFactory.prices([100, 90, 95])
        ) == pytest.approx(-5.0)
        # Same values, reversed order
        assert total_return_percent(
            RecordFactory.prices([60, 55, 50])
        ) == pytest.approx(-16.666666, rel=1e-6)

    def test_total_return_single_record_is_zero(self):
        assert total_return_percent(RecordFactory.prices([42.0])) == 0.0

    def test_total_return_zero_baseline(self):
        with pytest.raises(DivisionByZero) as exc_info:
            total_return_percent(RecordFactory.prices([0.0, 10.0]))

        assert exc_info.value.metric == "total_return_percent"

    def test_average_volume(self):
        records = RecordFactory.prices([1, 2, 3], volumes=[100, 200, 600])

        assert average_volume(records) == 300.0

    def test_average_volume_handles_large_sums(self):
        """Multi-year sums of large daily volumes stay exact."""
        volume = 4_000_000_000_000_000
        records = RecordFactory.prices([1.0] * 2, volumes=[volume, volume])

        assert average_volume(records) == float(volume)

    def test_volatility_is_population_stddev(self):
        records = RecordFactory.prices([2, 4, 4, 4, 5, 5, 7, 9])

        assert volatility(records) == pytest.approx(2.0)

    def test_max_and_min_close(self):
        records = RecordFactory.prices([3.0, 9.5, 1.25, 4.0])

        assert max_close(records) == 9.5
        assert min_close(records) == 1.25

    def test_extrema_of_single_record(self):
        records = RecordFactory.prices([0.5])

        assert max_close(records) == 0.5
        assert min_close(records) == 0.5

    @pytest.mark.parametrize(
        "metric",
        [
            average_close,
            total_return_percent,
            average_volume,
            volatility,
            max_close,
            min_close,
        ],
    )
    def test_empty_series_rejected(self, metric):
        with pytest.raises(EmptySeries) as exc_info:
            metric([])

        assert exc_info.value.metric == metric.__name__


class TestMetricProperties:
    """Properties that hold for any non-empty price sequence."""

    @pytest.mark.parametrize("closes", SAMPLE_CLOSES)
    def test_every_close_within_extrema(self, closes):
        records = RecordFactory.prices(closes)
        low, high = min_close(records), max_close(records)

        assert all(low <= r.close <= high for r in records)

    @pytest.mark.parametrize("closes", SAMPLE_CLOSES)
    def test_volatility_non_negative(self, closes):
        assert volatility(RecordFactory.prices(closes)) >= 0

    def test_volatility_zero_iff_constant(self):
        assert volatility(RecordFactory.prices([0.1, 0.1, 0.1, 0.1])) == 0.0
        assert volatility(RecordFactory.prices([7.0])) == 0.0
        assert volatility(RecordFactory.prices([7.0, 7.0, 7.01])) > 0

    @pytest.mark.parametrize("factor", [0.5, 3.0, 1234.5])
    def test_total_return_is_scale_invariant(self, factor):
        closes = [3.2, 7.9, 1.1, 4.4]
        scaled = [c * factor for c in closes]

        assert total_return_percent(
            RecordFactory.prices(scaled)
        ) == pytest.approx(total_return_percent(RecordFactory.prices(closes)))


class TestTotalDividends:
    """Tests for total_dividends."""

    def test_sums_amounts(self):
        records = RecordFactory.dividends([0.41, 0.42, 0.44])

        assert total_dividends(records) == pytest.approx(1.27)

    def test_no_dividends_is_zero(self):
        assert total_dividends([]) == 0.0


class TestComputeSeriesMetrics:
    """Tests for compute_series_metrics."""

    def test_all_fields(self):
        metrics = compute_series_metrics(
            RecordFactory.prices([50, 55, 60], volumes=[10, 20, 30]),
            RecordFactory.dividends([0.5, 0.25]),
        )

        assert metrics.average_close == 55.0
        assert metrics.total_return_percent == pytest.approx(20.0)
        assert metrics.average_volume == 20.0
        assert metrics.volatility == pytest.approx(4.0824829)
        assert metrics.max_close == 60.0
        assert metrics.min_close == 50.0
        assert metrics.total_dividends == 0.75

    def test_empty_dividends_allowed(self):
        metrics = compute_series_metrics(RecordFactory.prices([10.0]), [])

        assert metrics.total_dividends == 0.0

    def test_empty_prices_rejected(self):
        with pytest.raises(EmptySeries):
            compute_series_metrics([], RecordFactory.dividends([1.0]))


class TestScoring:
    """Tests for compare_metrics, score_comparison and verdicts."""

    def test_criteria_order(self):
        scorecard = compare_metrics(
            MetricsFactory.metrics(), MetricsFactory.metrics()
        )

        assert [c.name for c in scorecard.criteria] == [
            "Average Close",
            "Total Return",
            "Average Volume",
            "Volatility",
            "Max Close",
            "Total Dividends",
        ]

    def test_equal_metrics_go_to_a(self):
        """Ties per criterion are awarded to A."""
        metrics = MetricsFactory.metrics()

        assert score_comparison(metrics, metrics) == (6, 0)

    def test_b_wins_every_criterion(self):
        a = MetricsFactory.metrics()
        b = MetricsFactory.metrics(
            average_close=51.0,
            total_return_percent=11.0,
            average_volume=1_000_001.0,
            volatility=2.4,
            max_close=61.0,
            total_dividends=1.6,
        )

        assert score_comparison(a, b) == (0, 6)

    def test_lower_volatility_wins(self):
        a = MetricsFactory.metrics(volatility=5.0)
        b = MetricsFactory.metrics(volatility=1.0)

        assert compare_metrics(a, b).winner_of("Volatility") is Side.B
        assert compare_metrics(b, a).winner_of("Volatility") is Side.A

    def test_higher_volume_wins(self):
        a = MetricsFactory.metrics(average_volume=10.0)
        b = MetricsFactory.metrics(average_volume=20.0)

        assert compare_metrics(a, b).winner_of("Average Volume") is Side.B

    def test_min_close_is_not_scored(self):
        scorecard = compare_metrics(
            MetricsFactory.metrics(), MetricsFactory.metrics(min_close=1.0)
        )

        assert scorecard.winner_of("Min Close") is None

    @pytest.mark.parametrize(
        "overrides",
        [
            {},
            {"average_close": 99.0, "volatility": 0.1},
            {"total_return_percent": -50.0, "total_dividends": 0.0},
            {"average_volume": 5.0, "max_close": 500.0},
        ],
    )
    def test_scores_sum_to_six(self, overrides):
        score_a, score_b = score_comparison(
            MetricsFactory.metrics(), MetricsFactory.metrics(**overrides)
        )

        assert score_a >= 0 and score_b >= 0
        assert score_a + score_b == len(SCORING_CRITERIA) == 6

    def test_verdict_branches(self):
        assert decide_verdict(4, 2) is Verdict.A_WINS
        assert decide_verdict(2, 4) is Verdict.B_WINS
        assert decide_verdict(3, 3) is Verdict.TIE

    def test_scorecard_verdict_tie(self):
        a = MetricsFactory.metrics()
        b = MetricsFactory.metrics(
            average_close=51.0, total_return_percent=11.0, volatility=1.0
        )
        scorecard = compare_metrics(a, b)

        assert (scorecard.score_a, scorecard.score_b) == (3, 3)
        assert scorecard.verdict is Verdict.TIE


class TestKoVsPepScenario:
    """KO closes 50, 55, 60 against PEP closes 100, 90, 95."""

    def test_returns_averages_and_points(self):
        ko = compute_series_metrics(RecordFactory.prices([50, 55, 60]), [])
        pep = compute_series_metrics(RecordFactory.prices([100, 90, 95]), [])

        assert ko.total_return_percent == pytest.approx(20.0)
        assert pep.total_return_percent == pytest.approx(-5.0)
        assert ko.average_close == 55.0
        assert pep.average_close == 95.0

        scorecard = compare_metrics(ko, pep)
        assert scorecard.winner_of("Total Return") is Side.A
        assert scorecard.winner_of("Average Close") is Side.B


class TestCloseMetricsColumn:
    """Close-based metrics read only the close column."""

    def test_close_metrics_do_not_build_price_frame(self, monkeypatch):
        def fail(records):
            raise AssertionError("full price frame built for a close metric")

        monkeypatch.setattr("stockduel.analysis.metrics.prices_to_frame", fail)
        records = RecordFactory.prices([3.0, 9.5, 1.25])

        assert average_close(records) == pytest.approx(4.5833333)
        assert max_close(records) == 9.5
        assert min_close(records) == 1.25
