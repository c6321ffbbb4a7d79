"""Unit tests for the summary file and console transcript."""

import pytest
from rich.console import Console

from stockduel.reporting.report import (
    build_report_lines,
    render_console,
    write_summary,
)
from stockduel.shared.exceptions import OutputWriteFailure

from factories import ComparisonFactory, MetricsFactory


@pytest.fixture
def ko_wins():
    """KO ahead on five of six criteria"""
    return ComparisonFactory.result(
        MetricsFactory.metrics(),
        MetricsFactory.metrics(volatility=1.0),
    )


@pytest.fixture
def pep_wins():
    return ComparisonFactory.result(
        MetricsFactory.metrics(),
        MetricsFactory.metrics(
            average_close=95.0,
            total_return_percent=25.0,
            max_close=120.0,
            total_dividends=3.2,
        ),
    )


@pytest.fixture
def tie():
    return ComparisonFactory.result(
        MetricsFactory.metrics(),
        MetricsFactory.metrics(
            average_close=51.0, total_return_percent=11.0, volatility=1.0
        ),
    )


def recording_console() -> Console:
    return Console(record=True, width=120, color_system=None)


class TestBuildReportLines:
    """Tests for the flat summary content."""

    def test_period_and_metrics(self, ko_wins):
        lines = build_report_lines(ko_wins)

        assert lines[1] == "Period: 2023-01-01 to 2023-01-03"
        assert "Avg Close    - KO: $50.00  |  PEP: $50.00" in lines
        assert "Total Return - KO: 10.00%  |  PEP: 10.00%" in lines
        assert "Avg Volume   - KO: 1,000,000  |  PEP: 1,000,000" in lines
        assert "Volatility   - KO: $2.50  |  PEP: $1.00" in lines
        assert "Max Close    - KO: $60.00  |  PEP: $60.00" in lines
        assert "Min Close    - KO: $40.00  |  PEP: $40.00" in lines
        assert "Total Divs   - KO: $1.50  |  PEP: $1.50" in lines

    def test_score_and_winner_a(self, ko_wins):
        lines = build_report_lines(ko_wins)

        assert "Score: KO=5 PEP=1" in lines
        assert lines[-1] == "WINNER: Coca-Cola (KO)"

    def test_winner_b(self, pep_wins):
        lines = build_report_lines(pep_wins)

        assert "Score: KO=2 PEP=4" in lines
        assert lines[-1] == "WINNER: PepsiCo (PEP)"

    def test_tie(self, tie):
        lines = build_report_lines(tie)

        assert "Score: KO=3 PEP=3" in lines
        assert lines[-1] == "RESULT: TIE"


class TestWriteSummary:
    """Tests for write_summary."""

    def test_writes_lines(self, tmp_path, ko_wins):
        path = write_summary(ko_wins, tmp_path / "analysis_output.txt")

        assert path.read_text().splitlines() == build_report_lines(ko_wins)

    def test_overwrites_existing_file(self, tmp_path, tie):
        path = tmp_path / "analysis_output.txt"
        path.write_text("old content\n" * 50)

        write_summary(tie, path)

        content = path.read_text()
        assert "old content" not in content
        assert content.endswith("RESULT: TIE\n")

    def test_unwritable_destination(self, tmp_path, tie):
        with pytest.raises(OutputWriteFailure) as exc_info:
            write_summary(tie, tmp_path)

        assert exc_info.value.path == tmp_path


class TestRenderConsole:
    """Tests for the console transcript."""

    def test_sections_and_winners(self, ko_wins):
        console = recording_console()

        render_console(ko_wins, console)

        text = console.export_text()
        assert "Coca-Cola vs PepsiCo" in text
        assert "Period  : 2023-01-01 to 2023-01-03" in text
        assert "Records : KO=3  PEP=3" in text
        for label in (
            "Avg Close",
            "Total Return",
            "Avg Volume",
            "Volatility",
            "Max Close",
            "Min Close",
            "Total Divs",
        ):
            assert label in text
        assert "Final score:" in text
        assert "Coca-Cola (KO) is the BETTER stock!" in text

    def test_volatility_row_names_lower_value(self, ko_wins):
        console = recording_console()

        render_console(ko_wins, console)

        volatility_row = next(
            line
            for line in console.export_text().splitlines()
            if "Volatility" in line
        )
        assert "PEP" in volatility_row

    def test_b_verdict(self, pep_wins):
        console = recording_console()

        render_console(pep_wins, console)

        assert "PepsiCo (PEP) is the BETTER stock!" in console.export_text()

    def test_tie_verdict(self, tie):
        console = recording_console()

        render_console(tie, console)

        text = console.export_text()
        assert "TIE" in text
        assert "BETTER stock" not in text
