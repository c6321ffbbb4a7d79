"""
Text report formatting for a comparison: rich console transcript and a flat
summary file.
"""

from collections.abc import Callable
from pathlib import Path

from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from stockduel.domain.models import ComparisonResult, Side, Verdict
from stockduel.shared.exceptions import OutputWriteFailure


def _money(value: float) -> str:
    return f"${value:.2f}"


def _percent(value: float) -> str:
    return f"{value:.2f}%"


def _shares(value: float) -> str:
    return f"{value:,.0f}"


# (label, SeriesMetrics attribute, formatter, scoring criterion or None)
REPORT_ROWS: tuple[tuple[str, str, Callable[[float], str], str | None], ...] = (
    ("Avg Close", "average_close", _money, "Average Close"),
    ("Total Return", "total_return_percent", _percent, "Total Return"),
    ("Avg Volume", "average_volume", _shares, "Average Volume"),
    ("Volatility", "volatility", _money, "Volatility"),
    ("Max Close", "max_close", _money, "Max Close"),
    ("Min Close", "min_close", _money, None),
    ("Total Divs", "total_dividends", _money, "Total Dividends"),
)


def _title(result: ComparisonResult) -> str:
    return (
        f"{result.security_a.security.name} vs "
        f"{result.security_b.security.name} - Stock Analysis Results"
    )


def _verdict_line(result: ComparisonResult) -> str:
    winner = result.winner
    if winner is None:
        return "RESULT: TIE"
    return f"WINNER: {winner.security.label}"


def build_report_lines(result: ComparisonResult) -> list[str]:
    """Flat key-value summary of a comparison, one entry per line."""
    a = result.security_a
    b = result.security_b
    scorecard = result.scorecard

    lines = [
        _title(result).upper(),
        f"Period: {a.period_start} to {a.period_end}",
        "",
    ]
    for label, attr, fmt, _criterion in REPORT_ROWS:
        lines.append(
            f"{label:<12} - {a.security.symbol}: {fmt(getattr(a.metrics, attr))}"
            f"  |  {b.security.symbol}: {fmt(getattr(b.metrics, attr))}"
        )
    lines.extend(
        [
            "",
            f"Score: {a.security.symbol}={scorecard.score_a} "
            f"{b.security.symbol}={scorecard.score_b}",
            _verdict_line(result),
        ]
    )
    return lines


def write_summary(result: ComparisonResult, path: str | Path) -> Path:
    """Write the summary file, replacing any existing file.

    Raises:
        OutputWriteFailure: If the file cannot be written
    """
    path = Path(path)
    content = "\n".join(build_report_lines(result)) + "\n"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise OutputWriteFailure(path, e) from e

    logger.info(f"Summary written to {path}")
    return path


def render_console(result: ComparisonResult, console: Console) -> None:
    """Print the full comparison transcript."""
    a = result.security_a
    b = result.security_b
    scorecard = result.scorecard

    header = (
        f"Period  : {a.period_start} to {a.period_end}\n"
        f"Records : {a.security.symbol}={a.record_count}  "
        f"{b.security.symbol}={b.record_count}"
    )
    console.print(
        Panel(
            header,
            title=f"[bold]{_title(result)}[/bold]",
            border_style="cyan",
        )
    )

    table = Table(title="Analysis Results")
    table.add_column("Metric", style="cyan")
    table.add_column(a.security.label, justify="right")
    table.add_column(b.security.label, justify="right")
    table.add_column("Winner", style="green")

    for label, attr, fmt, criterion in REPORT_ROWS:
        winner = scorecard.winner_of(criterion) if criterion else None
        table.add_row(
            label,
            fmt(getattr(a.metrics, attr)),
            fmt(getattr(b.metrics, attr)),
            result.side(winner).security.symbol if winner else "-",
        )
    console.print(table)

    console.print(
        f"\n[bold]Final score:[/bold] {a.security.label} = {scorecard.score_a}"
        f"    {b.security.label} = {scorecard.score_b}"
        f"  (of {len(scorecard.criteria)} metrics)\n"
    )

    verdict = scorecard.verdict
    if verdict is Verdict.TIE:
        console.print(
            Panel(
                "It's a TIE! Both companies perform equally well "
                "across the metrics.",
                title="[bold]Verdict[/bold]",
                border_style="yellow",
            )
        )
        return

    winner = result.winner
    loser = result.side(Side.B if verdict is Verdict.A_WINS else Side.A)
    won = [
        c.name.lower()
        for c in scorecard.criteria
        if result.side(c.winner) is winner
    ]
    console.print(
        Panel(
            f"[bold]{winner.security.label}[/bold] is the BETTER stock!\n"
            f"{winner.security.name} outperforms {loser.security.name} on "
            f"{', '.join(won)}.",
            title="[bold]Verdict[/bold]",
            border_style="green",
        )
    )
