"""Output sinks that consume a finished comparison."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from rich.console import Console

from stockduel.analysis.chart_renderer import build_chart_spec, render_chart
from stockduel.reporting.report import render_console, write_summary
from stockduel.shared.constants import CHART_HEIGHT, CHART_WIDTH

if TYPE_CHECKING:
    from stockduel.domain.models import ComparisonResult


class ReportSink(Protocol):
    """Consumes a finished comparison"""

    def emit(self, result: ComparisonResult) -> None: ...


class ConsoleSink:
    """Prints the comparison transcript"""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def emit(self, result: ComparisonResult) -> None:
        render_console(result, self.console)


@dataclass
class SummaryFileSink:
    """Writes the flat summary file"""

    path: Path
    console: Console | None = None

    def emit(self, result: ComparisonResult) -> None:
        written = write_summary(result, self.path)
        if self.console:
            self.console.print(f"[green]✓ Results saved to: {written}[/green]")


@dataclass
class ChartSink:
    """Renders the grouped bar chart image"""

    path: Path
    title: str
    subtitle: str | None = None
    width: int = CHART_WIDTH
    height: int = CHART_HEIGHT
    console: Console | None = None

    def emit(self, result: ComparisonResult) -> None:
        spec = build_chart_spec(result, self.title, self.subtitle)
        written = render_chart(spec, self.path, self.width, self.height)
        if self.console:
            self.console.print(f"[green]✓ Bar chart saved to: {written}[/green]")
