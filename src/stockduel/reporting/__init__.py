"""Console and file output for a finished comparison."""

from .report import build_report_lines, render_console, write_summary
from .sinks import ChartSink, ConsoleSink, ReportSink, SummaryFileSink

__all__ = [
    "build_report_lines",
    "render_console",
    "write_summary",
    "ReportSink",
    "ConsoleSink",
    "SummaryFileSink",
    "ChartSink",
]
