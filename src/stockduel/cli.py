#!/usr/bin/env python
"""Compare two securities' price and dividend history.

Usage:
    stockduel --help

Examples:
    # Compare KO and PEP from ./data, writing outputs to the current directory
    stockduel

    # Read from another directory, skip the chart
    stockduel --data-dir /srv/kaggle/pepsi-vs-coke --no-chart
"""

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from loguru import logger
from rich.console import Console

from stockduel.core.config import DEFAULT_DATA_DIR, ComparisonConfig
from stockduel.core.pipeline import ComparisonPipeline
from stockduel.reporting.sinks import (
    ChartSink,
    ConsoleSink,
    ReportSink,
    SummaryFileSink,
)
from stockduel.shared.exceptions import StockDuelError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compare Coca-Cola and PepsiCo stock performance"
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=DEFAULT_DATA_DIR,
        help="Directory containing KO_/PEP_ stock price and dividend CSVs",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("."),
        help="Directory for the chart image and summary file",
    )
    parser.add_argument(
        "--no-chart",
        action="store_true",
        help="Skip rendering the bar chart",
    )
    parser.add_argument(
        "--parallel",
        action="store_true",
        help="Load both securities concurrently",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def build_sinks(
    config: ComparisonConfig, console: Console, chart: bool = True
) -> list[ReportSink]:
    sinks: list[ReportSink] = [
        ConsoleSink(console),
        SummaryFileSink(config.summary_path, console=console),
    ]
    if chart:
        sinks.append(
            ChartSink(
                config.chart_path,
                title=config.chart_title,
                subtitle=config.chart_subtitle,
                width=config.chart_width,
                height=config.chart_height,
                console=console,
            )
        )
    return sinks


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    args = build_parser().parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "INFO")

    console = Console()
    config = ComparisonConfig.defaults(
        data_dir=args.data_dir,
        output_dir=args.output_dir,
        parallel=args.parallel,
    )
    config.log_summary()

    try:
        ComparisonPipeline(config).run(
            build_sinks(config, console, chart=not args.no_chart)
        )
    except StockDuelError as e:
        logger.error(f"Comparison failed: {e}")
        console.print(f"[red]✗ {e}[/red]")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
