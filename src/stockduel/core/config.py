"""Configuration management for stockduel"""

from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from stockduel.domain.models import SecurityConfig
from stockduel.shared.constants import CHART_HEIGHT, CHART_WIDTH

DEFAULT_DATA_DIR = Path("data")
DEFAULT_CHART_FILE = "pepsi_vs_coke_chart.png"
DEFAULT_SUMMARY_FILE = "analysis_output.txt"
DEFAULT_TITLE = "Pepsi vs Coca-Cola - Stock Performance Comparison"
DEFAULT_SUBTITLE = "Data from Kaggle 'Pepsi vs Coke' dataset (2019-2023)"


def security_from_dir(data_dir: Path, symbol: str, name: str) -> SecurityConfig:
    """Security whose tables follow the <SYMBOL>_stock_price.csv layout."""
    return SecurityConfig(
        symbol=symbol,
        name=name,
        price_path=data_dir / f"{symbol}_stock_price.csv",
        dividend_path=data_dir / f"{symbol}_stock_dividend.csv",
    )


@dataclass
class ComparisonConfig:
    """Inputs, outputs and chart settings for one comparison run"""

    # Fields without defaults (required parameters)
    security_a: SecurityConfig
    security_b: SecurityConfig
    chart_path: Path
    summary_path: Path

    # Fields with defaults
    chart_width: int = CHART_WIDTH
    chart_height: int = CHART_HEIGHT
    chart_title: str = DEFAULT_TITLE
    chart_subtitle: str | None = DEFAULT_SUBTITLE
    parallel: bool = False

    @classmethod
    def defaults(
        cls,
        data_dir: str | Path = DEFAULT_DATA_DIR,
        output_dir: str | Path = ".",
        parallel: bool = False,
    ) -> "ComparisonConfig":
        """Coca-Cola (A) vs PepsiCo (B) with the standard file layout.

        Args:
            data_dir: Directory holding KO_/PEP_ price and dividend CSVs
            output_dir: Directory for the chart and summary files
            parallel: Load both securities concurrently

        Returns:
            ComparisonConfig instance
        """
        data_dir = Path(data_dir)
        output_dir = Path(output_dir)
        return cls(
            security_a=security_from_dir(data_dir, "KO", "Coca-Cola"),
            security_b=security_from_dir(data_dir, "PEP", "PepsiCo"),
            chart_path=output_dir / DEFAULT_CHART_FILE,
            summary_path=output_dir / DEFAULT_SUMMARY_FILE,
            parallel=parallel,
        )

    def log_summary(self) -> None:
        logger.info("Configuration loaded:")
        for security in (self.security_a, self.security_b):
            logger.info(f"  {security.label} prices: {security.price_path}")
            logger.info(
                f"  {security.label} dividends: {security.dividend_path}"
            )
        logger.info(
            f"  Chart: {self.chart_path} "
            f"({self.chart_width}x{self.chart_height})"
        )
        logger.info(f"  Summary: {self.summary_path}")
        logger.info(f"  Parallel load: {self.parallel}")
