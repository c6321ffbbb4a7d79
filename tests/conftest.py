"""Pytest fixtures for stockduel tests"""

from pathlib import Path

import pytest

from stockduel.core.config import ComparisonConfig

from factories import write_dividend_csv, write_price_csv

# =============================================================================
# Input tables
# =============================================================================

KO_CLOSES = [50.0, 55.0, 60.0]
PEP_CLOSES = [100.0, 90.0, 95.0]


@pytest.fixture
def data_dir(tmp_path) -> Path:
    """Directory with KO and PEP price and dividend tables"""
    directory = tmp_path / "data"
    directory.mkdir()
    write_price_csv(
        directory / "KO_stock_price.csv",
        KO_CLOSES,
        volumes=[1_000_000, 1_200_000, 1_100_000],
    )
    write_price_csv(
        directory / "PEP_stock_price.csv",
        PEP_CLOSES,
        volumes=[500_000, 600_000, 700_000],
    )
    write_dividend_csv(directory / "KO_stock_dividend.csv", [0.41, 0.42])
    write_dividend_csv(
        directory / "PEP_stock_dividend.csv", [1.02, 1.075, 1.075]
    )
    return directory


@pytest.fixture
def output_dir(tmp_path) -> Path:
    """Destination for chart and summary files (not created up front)"""
    return tmp_path / "out"


@pytest.fixture
def config(data_dir, output_dir) -> ComparisonConfig:
    """Default KO vs PEP configuration over the fixture tables"""
    return ComparisonConfig.defaults(data_dir=data_dir, output_dir=output_dir)
