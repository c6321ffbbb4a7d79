"""Shared constants and exceptions for loading, analysis and reporting."""

from .constants import (
    BAR_WIDTH_FRACTION,
    CHART_HEIGHT,
    CHART_WIDTH,
    GAP_FRACTION,
    GRIDLINE_COUNT,
    SCALE_HEADROOM,
)

__all__ = [
    "CHART_WIDTH",
    "CHART_HEIGHT",
    "SCALE_HEADROOM",
    "GRIDLINE_COUNT",
    "BAR_WIDTH_FRACTION",
    "GAP_FRACTION",
]
