"""Shared constants for chart layout and report defaults."""

CHART_WIDTH = 1200
CHART_HEIGHT = 750
CHART_DPI = 100

# Plot region margins (pixels from each canvas edge)
PLOT_MARGIN_LEFT = 80
PLOT_MARGIN_RIGHT = 40
PLOT_MARGIN_TOP = 100
PLOT_MARGIN_BOTTOM = 120

SCALE_HEADROOM = 1.15
GRIDLINE_COUNT = 5
BAR_WIDTH_FRACTION = 0.30
GAP_FRACTION = 0.08

