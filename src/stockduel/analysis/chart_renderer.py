"""
Grouped bar chart rendering.

Layout is computed in integer pixel coordinates (origin top-left) by
compute_layout(), then drawn with matplotlib on an axes that maps one data
unit to one pixel.
"""

from dataclasses import dataclass
from pathlib import Path

import matplotlib
from loguru import logger
from matplotlib.patches import FancyBboxPatch

from stockduel.domain.models import (
    ChartEntry,
    ChartSpec,
    ComparisonResult,
    Side,
)
from stockduel.shared.constants import (
    BAR_WIDTH_FRACTION,
    CHART_DPI,
    CHART_HEIGHT,
    CHART_WIDTH,
    GAP_FRACTION,
    GRIDLINE_COUNT,
    PLOT_MARGIN_BOTTOM,
    PLOT_MARGIN_LEFT,
    PLOT_MARGIN_RIGHT,
    PLOT_MARGIN_TOP,
    SCALE_HEADROOM,
)
from stockduel.shared.exceptions import OutputWriteFailure

matplotlib.use("Agg")  # Non-interactive backend, file output only
import matplotlib.pyplot as plt  # noqa: E402

VALUE_LABEL_OFFSET = 6
CATEGORY_LABEL_OFFSET = 18
TITLE_Y = 45
SUBTITLE_Y = 70
LEGEND_OFFSET_X = 120
LEGEND_OFFSET_BOTTOM = 55
LEGEND_SPACING = 170
SWATCH_WIDTH = 20
SWATCH_HEIGHT = 14

BACKGROUND_START = (20, 20, 40)
BACKGROUND_END = (40, 40, 70)
PLOT_BACKGROUND = (30, 30, 55)
GRIDLINE_COLOR = (60, 60, 90)
GRIDLINE_TEXT = (150, 150, 170)
CATEGORY_TEXT = (200, 200, 220)
SUBTITLE_TEXT = (180, 180, 200)
BORDER_COLOR = (80, 80, 120)

SERIES_COLORS = {
    Side.A: {
        "fill": (220, 40, 40),
        "edge": (180, 30, 30),
        "text": (255, 180, 180),
    },
    Side.B: {
        "fill": (40, 100, 220),
        "edge": (30, 80, 180),
        "text": (180, 200, 255),
    },
}


def format_value(value: float) -> str:
    """Format a bar value: 1.5M, 2.5K, 42 or 3.14."""
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"{value / 1_000:.1f}K"
    if float(value).is_integer():
        return f"{value:.0f}"
    return f"{value:.2f}"


def format_gridline_value(value: float) -> str:
    return f"{value:.1f}"


def compute_scale_max(spec: ChartSpec) -> float:
    """Largest value plus headroom; 1.0 when nothing positive is plotted."""
    scale = max(spec.values) * SCALE_HEADROOM
    if not scale > 0:
        return 1.0
    return scale


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height


@dataclass(frozen=True)
class Gridline:
    y: int
    value: float
    label: str


@dataclass(frozen=True)
class Bar:
    side: Side
    value: float
    label: str
    rect: Rect
    label_y: int

    @property
    def center_x(self) -> float:
        return self.rect.x + self.rect.width / 2


@dataclass(frozen=True)
class BarGroup:
    label: str
    x: int
    width: int
    label_y: int
    bars: tuple[Bar, Bar]

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2


@dataclass(frozen=True)
class LegendItem:
    side: Side
    name: str
    swatch: Rect
    label_x: int
    label_y: int


@dataclass(frozen=True)
class ChartLayout:
    """Pixel geometry for every element of a chart"""

    width: int
    height: int
    plot: Rect
    scale_max: float
    group_width: int
    bar_width: int
    gap: int
    gridlines: tuple[Gridline, ...]
    groups: tuple[BarGroup, ...]
    legend: tuple[LegendItem, LegendItem]


def _bar(
    side: Side,
    value: float,
    x: int,
    bar_width: int,
    plot: Rect,
    scale_max: float,
) -> Bar:
    # Negative values get no visible bar but keep their label
    height = max(0, int(plot.height * (value / scale_max)))
    top = plot.bottom - height
    return Bar(
        side=side,
        value=value,
        label=format_value(value),
        rect=Rect(x, top, bar_width, height),
        label_y=top - VALUE_LABEL_OFFSET,
    )


def compute_layout(
    spec: ChartSpec, width: int = CHART_WIDTH, height: int = CHART_HEIGHT
) -> ChartLayout:
    """Map a chart spec onto pixel geometry.

    Args:
        spec: Categories and values to plot
        width: Canvas width in pixels
        height: Canvas height in pixels

    Returns:
        ChartLayout with plot region, gridlines, bar groups and legend

    Raises:
        ValueError: If the canvas leaves no room for the plot region
    """
    plot = Rect(
        PLOT_MARGIN_LEFT,
        PLOT_MARGIN_TOP,
        width - PLOT_MARGIN_RIGHT - PLOT_MARGIN_LEFT,
        height - PLOT_MARGIN_BOTTOM - PLOT_MARGIN_TOP,
    )
    if plot.width <= 0 or plot.height <= 0:
        raise ValueError(f"Canvas {width}x{height} is too small for a chart")

    scale_max = compute_scale_max(spec)

    gridlines = []
    for i in range(GRIDLINE_COUNT + 1):
        value = scale_max * i / GRIDLINE_COUNT
        gridlines.append(
            Gridline(
                y=plot.bottom - int(plot.height * i / GRIDLINE_COUNT),
                value=value,
                label=format_gridline_value(value),
            )
        )

    group_width = plot.width // len(spec.entries)
    bar_width = int(group_width * BAR_WIDTH_FRACTION)
    gap = int(group_width * GAP_FRACTION)
    group_span = 2 * bar_width + gap

    groups = []
    for i, entry in enumerate(spec.entries):
        x = plot.x + i * group_width + (group_width - group_span) // 2
        groups.append(
            BarGroup(
                label=entry.label,
                x=x,
                width=group_span,
                label_y=plot.bottom + CATEGORY_LABEL_OFFSET,
                bars=(
                    _bar(Side.A, entry.value_a, x, bar_width, plot, scale_max),
                    _bar(
                        Side.B,
                        entry.value_b,
                        x + bar_width + gap,
                        bar_width,
                        plot,
                        scale_max,
                    ),
                ),
            )
        )

    legend_x = width // 2 - LEGEND_OFFSET_X
    legend_y = height - LEGEND_OFFSET_BOTTOM
    legend = tuple(
        LegendItem(
            side=side,
            name=name,
            swatch=Rect(
                legend_x + offset, legend_y, SWATCH_WIDTH, SWATCH_HEIGHT
            ),
            label_x=legend_x + offset + SWATCH_WIDTH + 6,
            label_y=legend_y + 12,
        )
        for side, name, offset in (
            (Side.A, spec.series_a_name, 0),
            (Side.B, spec.series_b_name, LEGEND_SPACING),
        )
    )

    return ChartLayout(
        width=width,
        height=height,
        plot=plot,
        scale_max=scale_max,
        group_width=group_width,
        bar_width=bar_width,
        gap=gap,
        gridlines=tuple(gridlines),
        groups=tuple(groups),
        legend=legend,
    )


def _rgb(color: tuple[int, int, int]) -> tuple[float, float, float]:
    return tuple(c / 255 for c in color)


def _pt(pixels: float) -> float:
    """Font size in points for a glyph height in pixels."""
    return pixels * 72 / CHART_DPI


def _draw(spec: ChartSpec, layout: ChartLayout):
    fig = plt.figure(
        figsize=(layout.width / CHART_DPI, layout.height / CHART_DPI),
        dpi=CHART_DPI,
    )
    ax = fig.add_axes((0, 0, 1, 1))
    ax.set_xlim(0, layout.width)
    ax.set_ylim(layout.height, 0)
    ax.axis("off")

    start, end = _rgb(BACKGROUND_START), _rgb(BACKGROUND_END)
    mid = tuple((s + e) / 2 for s, e in zip(start, end))
    ax.imshow(
        [[start, mid], [mid, end]],
        extent=(0, layout.width, layout.height, 0),
        interpolation="bilinear",
        aspect="auto",
        zorder=0,
    )

    ax.text(
        layout.width / 2, TITLE_Y, spec.title,
        color="white", fontsize=_pt(28), fontweight="bold",
        ha="center", va="baseline",
    )
    if spec.subtitle:
        ax.text(
            layout.width / 2, SUBTITLE_Y, spec.subtitle,
            color=_rgb(SUBTITLE_TEXT), fontsize=_pt(14),
            ha="center", va="baseline",
        )

    plot = layout.plot
    ax.add_patch(
        FancyBboxPatch(
            (plot.x - 10, plot.y - 10), plot.width + 20, plot.height + 20,
            boxstyle="round,pad=0,rounding_size=7",
            facecolor=_rgb(PLOT_BACKGROUND), edgecolor="none", zorder=1,
        )
    )

    for line in layout.gridlines:
        ax.plot(
            [plot.x, plot.right], [line.y, line.y],
            color=_rgb(GRIDLINE_COLOR), linewidth=1, zorder=2,
        )
        ax.text(
            plot.x - 8, line.y + 4, line.label,
            color=_rgb(GRIDLINE_TEXT), fontsize=_pt(11),
            ha="right", va="baseline", zorder=2,
        )

    for group in layout.groups:
        for bar in group.bars:
            colors = SERIES_COLORS[bar.side]
            if bar.rect.height > 0:
                ax.add_patch(
                    FancyBboxPatch(
                        (bar.rect.x, bar.rect.y), bar.rect.width, bar.rect.height,
                        boxstyle="round,pad=0,rounding_size=3",
                        facecolor=_rgb(colors["fill"]),
                        edgecolor=_rgb(colors["edge"]),
                        linewidth=1, zorder=3,
                    )
                )
            ax.text(
                bar.center_x, bar.label_y, bar.label,
                color=_rgb(colors["text"]), fontsize=_pt(12), fontweight="bold",
                ha="center", va="baseline", zorder=4,
            )
        ax.text(
            group.center_x, group.label_y, group.label,
            color=_rgb(CATEGORY_TEXT), fontsize=_pt(11),
            ha="center", va="baseline", zorder=4,
        )

    for item in layout.legend:
        swatch = item.swatch
        ax.add_patch(
            FancyBboxPatch(
                (swatch.x, swatch.y), swatch.width, swatch.height,
                boxstyle="round,pad=0,rounding_size=2",
                facecolor=_rgb(SERIES_COLORS[item.side]["fill"]),
                edgecolor="none", zorder=3,
            )
        )
        ax.text(
            item.label_x, item.label_y, item.name,
            color="white", fontsize=_pt(13), fontweight="bold",
            ha="left", va="baseline", zorder=4,
        )

    ax.add_patch(
        FancyBboxPatch(
            (2, 2), layout.width - 4, layout.height - 4,
            boxstyle="round,pad=0,rounding_size=10",
            facecolor="none", edgecolor=_rgb(BORDER_COLOR),
            linewidth=2, zorder=5,
        )
    )
    return fig


def render_chart(
    spec: ChartSpec,
    output_path: str | Path,
    width: int = CHART_WIDTH,
    height: int = CHART_HEIGHT,
) -> Path:
    """Render a grouped bar chart to an RGBA PNG file.

    Args:
        spec: Categories and values to plot
        output_path: Destination file
        width: Canvas width in pixels
        height: Canvas height in pixels

    Returns:
        Path of the written image

    Raises:
        OutputWriteFailure: If the image cannot be written
    """
    output_path = Path(output_path)
    layout = compute_layout(spec, width, height)
    fig = _draw(spec, layout)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output_path, format="png", dpi=CHART_DPI)
    except OSError as e:
        raise OutputWriteFailure(output_path, e) from e
    finally:
        plt.close(fig)

    logger.info(f"Chart written to {output_path} ({width}x{height})")
    return output_path


def build_chart_spec(
    result: ComparisonResult, title: str, subtitle: str | None = None
) -> ChartSpec:
    """Project a comparison onto the five charted metrics."""
    a = result.security_a.metrics
    b = result.security_b.metrics
    return ChartSpec(
        title=title,
        subtitle=subtitle,
        series_a_name=result.security_a.security.label,
        series_b_name=result.security_b.security.label,
        entries=(
            ChartEntry("Avg Close ($)", a.average_close, b.average_close),
            ChartEntry(
                "Return (%)", a.total_return_percent, b.total_return_percent
            ),
            ChartEntry(
                "Volume (K)", a.average_volume / 1000, b.average_volume / 1000
            ),
            ChartEntry("Volatility ($)", a.volatility, b.volatility),
            ChartEntry("Dividends ($)", a.total_dividends, b.total_dividends),
        ),
    )
