"""Chart input models"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ChartEntry:
    """One category of the grouped bar chart"""

    label: str
    value_a: float
    value_b: float


@dataclass(frozen=True)
class ChartSpec:
    """Labeled metric pairs plus titles for a single render call"""

    title: str
    entries: tuple[ChartEntry, ...]
    series_a_name: str
    series_b_name: str
    subtitle: str | None = None

    def __post_init__(self):
        if not self.entries:
            raise ValueError("ChartSpec requires at least one entry")

    @property
    def values(self) -> list[float]:
        return [v for e in self.entries for v in (e.value_a, e.value_b)]
