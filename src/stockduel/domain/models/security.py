"""Security identity and input locations"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SecurityConfig:
    """Where to find one security's price and dividend tables"""

    symbol: str
    name: str
    price_path: Path
    dividend_path: Path

    @property
    def label(self) -> str:
        """Display label, e.g. "Coca-Cola (KO)"."""
        return f"{self.name} ({self.symbol})"
