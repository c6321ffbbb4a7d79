"""Price and dividend record value objects"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PriceRecord:
    """One trading day of OHLCV data.

    The date is kept as it appears in the source table; rows are never
    re-sorted, so sequence order defines "first" and "last".
    """

    date: str
    open: float
    high: float
    low: float
    close: float
    volume: int


@dataclass(frozen=True)
class DividendRecord:
    """One dividend payment per share"""

    date: str
    amount: float
