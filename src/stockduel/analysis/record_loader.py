"""Read price and dividend tables into ordered record sequences.

Expected formats (header row first, comma-separated):
    date,open,high,low,close,volume
    date,amount

Rows with too few fields are skipped. Rows are returned in file order,
never re-sorted.
"""

import math
from collections.abc import Callable, Iterator, Sequence
from pathlib import Path
from typing import TypeVar

import polars as pl
from loguru import logger

from stockduel.domain.models import DividendRecord, PriceRecord
from stockduel.shared.exceptions import MalformedRecord, ResourceUnavailable

PRICE_FIELDS = 6
DIVIDEND_FIELDS = 2

RecordT = TypeVar("RecordT")


def _iter_rows(path: Path) -> Iterator[tuple[int, list[str]]]:
    """Yield (line_number, fields) for every data row after the header.

    Raises:
        ResourceUnavailable: If the file cannot be opened
        MalformedRecord: If a line is not valid UTF-8
    """
    try:
        f = open(path, "rb")
    except OSError as e:
        raise ResourceUnavailable(path, e) from e

    with f:
        for line_number, raw in enumerate(f, start=1):
            # Decoded per line so errors carry the right line number
            try:
                line = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                raise MalformedRecord(path, line_number, "invalid UTF-8") from e
            # Line 1 is the header
            if line_number == 1:
                continue
            parts = [p.strip() for p in line.rstrip("\r\n").split(",")]
            # Trailing empty fields do not count towards the row width
            while parts and not parts[-1]:
                parts.pop()
            yield line_number, parts


def _parse_float(path: Path, line_number: int, name: str, text: str) -> float:
    try:
        value = float(text)
    except ValueError as e:
        raise MalformedRecord(
            path, line_number, f"invalid {name} value {text!r}"
        ) from e
    # float() accepts nan and inf
    if not math.isfinite(value):
        raise MalformedRecord(path, line_number, f"invalid {name} value {text!r}")
    return value


def _parse_volume(path: Path, line_number: int, text: str) -> int:
    try:
        volume = int(text)
    except ValueError as e:
        raise MalformedRecord(
            path, line_number, f"invalid volume value {text!r}"
        ) from e
    if volume < 0:
        raise MalformedRecord(
            path, line_number, f"volume must be non-negative, got {volume}"
        )
    return volume


def _load(
    path: str | Path,
    min_fields: int,
    parse: Callable[[Path, int, list[str]], RecordT],
    kind: str,
) -> list[RecordT]:
    path = Path(path)
    records = []
    skipped = 0

    for line_number, parts in _iter_rows(path):
        if len(parts) < min_fields:
            skipped += 1
            logger.debug(
                f"Skipping short row in {path.name}:{line_number} "
                f"({len(parts)} fields)"
            )
            continue
        records.append(parse(path, line_number, parts))

    logger.info(
        f"Loaded {len(records)} {kind} records from {path}"
        + (f" ({skipped} short rows skipped)" if skipped else "")
    )
    return records


def _parse_price(path: Path, line_number: int, parts: list[str]) -> PriceRecord:
    return PriceRecord(
        date=parts[0],
        open=_parse_float(path, line_number, "open", parts[1]),
        high=_parse_float(path, line_number, "high", parts[2]),
        low=_parse_float(path, line_number, "low", parts[3]),
        close=_parse_float(path, line_number, "close", parts[4]),
        volume=_parse_volume(path, line_number, parts[5]),
    )


def _parse_dividend(
    path: Path, line_number: int, parts: list[str]
) -> DividendRecord:
    amount = _parse_float(path, line_number, "dividend", parts[1])
    if amount < 0:
        raise MalformedRecord(
            path, line_number, f"dividend must be non-negative, got {amount}"
        )
    return DividendRecord(date=parts[0], amount=amount)


def load_price_records(path: str | Path) -> list[PriceRecord]:
    """Load a daily price table.

    Args:
        path: CSV file with columns date,open,high,low,close,volume

    Returns:
        Price records in file order

    Raises:
        ResourceUnavailable: If the file cannot be opened
        MalformedRecord: If a numeric field cannot be parsed
    """
    return _load(path, PRICE_FIELDS, _parse_price, "price")


def load_dividend_records(path: str | Path) -> list[DividendRecord]:
    """Load a dividend table.

    Args:
        path: CSV file with columns date,amount

    Returns:
        Dividend records in file order (possibly empty)

    Raises:
        ResourceUnavailable: If the file cannot be opened
        MalformedRecord: If an amount cannot be parsed or is negative
    """
    return _load(path, DIVIDEND_FIELDS, _parse_dividend, "dividend")


def prices_to_frame(records: Sequence[PriceRecord]) -> pl.DataFrame:
    """Columnar view of price records, preserving order."""
    return pl.DataFrame(
        {
            "date": [r.date for r in records],
            "open": [r.open for r in records],
            "high": [r.high for r in records],
            "low": [r.low for r in records],
            "close": [r.close for r in records],
            "volume": [r.volume for r in records],
        },
        schema={
            "date": pl.Utf8,
            "open": pl.Float64,
            "high": pl.Float64,
            "low": pl.Float64,
            "close": pl.Float64,
            "volume": pl.Int64,
        },
    )
