"""Read-only loading of exported price and statement files.

Price series are read into Polars DataFrames (JSON or Parquet).
Statement records stay plain dicts, since their columns are heterogeneous.
"""

import json
from io import BytesIO
from pathlib import Path
from typing import Any

import polars as pl
from loguru import logger

from src.core.mapper import ensure_price_frame

PRICE_FILE_SUFFIXES = {".json", ".parquet"}


def read_price_file(path: Path) -> pl.DataFrame:
    """Read a price series file into a DataFrame in observation order.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the suffix is not .json or .parquet
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"No price file found: {path}")
    if path.suffix not in PRICE_FILE_SUFFIXES:
        raise ValueError(
            f"Unsupported price file type '{path.suffix}', "
            f"expected one of {sorted(PRICE_FILE_SUFFIXES)}"
        )

    logger.debug(f"Reading {path}")
    if path.suffix == ".parquet":
        data = pl.read_parquet(path)
    else:
        data = pl.read_json(path)
    logger.info(f"Read {len(data)} price observations from {path.name}")

    return ensure_price_frame(data)


def read_price_bytes(content: bytes) -> pl.DataFrame:
    """Read an uploaded JSON price series."""
    return ensure_price_frame(pl.read_json(BytesIO(content)))


def parse_records(content: str | bytes) -> list[dict[str, Any]]:
    """Parse a JSON array of statement records, keeping key order.

    Raises:
        ValueError: If the payload is not a JSON array of objects
    """
    raw = json.loads(content)
    if not isinstance(raw, list) or not all(isinstance(r, dict) for r in raw):
        raise ValueError("Statement data must be a JSON array of objects")
    return raw


def read_records_file(path: Path) -> list[dict[str, Any]]:
    """Read a statement records file (JSON array of objects)."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"No records file found: {path}")

    records = parse_records(path.read_text(encoding="utf-8"))
    logger.info(f"Read {len(records)} statement records from {path.name}")
    return records
