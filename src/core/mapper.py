"""
Mapping Layer: Transforms already-fetched raw data into domain shapes.

This module bridges the gap between loose inputs (lists of dicts, JSON-loaded
frames) and our internal representation (Polars DataFrames + Pydantic models).
Cell types are decided here once, so the formatters never guess per value.
"""

from collections.abc import Sequence
from typing import Any

import polars as pl
from loguru import logger

from src.core.domain_models import (
    PRICE_OBSERVATION_SCHEMA,
    Cell,
    FinancialRecord,
    NumericCell,
    PriceObservation,
    StatementSchema,
    TextCell,
)
from src.core.errors import PriceDataError


def map_observations_to_df(
    observations: Sequence[PriceObservation | dict[str, Any]],
) -> pl.DataFrame:
    """
    Validate price observations and collect them into a Polars DataFrame.

    Args:
        observations: Ordered observations (models or raw dicts)

    Returns:
        DataFrame matching PRICE_OBSERVATION_SCHEMA, input order preserved
    """
    if not observations:
        return pl.DataFrame(schema=PRICE_OBSERVATION_SCHEMA)

    rows = [
        (obs if isinstance(obs, PriceObservation) else PriceObservation(**obs)).model_dump()
        for obs in observations
    ]
    return pl.DataFrame(rows, schema=PRICE_OBSERVATION_SCHEMA)


def ensure_price_frame(df: pl.DataFrame) -> pl.DataFrame:
    """
    Cast a loosely typed price frame (e.g. from JSON) to the observation schema.

    Only columns that are present get cast; `close` is mandatory.
    Temporal `time` columns (e.g. from Parquet) are left as they are.

    Raises:
        PriceDataError: If the frame is non-empty and has no `close` column
    """
    if df.is_empty():
        return df
    if "close" not in df.columns:
        raise PriceDataError(f"Price data requires a 'close' column, got: {df.columns}")

    casts = [
        pl.col(col).cast(dtype)
        for col, dtype in PRICE_OBSERVATION_SCHEMA.items()
        if col in df.columns
        and df.schema[col] != dtype
        and not (col == "time" and df.schema[col].is_temporal())
    ]
    if casts:
        df = df.with_columns(casts)
    return df


def map_value_to_cell(value: Any) -> Cell | None:
    """
    Tag a raw scalar as numeric or text.

    Booleans are text. Strings stay text even when they look numeric.
    None means the cell is absent.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return TextCell(value=str(value))
    if isinstance(value, int | float):
        return NumericCell(value=float(value))
    return TextCell(value=str(value))


def map_records_to_domain(
    raw_records: Sequence[dict[str, Any]],
    schema: StatementSchema | None = None,
) -> list[FinancialRecord]:
    """
    Map raw statement records to FinancialRecord models.

    Args:
        raw_records: One dict per reporting period, in caller order
        schema: Declared allow/deny lists; defaults to StatementSchema()

    Returns:
        Records in input order. Records without report_period or period are skipped.
    """
    schema = schema or StatementSchema()
    line_items = schema.resolve_line_items(list(raw_records))

    records: list[FinancialRecord] = []
    for idx, raw in enumerate(raw_records):
        report_period = raw.get("report_period")
        period = raw.get("period")
        if report_period is None or period is None:
            logger.warning(f"Skipping record #{idx}: missing report_period or period")
            continue

        cells: dict[str, Cell] = {}
        for item in line_items:
            cell = map_value_to_cell(raw.get(item))
            if cell is not None:
                cells[item] = cell

        metadata = {k: v for k, v in raw.items() if k in schema.exclude_fields}
        records.append(
            FinancialRecord(
                report_period=str(report_period),
                period=str(period),
                cells=cells,
                metadata=metadata,
            )
        )

    logger.debug(f"Mapped {len(records)} records with {len(line_items)} line items")
    return records
