from enum import Enum
from typing import Annotated, Any, Literal

import polars as pl
from pydantic import BaseModel, ConfigDict, Field

# --- Constants & Schemas ---

# Polars Schema for price observations handed over by the data-fetch side.
# Bulk series stay in Polars; the Pydantic model below is for single-record validation.
PRICE_OBSERVATION_SCHEMA = {
    "time": pl.Utf8,
    "open": pl.Float64,
    "high": pl.Float64,
    "low": pl.Float64,
    "close": pl.Float64,
    "volume": pl.Float64,
}

DEFAULT_EXCLUDE_FIELDS: tuple[str, ...] = (
    "ticker",
    "calendar_date",
    "report_period",
    "period",
    "currency",
)


# --- Enums ---


class Direction(str, Enum):
    """Sign of the change between first and last close."""

    UP = "up"
    DOWN = "down"
    FLAT = "flat"


class ReportPeriod(str, Enum):
    """Known reporting cadences. Other cadences are kept as plain strings."""

    TTM = "ttm"
    QUARTERLY = "quarterly"
    ANNUAL = "annual"


# --- Price Models ---


class PriceObservation(BaseModel):
    """
    One OHLCV record at a point in time.

    Note: For whole series prefer a Polars DataFrame with
    `PRICE_OBSERVATION_SCHEMA`; this model is used for validating single rows.
    """

    model_config = ConfigDict(frozen=True)

    time: str
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0


class ChartPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    date_label: str
    value: float


class AxisDomain(BaseModel):
    """Padded value-axis bounds around the start/end closing prices."""

    model_config = ConfigDict(frozen=True)

    min: float
    max: float


class PriceChange(BaseModel):
    model_config = ConfigDict(frozen=True)

    absolute: float
    percent: float
    direction: Direction


class PriceHeader(BaseModel):
    """Display strings for the chart header (ticker, latest close, change)."""

    model_config = ConfigDict(frozen=True)

    ticker: str
    last_price_label: str
    change_label: str | None = None
    percent_label: str | None = None
    direction: Direction | None = None


# --- Statement Models ---


class NumericCell(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["numeric"] = "numeric"
    value: float


class TextCell(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    value: str


Cell = Annotated[NumericCell | TextCell, Field(discriminator="kind")]


class FinancialRecord(BaseModel):
    """
    One reporting period of a financial statement.

    Design Choice:
    - Line item values are tagged cells, decided once at the mapping boundary.
    - Metadata fields (ticker, currency, ...) are kept apart from line items.
    """

    model_config = ConfigDict(frozen=True)

    report_period: str
    period: str
    cells: dict[str, Cell] = Field(default_factory=dict)
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def period_type(self) -> ReportPeriod | None:
        """Known cadence for this record, None for unrecognized cadences."""
        try:
            return ReportPeriod(self.period)
        except ValueError:
            return None


class StatementSchema(BaseModel):
    """Declared field allowlist/denylist for a statement table."""

    model_config = ConfigDict(frozen=True)

    include_fields: tuple[str, ...] | None = Field(
        default=None, description="Explicit line item order; None means all non-excluded keys"
    )
    exclude_fields: tuple[str, ...] = Field(default=DEFAULT_EXCLUDE_FIELDS)

    def is_line_item(self, field_name: str) -> bool:
        if field_name in self.exclude_fields:
            return False
        if self.include_fields is not None:
            return field_name in self.include_fields
        return True

    def resolve_line_items(self, records: list[dict[str, Any]]) -> list[str]:
        """Resolve line items across all records.

        With an allowlist, its order wins. Otherwise the union of keys is used
        in first-seen order, so records with differing key sets still line up.
        """
        if self.include_fields is not None:
            return [f for f in self.include_fields if f not in self.exclude_fields]

        seen: dict[str, None] = {}
        for record in records:
            for key in record:
                if self.is_line_item(key):
                    seen.setdefault(key, None)
        return list(seen)


class StatementTable(BaseModel):
    """Wide table ready for rendering: one row per line item, one column per period."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    header_title: str
    line_items: list[str]
    column_labels: list[str]
    frame: pl.DataFrame
