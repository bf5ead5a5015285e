"""Statement table formatting.

Derives displayable line items from period-keyed financial records and
formats values, labels and period tags for a wide statement table.
"""

import math
from collections.abc import Callable, Iterable, Sequence
from typing import Any

import polars as pl
from dateutil import parser as date_parser
from loguru import logger

from src.core.domain_models import (
    DEFAULT_EXCLUDE_FIELDS,
    FinancialRecord,
    NumericCell,
    StatementSchema,
    StatementTable,
    TextCell,
)

LINE_ITEMS_COLUMN = "Line Items"

PERIOD_TAGS = {
    "ttm": "TTM",
    "quarterly": "Quarterly",
    "annual": "Annual",
}


def select_line_items(
    records: Sequence[dict[str, Any]],
    exclude_fields: Iterable[str] = DEFAULT_EXCLUDE_FIELDS,
) -> list[str]:
    """Keys of the first record, in order, minus the excluded fields.

    The key set of the first record is taken as representative for all records.
    """
    if not records:
        logger.warning("No records, no line items to select")
        return []
    excluded = set(exclude_fields)
    return [key for key in records[0] if key not in excluded]


def format_scalar(value: Any) -> str:
    """Format a cell value, abbreviating millions and billions.

    Non-numeric values (including booleans) pass through unchanged.
    An absent value (None) or a non-finite number (nan, inf) renders as an
    empty string.
    """
    if isinstance(value, TextCell):
        return value.value
    if isinstance(value, NumericCell):
        value = value.value

    if value is None:
        return ""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return value if isinstance(value, str) else str(value)

    if not math.isfinite(value):
        return ""
    if abs(value) >= 1e9:
        return f"{value / 1e9:.2f}B"
    if abs(value) >= 1e6:
        return f"{value / 1e6:.2f}M"
    return f"{value:.2f}"


def format_label(field_name: str) -> str:
    """snake_case field name to a display label ('net_income' -> 'Net Income')."""
    return " ".join(word[:1].upper() + word[1:] for word in field_name.split("_"))


def format_period_tag(period: str) -> str:
    return PERIOD_TAGS.get(period, period)


def format_header_title(period: str, title: str | None = None) -> str:
    """Table header: '<title> (<period tag>)' or just the period tag."""
    tag = format_period_tag(period)
    return f"{title} ({tag})" if title else tag


def format_report_period(report_period: str) -> str:
    """Column label for a report date ('2023-12-31' -> 'Dec 31, 2023').

    Values that are not ISO dates pass through unchanged.
    """
    try:
        dt = date_parser.isoparse(report_period)
    except (ValueError, TypeError):
        return report_period
    return f"{dt:%b} {dt.day}, {dt.year}"


def _unique_labels(labels: list[str]) -> list[str]:
    # Polars needs unique column names
    counts: dict[str, int] = {}
    unique = []
    for label in labels:
        counts[label] = counts.get(label, 0) + 1
        unique.append(label if counts[label] == 1 else f"{label} ({counts[label]})")
    return unique


class TabularValueFormatter:
    """Builds wide statement tables from period-keyed records.

    Two entry points:
    - `build_table` takes raw dicts and uses the first record's keys.
    - `build_table_from_records` takes mapped FinancialRecord models and
      resolves line items through the declared StatementSchema.
    """

    def __init__(self, schema: StatementSchema | None = None) -> None:
        self.schema = schema or StatementSchema()

    def _assemble(
        self,
        line_items: list[str],
        header_title: str,
        report_periods: list[str],
        cell_values: Callable[[str], list[str]],
    ) -> StatementTable:
        column_labels = _unique_labels([format_report_period(p) for p in report_periods])

        data: dict[str, list[str]] = {LINE_ITEMS_COLUMN: [format_label(i) for i in line_items]}
        values_by_item = [cell_values(item) for item in line_items]
        for col_idx, label in enumerate(column_labels):
            data[label] = [values[col_idx] for values in values_by_item]

        frame = pl.DataFrame(data, schema={col: pl.Utf8 for col in data})
        return StatementTable(
            header_title=header_title,
            line_items=line_items,
            column_labels=column_labels,
            frame=frame,
        )

    def build_table(
        self,
        records: Sequence[dict[str, Any]],
        exclude_fields: Iterable[str] | None = None,
        title: str | None = None,
    ) -> StatementTable | None:
        """Format raw records into a wide table.

        Args:
            records: One dict per reporting period, in display order
            exclude_fields: Fields that are not line items (defaults to the schema denylist)
            title: Optional statement title for the header

        Returns:
            StatementTable, or None for empty input
        """
        if not records:
            logger.warning("No financial records to format")
            return None

        excluded = self.schema.exclude_fields if exclude_fields is None else exclude_fields
        line_items = select_line_items(records, excluded)
        header_title = format_header_title(str(records[0].get("period", "")), title)

        table = self._assemble(
            line_items,
            header_title,
            [str(r.get("report_period", "")) for r in records],
            lambda item: [format_scalar(r.get(item)) for r in records],
        )
        logger.debug(
            f"Formatted '{header_title}': {len(line_items)} line items x {len(records)} periods"
        )
        return table

    def build_table_from_records(
        self,
        records: Sequence[FinancialRecord],
        title: str | None = None,
    ) -> StatementTable | None:
        """Format mapped records; line items follow the declared schema."""
        if not records:
            logger.warning("No financial records to format")
            return None

        line_items = self.schema.resolve_line_items([r.cells for r in records])
        header_title = format_header_title(records[0].period, title)

        return self._assemble(
            line_items,
            header_title,
            [r.report_period for r in records],
            lambda item: [format_scalar(r.cells.get(item)) for r in records],
        )
