"""Logic layer for the financial statements table."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from loguru import logger

from src.analysis.statement_formatter import TabularValueFormatter
from src.config.settings import TableSettings
from src.core.domain_models import StatementTable
from src.core.mapper import map_records_to_domain


@dataclass
class FinancialsTableContext:
    header_title: str
    table: StatementTable

    @property
    def retrieved_label(self) -> str:
        """Collapsed header text, e.g. 'Retrieved: Income Statement (Annual)'."""
        return f"Retrieved: {self.header_title}"


class FinancialsTableLogic:
    def __init__(self, table_settings: TableSettings | None = None):
        self.table_settings = table_settings or TableSettings()
        self.formatter = TabularValueFormatter(self.table_settings.statement_schema)

    def get_context(
        self,
        records: Sequence[dict[str, Any]],
        title: str | None = None,
        exclude_fields: Iterable[str] | None = None,
    ) -> FinancialsTableContext | None:
        """Format records as given, first record defines the line items."""
        table = self.formatter.build_table(records, exclude_fields=exclude_fields, title=title)
        if table is None:
            return None
        return FinancialsTableContext(header_title=table.header_title, table=table)

    def get_schema_context(
        self,
        records: Sequence[dict[str, Any]],
        title: str | None = None,
    ) -> FinancialsTableContext | None:
        """Map records through the configured schema before formatting.

        Handles records whose key sets differ between periods.
        """
        mapped = map_records_to_domain(records, self.formatter.schema)
        if len(mapped) < len(records):
            logger.warning(f"Dropped {len(records) - len(mapped)} incomplete records")
        table = self.formatter.build_table_from_records(mapped, title=title)
        if table is None:
            return None
        return FinancialsTableContext(header_title=table.header_title, table=table)
