"""Tests for chart and table context assembly."""

import polars as pl
import pytest
from loguru import logger

import src.analysis.price_series as price_series
from src.app.logic.financials import FinancialsTableLogic
from src.app.logic.stock_chart import StockChartLogic
from src.config.settings import ChartSettings, TableSettings
from src.core.domain_models import Direction


def test_chart_context(rising_prices) -> None:
    context = StockChartLogic().get_context("AAPL", rising_prices)
    assert not context.is_empty
    assert len(context.points) == 4
    assert context.reference_value == 100.0
    assert context.domain is not None
    assert context.domain.max == pytest.approx(110.1)
    assert context.change is not None
    assert context.change.direction == Direction.UP
    assert context.header is not None
    assert context.header.last_price_label == "$110.00"


def test_chart_context_empty(empty_prices) -> None:
    context = StockChartLogic().get_context("AAPL", empty_prices)
    assert context.is_empty
    assert context.domain is None
    assert context.change is None
    assert context.header is None
    assert context.reference_value is None


def test_chart_context_zero_start(price_factory) -> None:
    context = StockChartLogic().get_context("NEW", price_factory([0.0, 2.0]))
    assert context.change is None
    assert context.domain is not None
    assert context.header is not None
    assert context.header.percent_label is None


def test_chart_context_zero_start_warns_once(price_factory) -> None:
    messages: list[str] = []
    handler_id = logger.add(messages.append, level="WARNING", format="{message}")
    try:
        StockChartLogic().get_context("NEW", price_factory([0.0, 2.0]))
    finally:
        logger.remove(handler_id)
    assert sum("Percent change undefined" in m for m in messages) == 1


def test_chart_context_validates_observations_once(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []
    original = price_series.map_observations_to_df

    def counting(observations):
        calls.append(len(observations))
        return original(observations)

    monkeypatch.setattr(price_series, "map_observations_to_df", counting)
    rows = [
        {"time": "2024-01-05T14:30:00Z", "open": 1, "high": 1, "low": 1, "close": close}
        for close in (100, 110)
    ]
    context = StockChartLogic().get_context("AAPL", rows)

    assert calls == [2]
    assert context.header is not None
    assert context.header.change_label == "+$10.00"


def test_chart_context_uses_settings(price_factory) -> None:
    settings = ChartSettings(display_timezone="UTC", currency_symbol="£")
    context = StockChartLogic(settings).get_context("VOD.L", price_factory([70.0, 72.0]))
    assert context.points[0].date_label == "Jan 5, 2024, 2:30 PM"
    assert context.header is not None
    assert context.header.last_price_label == "£72.00"
    assert context.currency_symbol == "£"


def test_table_context(annual_records) -> None:
    context = FinancialsTableLogic().get_context(annual_records, title="Income Statement")
    assert context is not None
    assert context.header_title == "Income Statement (Annual)"
    assert context.retrieved_label == "Retrieved: Income Statement (Annual)"
    assert context.table.frame.height == 5


def test_table_context_explicit_exclusions(annual_records) -> None:
    context = FinancialsTableLogic().get_context(annual_records, exclude_fields=[])
    assert context is not None
    assert context.table.line_items[:2] == ["ticker", "calendar_date"]
    assert context.table.frame.row(0)[1:] == ("AAPL", "AAPL")


def test_table_context_empty() -> None:
    assert FinancialsTableLogic().get_context([]) is None
    assert FinancialsTableLogic().get_schema_context([]) is None


def test_schema_context_uses_configured_allowlist(annual_records) -> None:
    settings = TableSettings(include_fields=["net_income", "revenue"])
    context = FinancialsTableLogic(settings).get_schema_context(annual_records)
    assert context is not None
    assert context.table.line_items == ["net_income", "revenue"]
    assert context.table.frame.schema == pl.Schema(
        {"Line Items": pl.Utf8, "Dec 31, 2023": pl.Utf8, "Dec 31, 2022": pl.Utf8}
    )
