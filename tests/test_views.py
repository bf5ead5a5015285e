"""Tests for the Plotly price figure built from a chart context."""

import pytest

from src.app.logic.stock_chart import StockChartContext, StockChartLogic
from src.app.views.colors import Colors, direction_color
from src.app.views.stock_chart import build_price_figure
from src.config.settings import ChartSettings


def test_price_figure_uses_axis_domain(rising_prices) -> None:
    context = StockChartLogic().get_context("AAPL", rising_prices)
    fig = build_price_figure(context, height=320)

    assert len(fig.data) == 1
    assert list(fig.data[0].y) == [100.0, 95.0, 120.0, 110.0]
    assert fig.data[0].x[0] == "Jan 5, 2024, 9:30 AM"
    assert fig.data[0].line.color == Colors.green
    assert list(fig.layout.yaxis.range) == pytest.approx([99.9, 110.1])
    assert fig.layout.height == 320


def test_price_figure_reference_line_at_start(price_factory) -> None:
    context = StockChartLogic().get_context("AAPL", price_factory([50.0, 40.0]))
    fig = build_price_figure(context)

    assert fig.data[0].line.color == Colors.pink
    assert len(fig.layout.shapes) == 1
    assert fig.layout.shapes[0].y0 == 50.0
    assert fig.layout.shapes[0].line.dash == "dot"


def test_price_figure_hover_uses_currency_symbol(price_factory) -> None:
    logic = StockChartLogic(ChartSettings(currency_symbol="€"))
    fig = build_price_figure(logic.get_context("SAP.DE", price_factory([120.0, 125.0])))

    assert fig.data[0].hovertemplate.startswith("<b>€%{y}</b>")
    assert "$" not in fig.data[0].hovertemplate


def test_price_figure_empty_context() -> None:
    fig = build_price_figure(StockChartContext(ticker="AAPL"))
    assert len(fig.data) == 0


def test_direction_color() -> None:
    assert direction_color("up") == Colors.green
    assert direction_color("down") == Colors.pink
    assert direction_color("flat") == Colors.pink
    assert direction_color(None) == Colors.pink
