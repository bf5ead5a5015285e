"""Ticker Lens Dashboard - Main Entry Point.

Wiring layer: renders an uploaded price series and statement export.
Run with `streamlit run src/app/main.py`.
"""

import streamlit as st
from loguru import logger

from src.app.logic.financials import FinancialsTableLogic
from src.app.logic.stock_chart import StockChartLogic
from src.app.views.financials_table import render_financials_table
from src.app.views.stock_chart import render_stock_chart
from src.config.settings import Config, load_config
from src.core.config import settings
from src.core.file_manager import parse_records, read_price_bytes

st.set_page_config(
    page_title="Ticker Lens",
    page_icon="📈",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.title("📈 Ticker Lens")

try:
    config = load_config(settings.config_path)
except FileNotFoundError:
    logger.warning(f"{settings.config_path} not found, using default display settings")
    config = Config()

# Sidebar
st.sidebar.title("Data")
ticker = st.sidebar.text_input("Ticker", value="AAPL")
price_upload = st.sidebar.file_uploader("Price series (JSON)", type=["json"])
statement_upload = st.sidebar.file_uploader("Financial statements (JSON)", type=["json"])
statement_title = st.sidebar.text_input("Statement title", value="")

if price_upload is None and statement_upload is None:
    st.info("📊 Upload a price series or statement export to get started")
    st.stop()

try:
    if price_upload is not None:
        chart_context = StockChartLogic(config.chart).get_context(
            ticker, read_price_bytes(price_upload.getvalue())
        )
        render_stock_chart(chart_context, height=config.chart.height)

    if statement_upload is not None:
        records = parse_records(statement_upload.getvalue())
        table_context = FinancialsTableLogic(config.table).get_context(
            records, title=statement_title or None
        )
        render_financials_table(table_context)
except Exception as e:
    st.exception(e)
    logger.error(f"Render error: {e}")
