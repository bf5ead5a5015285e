"""Ticker Lens - Main Entry Point with CLI Commands.

Supports:
- chart: Summarize an exported price series (header, axis domain, change)
- table: Print an exported financial statement as a formatted wide table
"""

import argparse
import sys
from pathlib import Path

import polars as pl
from loguru import logger

from src.app.logic.financials import FinancialsTableLogic
from src.app.logic.stock_chart import StockChartLogic
from src.config.settings import Config, load_config
from src.core.config import settings
from src.core.file_manager import read_price_file, read_records_file


def configure_logging() -> None:
    """Route loguru output to stderr at the configured level."""
    logger.remove()
    logger.add(sys.stderr, level=settings.effective_log_level)


def get_config() -> Config:
    try:
        return load_config(settings.config_path)
    except FileNotFoundError:
        logger.warning(f"{settings.config_path} not found, using default display settings")
        return Config()


def cmd_chart(args: argparse.Namespace) -> None:
    """Summarize a price series file."""
    logger.info("=== Price Chart Summary ===")
    config = get_config()

    try:
        prices = read_price_file(Path(args.file))
        context = StockChartLogic(config.chart).get_context(args.ticker, prices)
    except (FileNotFoundError, ValueError, TypeError, pl.exceptions.PolarsError) as e:
        logger.error(f"Failed to read price data: {e}")
        sys.exit(1)

    if context.is_empty:
        logger.warning(f"No price data for {args.ticker}")
        return

    header = context.header
    if header is not None:
        logger.info(f"{header.ticker}: {header.last_price_label}")
        if header.change_label:
            logger.info(f"Change: {header.change_label} {header.percent_label or ''}".rstrip())
    if context.domain is not None:
        logger.info(f"Axis domain: [{context.domain.min:.2f}, {context.domain.max:.2f}]")
    first, last = context.points[0], context.points[-1]
    logger.info(f"Points: {len(context.points)} ({first.date_label} .. {last.date_label})")
    logger.success("✅ Chart summary complete")


def cmd_table(args: argparse.Namespace) -> None:
    """Print a financial statement file as a formatted table."""
    logger.info("=== Financial Statement Table ===")
    config = get_config()
    logic = FinancialsTableLogic(config.table)

    try:
        records = read_records_file(Path(args.file))
        if args.schema:
            context = logic.get_schema_context(records, title=args.title)
        else:
            context = logic.get_context(records, title=args.title, exclude_fields=args.exclude)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Failed to read statement data: {e}")
        sys.exit(1)

    if context is None:
        logger.warning("No statement records to display")
        return

    logger.info(context.retrieved_label)
    with pl.Config(tbl_rows=-1, tbl_cols=-1, tbl_hide_dataframe_shape=True):
        print(context.table.frame)
    logger.success(f"✅ Formatted {len(context.table.line_items)} line items")


def main() -> None:
    """Main entry point with CLI argument parsing."""
    configure_logging()
    parser = argparse.ArgumentParser(
        description="Ticker Lens - Price chart and statement table values",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")

    # Chart command
    parser_chart = subparsers.add_parser("chart", help="Summarize a price series file")
    parser_chart.add_argument("file", type=str, help="Price series (.json or .parquet)")
    parser_chart.add_argument("--ticker", type=str, default="TICKER", help="Ticker symbol")
    parser_chart.set_defaults(func=cmd_chart)

    # Table command
    parser_table = subparsers.add_parser("table", help="Print a statement file as a table")
    parser_table.add_argument("file", type=str, help="Statement records (.json)")
    parser_table.add_argument("--title", type=str, help="Statement title for the header")
    # --schema uses the configured field lists, so an ad-hoc exclude list cannot apply
    line_items = parser_table.add_mutually_exclusive_group()
    line_items.add_argument(
        "--exclude",
        nargs="+",
        help="Fields that are not line items (default: from config)",
    )
    line_items.add_argument(
        "--schema",
        action="store_true",
        help="Resolve line items across all records using the configured schema",
    )
    parser_table.set_defaults(func=cmd_table)

    # Parse arguments and execute
    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
