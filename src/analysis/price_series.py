"""Price series analysis for chart rendering.

Turns an ordered series of price observations into chart points, a padded
value-axis domain and the change between the first and last close.
Pure Polars/Python - no rendering calls.
"""

from collections.abc import Sequence
from datetime import date, datetime, time
from typing import Any

import polars as pl
from dateutil import parser as date_parser
from dateutil import tz
from loguru import logger

from src.core.domain_models import (
    AxisDomain,
    ChartPoint,
    Direction,
    PriceChange,
    PriceHeader,
    PriceObservation,
)
from src.core.errors import DivisionUndefinedError, PriceDataError
from src.core.mapper import ensure_price_frame, map_observations_to_df

PriceInput = pl.DataFrame | Sequence[PriceObservation | dict[str, Any]]


def get_domain_buffer(max_value: float) -> float:
    """Axis padding for the magnitude of the larger endpoint close."""
    if max_value >= 100_000:
        return 1000
    if max_value >= 1_000:
        return 1
    return 0.1


def format_date_label(timestamp: str | date | datetime, display_tz: Any) -> str:
    """Format a timestamp like 'Jan 5, 2024, 9:30 AM' in the display timezone.

    Naive timestamps are interpreted as UTC. Plain dates (daily series) keep
    their calendar day and are labelled at midnight in the display timezone.
    """
    if isinstance(timestamp, datetime):
        dt = timestamp
    elif isinstance(timestamp, date):
        dt = datetime.combine(timestamp, time.min, tzinfo=display_tz)
    else:
        dt = date_parser.isoparse(timestamp)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=tz.UTC)
    local = dt.astimezone(display_tz)
    hour = local.hour % 12 or 12
    return f"{local:%b} {local.day}, {local.year}, {hour}:{local:%M} {local:%p}"


class PriceSeriesAnalyzer:
    """Computes chart-ready values from an ordered price series.

    Only the first and last close anchor the domain and the change. Intraday
    extremes in between are ignored on purpose, the chart frames start vs. end.
    """

    def __init__(self, display_timezone: str = "America/New_York", currency_symbol: str = "$"):
        self.display_tz = tz.gettz(display_timezone)
        if self.display_tz is None:
            raise ValueError(f"Unknown timezone: {display_timezone}")
        self.currency_symbol = currency_symbol

    def prepare(self, observations: PriceInput) -> pl.DataFrame:
        """Validate observations once; the returned frame can be reused across calls."""
        if isinstance(observations, pl.DataFrame):
            return ensure_price_frame(observations)
        return map_observations_to_df(observations)

    def _endpoints(self, df: pl.DataFrame) -> tuple[float, float]:
        closes = df.get_column("close")
        start, end = closes.item(0), closes.item(-1)
        if start is None or end is None:
            raise PriceDataError("First and last observations must have a close price")
        return float(start), float(end)

    def compute_chart_points(self, observations: PriceInput) -> list[ChartPoint]:
        """Map every observation's close to a labelled chart point.

        Args:
            observations: Price data with at least columns [time, close]

        Returns:
            One ChartPoint per observation, in input order. Empty for empty input.
        """
        df = self.prepare(observations)
        if df.is_empty():
            logger.warning("No price observations, returning no chart points")
            return []
        if "time" not in df.columns:
            raise PriceDataError(f"Chart points require a 'time' column, got: {df.columns}")

        return [
            ChartPoint(
                date_label=format_date_label(row["time"], self.display_tz),
                value=row["close"],
            )
            for row in df.select("time", "close").iter_rows(named=True)
        ]

    def compute_axis_domain(self, observations: PriceInput) -> AxisDomain | None:
        """Padded value-axis bounds around the first and last close.

        Returns:
            AxisDomain, or None when there are no observations
        """
        df = self.prepare(observations)
        if df.is_empty():
            logger.warning("No price observations, skipping axis domain")
            return None

        start, end = self._endpoints(df)
        raw_min, raw_max = min(start, end), max(start, end)
        buffer = get_domain_buffer(raw_max)
        domain = AxisDomain(min=raw_min - buffer, max=raw_max + buffer)
        logger.debug(f"Axis domain [{domain.min}, {domain.max}] (buffer {buffer})")
        return domain

    def compute_change(self, observations: PriceInput) -> PriceChange | None:
        """Absolute and percent change between the first and last close.

        Returns:
            PriceChange, or None when there are no observations

        Raises:
            DivisionUndefinedError: If the first close is zero
        """
        df = self.prepare(observations)
        if df.is_empty():
            logger.warning("No price observations, skipping change computation")
            return None

        start, end = self._endpoints(df)
        if start == 0:
            raise DivisionUndefinedError(start, end)

        absolute = end - start
        if absolute > 0:
            direction = Direction.UP
        elif absolute < 0:
            direction = Direction.DOWN
        else:
            direction = Direction.FLAT

        return PriceChange(
            absolute=absolute,
            percent=absolute / start * 100,
            direction=direction,
        )

    def summarize_header(self, ticker: str, observations: PriceInput) -> PriceHeader | None:
        """Display strings for the chart header.

        A zero starting price keeps the absolute change but drops the percent label.
        """
        df = self.prepare(observations)
        if df.is_empty():
            logger.warning(f"No price observations for {ticker}, skipping header")
            return None

        try:
            change = self.compute_change(df)
        except DivisionUndefinedError as e:
            logger.warning(f"[{ticker}] {e}")
            change = None
        return self.build_header(ticker, df, change)

    def build_header(
        self, ticker: str, df: pl.DataFrame, change: PriceChange | None
    ) -> PriceHeader | None:
        """Header strings from a prepared frame and an already computed change.

        `change` is None when the percent change is undefined.
        """
        if df.is_empty():
            return None

        start, end = self._endpoints(df)
        symbol = self.currency_symbol
        absolute = end - start

        if absolute > 0:
            change_label = f"+{symbol}{absolute:,.2f}"
        elif absolute < 0:
            change_label = f"-{symbol}{abs(absolute):,.2f}"
        else:
            change_label = f"{symbol}0.00"

        percent_label = None
        if change is not None:
            if change.direction == Direction.FLAT:
                percent_label = "(0.00%)"
            else:
                percent_label = f"({change.percent:+.2f}%)"

        return PriceHeader(
            ticker=ticker,
            last_price_label=f"{symbol}{end:,.2f}",
            change_label=change_label,
            percent_label=percent_label,
            direction=change.direction if change else None,
        )
