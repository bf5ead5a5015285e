"""Logic layer for the stock price chart.

Assembles everything the chart view needs for one render.
"""

from dataclasses import dataclass, field

from loguru import logger

from src.analysis.price_series import PriceInput, PriceSeriesAnalyzer
from src.config.settings import ChartSettings
from src.core.domain_models import AxisDomain, ChartPoint, PriceChange, PriceHeader
from src.core.errors import DivisionUndefinedError


@dataclass
class StockChartContext:
    ticker: str

    points: list[ChartPoint] = field(default_factory=list)
    domain: AxisDomain | None = None
    change: PriceChange | None = None
    header: PriceHeader | None = None
    currency_symbol: str = "$"

    @property
    def is_empty(self) -> bool:
        return not self.points

    @property
    def reference_value(self) -> float | None:
        """Starting value, drawn as the flat reference line."""
        return self.points[0].value if self.points else None


class StockChartLogic:
    def __init__(self, chart_settings: ChartSettings | None = None):
        chart_settings = chart_settings or ChartSettings()
        self.currency_symbol = chart_settings.currency_symbol
        self.analyzer = PriceSeriesAnalyzer(
            display_timezone=chart_settings.display_timezone,
            currency_symbol=chart_settings.currency_symbol,
        )

    def get_context(self, ticker: str, prices: PriceInput) -> StockChartContext:
        df = self.analyzer.prepare(prices)
        points = self.analyzer.compute_chart_points(df)
        if not points:
            logger.warning(f"No price data for {ticker}, chart will not render")
            return StockChartContext(ticker=ticker, currency_symbol=self.currency_symbol)

        try:
            change = self.analyzer.compute_change(df)
        except DivisionUndefinedError as e:
            logger.warning(f"[{ticker}] {e}")
            change = None

        logger.info(f"Prepared chart for {ticker} with {len(points)} points")
        return StockChartContext(
            ticker=ticker,
            points=points,
            domain=self.analyzer.compute_axis_domain(df),
            change=change,
            header=self.analyzer.build_header(ticker, df, change),
            currency_symbol=self.currency_symbol,
        )
