"""Shared fixtures for price series and statement tests."""

from typing import Any

import polars as pl
import pytest

from src.core.domain_models import PRICE_OBSERVATION_SCHEMA


def make_prices(closes: list[float], start_hour: int = 14) -> pl.DataFrame:
    """Intraday series, one observation per 30 minutes starting at start_hour UTC."""
    rows = []
    for idx, close in enumerate(closes):
        minutes = 30 + idx * 30
        hour = start_hour + minutes // 60
        rows.append(
            {
                "time": f"2024-01-05T{hour:02d}:{minutes % 60:02d}:00Z",
                "open": close,
                "high": close + 1,
                "low": close - 1,
                "close": close,
                "volume": 1000.0,
            }
        )
    return pl.DataFrame(rows, schema=PRICE_OBSERVATION_SCHEMA)


@pytest.fixture
def rising_prices() -> pl.DataFrame:
    # The dip below the start must not widen the axis domain
    return make_prices([100.0, 95.0, 120.0, 110.0])


@pytest.fixture
def empty_prices() -> pl.DataFrame:
    return pl.DataFrame(schema=PRICE_OBSERVATION_SCHEMA)


@pytest.fixture
def annual_records() -> list[dict[str, Any]]:
    return [
        {
            "ticker": "AAPL",
            "calendar_date": "2023-12-31",
            "report_period": "2023-12-31",
            "period": "annual",
            "currency": "USD",
            "revenue": 383_290_000_000,
            "net_income": 96_995_000_000,
            "earnings_per_share": 6.13,
            "weighted_average_shares": 15_744_231_000,
            "segment_note": "n/a",
        },
        {
            "ticker": "AAPL",
            "calendar_date": "2022-12-31",
            "report_period": "2022-12-31",
            "period": "annual",
            "currency": "USD",
            "revenue": 394_330_000_000,
            "net_income": 99_803_000_000,
            "earnings_per_share": 6.11,
            "weighted_average_shares": 16_215_963_000,
            "segment_note": "n/a",
        },
    ]


@pytest.fixture
def price_factory():
    return make_prices
