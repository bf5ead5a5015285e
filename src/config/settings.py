"""Display configuration for Ticker Lens.

Centralizes chart and statement table settings loaded from YAML.
"""

from pathlib import Path
from typing import Any

import yaml
from dateutil import tz
from loguru import logger
from pydantic import BaseModel, Field, field_validator

from src.core.domain_models import DEFAULT_EXCLUDE_FIELDS, StatementSchema


class ChartSettings(BaseModel):
    """Price chart settings."""

    display_timezone: str = Field(default="America/New_York")
    currency_symbol: str = Field(default="$")
    height: int = Field(default=300, description="Chart height in pixels")

    @field_validator("display_timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Ensure the timezone name is known to dateutil."""
        if tz.gettz(v) is None:
            raise ValueError(f"Unknown timezone: {v}")
        return v


class TableSettings(BaseModel):
    """Statement table settings."""

    exclude_fields: list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDE_FIELDS))
    include_fields: list[str] | None = Field(
        default=None, description="Optional explicit line item allowlist"
    )

    @property
    def statement_schema(self) -> StatementSchema:
        """Statement schema built from the configured allow/deny lists."""
        return StatementSchema(
            include_fields=tuple(self.include_fields) if self.include_fields else None,
            exclude_fields=tuple(self.exclude_fields),
        )


class Config(BaseModel):
    """Root configuration model."""

    chart: ChartSettings = Field(default_factory=ChartSettings)
    table: TableSettings = Field(default_factory=TableSettings)


def load_config(config_path: Path = Path("config/config.yaml")) -> Config:
    """Load configuration from YAML file.

    Args:
        config_path: Path to config.yaml file

    Returns:
        Parsed configuration object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is malformed
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    logger.info(f"Loading configuration from {config_path}")

    with config_path.open("r") as f:
        raw_config: dict[str, Any] | None = yaml.safe_load(f)

    config = Config(**(raw_config or {}))
    logger.debug(
        f"Chart timezone: {config.chart.display_timezone}, "
        f"excluded table fields: {config.table.exclude_fields}"
    )

    return config
