"""Tests for YAML display configuration and environment settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from src.config.settings import Config, load_config
from src.core.config import Settings
from src.core.domain_models import DEFAULT_EXCLUDE_FIELDS


def test_load_config(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "chart:\n"
        "  display_timezone: Europe/Berlin\n"
        "  currency_symbol: '€'\n"
        "table:\n"
        "  exclude_fields: [ticker, period]\n"
        "  include_fields: [revenue, net_income]\n",
        encoding="utf-8",
    )
    config = load_config(config_path)
    assert config.chart.display_timezone == "Europe/Berlin"
    assert config.chart.currency_symbol == "€"
    assert config.chart.height == 300
    schema = config.table.statement_schema
    assert schema.exclude_fields == ("ticker", "period")
    assert schema.include_fields == ("revenue", "net_income")


def test_load_config_empty_file_uses_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("", encoding="utf-8")
    config = load_config(config_path)
    assert config == Config()
    assert tuple(config.table.exclude_fields) == DEFAULT_EXCLUDE_FIELDS
    assert config.table.statement_schema.include_fields is None


def test_load_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_invalid_timezone_rejected(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("chart:\n  display_timezone: Nowhere/Nothing\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_config(config_path)


def test_repository_config_loads() -> None:
    config = load_config(Path(__file__).parent.parent / "config" / "config.yaml")
    assert config.chart.display_timezone == "America/New_York"
    assert tuple(config.table.exclude_fields) == DEFAULT_EXCLUDE_FIELDS


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "warning")
    monkeypatch.setenv("DEBUG", "false")
    assert Settings().effective_log_level == "WARNING"
    monkeypatch.setenv("DEBUG", "true")
    assert Settings().effective_log_level == "DEBUG"
