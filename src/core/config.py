"""Application configuration using Pydantic V2."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings and configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="ticker-lens", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    # Project paths
    config_path: Path = Field(
        default_factory=lambda: Path(__file__).parent.parent.parent / "config" / "config.yaml",
        description="Display configuration file",
    )

    @property
    def effective_log_level(self) -> str:
        """Debug mode forces DEBUG output regardless of log_level."""
        return "DEBUG" if self.debug else self.log_level.upper()


# Singleton instance
settings = Settings()
