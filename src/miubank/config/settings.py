"""Application settings and configuration."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.home() / ".miubank"


class Settings(BaseSettings):
    """
    MiuBank configuration.

    Every field can be overridden with a MIUBANK_-prefixed environment
    variable (MIUBANK_DATABASE_URL, MIUBANK_PRICE_SEED, ...) or a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="MIUBANK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "MiuBank"
    app_version: str = "0.1.0"

    # SQLite database lives here unless database_url is set
    data_dir: Optional[Path] = None
    database_url: Optional[str] = None
    database_echo: bool = False

    log_level: str = "INFO"
    log_to_file: bool = False
    timezone: str = "America/Sao_Paulo"

    # Simulated market
    market_update_interval_seconds: int = Field(default=300, gt=0)
    advance_prices_on_read: bool = False
    price_seed: Optional[int] = None

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        return f"sqlite:///{self.get_data_dir() / 'miubank.db'}"

    def get_log_file(self) -> Path:
        """Path of the rotating log file used when log_to_file is enabled."""
        log_dir = self.get_data_dir() / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)
        return log_dir / "miubank.log"


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Replace the process settings (tests, embedding callers)."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Forget the process settings so the next get_settings() reloads them."""
    global _settings
    _settings = None
