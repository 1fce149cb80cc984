"""
Application Configuration

All settings loaded from environment variables.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "SignalDeck"
    app_version: str = "2.0.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "info"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS
    allowed_origins: list[str] = ["http://localhost:3000"]

    # Remote prediction service
    prediction_service_url: str = "http://localhost:8080"
    prediction_service_timeout: float = 15.0
    service_timestamp_unit: str = "ns"  # Options: s, ms, ns

    # Display
    display_timezone: str = "UTC"
    history_display_limit: int = 10

    # Analysis form defaults
    default_symbol: str = "BTC/USDT"
    default_timeframe: str = "1h"
    quick_symbols: list[str] = ["BTC/USDT", "ETH/USDT", "SOL/USDT", "AAPL", "TSLA", "NVDA"]
    timeframes: list[str] = ["1m", "5m", "15m", "1h", "4h", "1d"]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
