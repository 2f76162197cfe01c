"""Progress engine configuration from environment variables."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Progress engine settings loaded from environment."""

    # App settings
    app_name: str = "Avitio Progress"

    # Reporting
    default_period_days: int = 7
    unknown_signal_name: str = "Unknown signal"

    # Streaks
    max_streak_days: int = 365

    # Logging
    log_level: str = "INFO"
    log_to_file: bool = False
    log_dir: str = "logs"

    class Config:
        env_prefix = "AVITIO_"
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
