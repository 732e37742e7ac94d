"""
This module contains configuration settings for the application.
"""

from functools import lru_cache
from typing import Optional, List

from pydantic_settings import BaseSettings, SettingsConfigDict

PLACEHOLDER_API_KEY = "YOUR_OPENWEATHER_API_KEY"


class Settings(BaseSettings):
    """
    Application configuration using Pydantic BaseSettings.
    Automatically handles environment variable parsing and type conversion.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Application settings
    app_name: str = "City Weather API"
    app_version: str = "1.0.0"
    log_level: str = "INFO"

    # City directory settings
    city_directory_url: str = "https://public.opendatasoft.com/api/records/1.0/search/"
    city_directory_dataset: str = "geonames-all-cities-with-a-population-1000"
    city_page_size: int = 20

    # Weather provider settings
    weather_api_url: str = "https://api.openweathermap.org/data/2.5"
    openweather_api_key: Optional[str] = None

    http_timeout: float = 10.0

    # List view settings
    search_debounce_ms: int = 500
    suggestion_limit: int = 5
    weather_enrichment_limit: int = 20
    scroll_prefetch_rows: int = 5
    session_store_size: int = 200

    # CORS settings
    cors_origins: List[str] = ["*"]
    cors_allow_credentials: bool = True
    cors_allow_methods: List[str] = ["*"]
    cors_allow_headers: List[str] = ["*"]

    @property
    def has_credential(self) -> bool:
        """
        Whether a usable weather provider key is configured.
        """
        key = self.openweather_api_key
        return bool(key) and key != PLACEHOLDER_API_KEY and len(key) > 10


@lru_cache()
def get_settings() -> Settings:
    """
    Get the application settings.
    """
    return Settings()
