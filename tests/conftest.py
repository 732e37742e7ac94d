"""
Common test fixtures and configuration.
"""

from datetime import date

import httpx
import pytest

from city_weather.config import Settings
from city_weather.models.city import City
from city_weather.services.mock_weather import MockWeatherGenerator

WEATHER_URL = "https://weather.test/data/2.5"
DIRECTORY_URL = "https://directory.test/api/records/1.0/search/"
LIVE_KEY = "0123456789abcdef0123456789abcdef"
FIXED_DAY = date(2024, 3, 1)


def make_settings(**overrides) -> Settings:
    values = {
        "weather_api_url": WEATHER_URL,
        "city_directory_url": DIRECTORY_URL,
        "openweather_api_key": None,
        "search_debounce_ms": 10,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def mock_settings() -> Settings:
    """
    Settings without a weather credential.

    Returns:
        Settings: Weather requests are answered by the mock generator
    """
    return make_settings()


@pytest.fixture
def live_settings() -> Settings:
    """
    Settings with a usable weather credential.
    """
    return make_settings(openweather_api_key=LIVE_KEY)


@pytest.fixture
def generator() -> MockWeatherGenerator:
    """Mock generator with a pinned forecast start date."""
    return MockWeatherGenerator(today=lambda: FIXED_DAY)


@pytest.fixture
async def http_client():
    async with httpx.AsyncClient() as client:
        yield client


def make_city(city_id: str, name: str = None, population: int = 1000, **fields) -> City:
    values = {
        "id": city_id,
        "name": name or f"City {city_id}",
        "country": "Testland",
        "timezone": "Europe/Test",
        "population": population,
        "latitude": 10.0,
        "longitude": 20.0,
    }
    values.update(fields)
    return City(**values)


def directory_record(record_id: str, name: str, **fields) -> dict:
    """Build one raw directory record the way the upstream service returns it."""
    record_fields = {
        "name": name,
        "cou_name_en": "Testland",
        "timezone": "Europe/Test",
        "population": 5000,
        "coordinates": [48.85, 2.35],
    }
    record_fields.update(fields)
    return {"recordid": record_id, "fields": record_fields}


@pytest.fixture
def city_factory():
    """Factory for City instances with sensible defaults."""
    return make_city


@pytest.fixture
def record_factory():
    """Factory for raw directory records."""
    return directory_record
