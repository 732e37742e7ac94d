"""
Services package initialization.
"""

from city_weather.services.mock_weather import MockWeatherGenerator, mock_weather_generator
from city_weather.services.weather_client import WeatherClient
from city_weather.services.city_directory import CityDirectoryClient
from city_weather.services.city_list import CityListView
from city_weather.services.city_detail import CityDetailView
from city_weather.services.session_store import ListSessionStore

__all__ = [
    "MockWeatherGenerator",
    "mock_weather_generator",
    "WeatherClient",
    "CityDirectoryClient",
    "CityListView",
    "CityDetailView",
    "ListSessionStore",
]
