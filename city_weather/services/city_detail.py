"""
This module orchestrates the city detail page.
"""

from typing import Optional

from city_weather.definitions.conditions import classify_condition, DEFAULT_THEME
from city_weather.definitions.data_sources import LoadState, ErrorKind
from city_weather.exceptions import WeatherAppException, CityNotFoundException
from city_weather.models.city import City
from city_weather.models.weather import WeatherData
from city_weather.schemas.detail import CityDetailSnapshot, ForecastCard
from city_weather.services.city_directory import CityDirectoryClient
from city_weather.services.weather_client import WeatherClient
from city_weather.utils.logger import setup_logger

logger = setup_logger(__name__)

LOAD_ERROR_MESSAGE = "Failed to load weather data. Please try again later."


class CityDetailView:
    """
    Loads a city and then its weather, in that order.

    A failure at either step leaves the view in the failed state without
    any weather, so weather is never shown for an unresolved city.
    """

    def __init__(self, directory: CityDirectoryClient, weather_client: WeatherClient):
        self.directory = directory
        self.weather_client = weather_client

        self.state = LoadState.IDLE
        self.city: Optional[City] = None
        self.weather: Optional[WeatherData] = None
        self.error: Optional[str] = None
        self.error_kind: Optional[ErrorKind] = None

        self._generation = 0

    async def load(self, city_id: str) -> CityDetailSnapshot:
        self._generation += 1
        generation = self._generation

        self.state = LoadState.LOADING
        self.city = None
        self.weather = None
        self.error = None
        self.error_kind = None

        try:
            city = await self.directory.get_by_id(city_id)
            weather = await self.weather_client.fetch_current_and_forecast(
                city.latitude, city.longitude
            )
        except WeatherAppException as e:
            if generation == self._generation:
                self._fail(city_id, e)
            return self.snapshot()

        if generation != self._generation:
            logger.info(
                "Discarding stale city detail",
                extra={
                    "event": "stale_response_discarded",
                    "city_id": city_id,
                    "generation": generation,
                    "current_generation": self._generation,
                },
            )
            return self.snapshot()

        self.city = city
        self.weather = weather
        self.state = LoadState.LOADED
        return self.snapshot()

    def _fail(self, city_id: str, error: WeatherAppException) -> None:
        self.error_kind = (
            "not_found" if isinstance(error, CityNotFoundException) else "unavailable"
        )
        logger.error(
            "Error loading city detail",
            extra={
                "event": "city_detail_failed",
                "city_id": city_id,
                "error_kind": self.error_kind,
                "error": str(error),
                "error_type": type(error).__name__,
            },
        )
        self.city = None
        self.weather = None
        self.error = LOAD_ERROR_MESSAGE
        self.state = LoadState.FAILED

    def snapshot(self) -> CityDetailSnapshot:
        if self.weather is None:
            return CityDetailSnapshot(
                state=self.state,
                city=self.city,
                background=DEFAULT_THEME.background,
                error=self.error,
                error_kind=self.error_kind,
                using_mock_data=self.weather_client.using_mock_data,
            )

        theme = classify_condition(self.weather.current.condition)
        forecast = [
            ForecastCard(
                **day.model_dump(),
                icon=classify_condition(day.condition).icon,
            )
            for day in self.weather.forecast
        ]
        return CityDetailSnapshot(
            state=self.state,
            city=self.city,
            current=self.weather.current,
            forecast=forecast,
            icon=theme.icon,
            background=theme.background,
            using_mock_data=self.weather_client.using_mock_data,
        )
