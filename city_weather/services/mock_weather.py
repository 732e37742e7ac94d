"""
This module synthesizes stand-in weather when the real provider is unavailable.
"""

import math
from datetime import date, timedelta
from typing import Callable, List

from city_weather.definitions.data_sources import MOCK_CONDITIONS, FORECAST_DAYS
from city_weather.models.weather import (
    WeatherSummary,
    WeatherData,
    CurrentConditions,
    ForecastDay,
)
from city_weather.utils.rounding import round_half_up


class MockWeatherGenerator:
    """
    Deterministic weather generator keyed on a coordinate pair.

    Every figure is a function of latitude and longitude only, so the same
    coordinates always produce the same weather. Forecast dates count from
    ``today()``, which tests can pin.
    """

    BASE_TEMP = 20
    VISIBILITY_KM = 10

    def __init__(
        self,
        conditions: List[str] = MOCK_CONDITIONS,
        today: Callable[[], date] = date.today,
    ):
        self.conditions = list(conditions)
        self.today = today

    def _condition(self, lat: float, lon: float, offset: int = 0) -> str:
        index = int(math.floor((abs(lat + lon) + offset) % len(self.conditions)))
        return self.conditions[index]

    def summary(self, lat: float, lon: float) -> WeatherSummary:
        """
        Generate the summary shown in the city table.
        """
        variation = (abs(lat) % 10) - 5
        return WeatherSummary(
            temp=round_half_up(self.BASE_TEMP + variation),
            condition=self._condition(lat, lon),
        )

    def _forecast_day(self, lat: float, lon: float, base_temp: int, day: int, start: date) -> ForecastDay:
        day_variation = math.sin(day) * 3
        return ForecastDay(
            date=start + timedelta(days=day),
            temp_max=round_half_up(base_temp + day_variation + 3),
            temp_min=round_half_up(base_temp + day_variation - 3),
            condition=self._condition(lat, lon, day),
            precipitation=round_half_up(abs(math.sin(lat + lon + day)) * 100),
        )

    def detail(self, lat: float, lon: float) -> WeatherData:
        """
        Generate current conditions plus a five day forecast.

        Day 0 of the forecast carries the same condition as summary().
        """
        summary = self.summary(lat, lon)
        base_temp = summary.temp
        start = self.today()

        forecast = [
            self._forecast_day(lat, lon, base_temp, day, start)
            for day in range(FORECAST_DAYS)
        ]

        current = CurrentConditions(
            temp=base_temp,
            feels_like=base_temp - 2,
            humidity=round_half_up(abs(math.sin(lat)) * 50 + 50),
            pressure=round_half_up(1000 + abs(math.cos(lon)) * 30),
            wind_speed=round_half_up(abs(math.sin(lat + lon)) * 20),
            visibility=self.VISIBILITY_KM,
            condition=summary.condition,
        )

        return WeatherData(current=current, forecast=forecast)


mock_weather_generator = MockWeatherGenerator()
