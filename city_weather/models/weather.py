from datetime import date
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from city_weather.definitions.data_sources import FORECAST_DAYS


class WeatherSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    temp: int = Field(..., description="Temperature in °C")
    condition: str = Field(..., description="Weather condition description")


class CurrentConditions(BaseModel):
    model_config = ConfigDict(frozen=True)

    temp: int = Field(..., description="Temperature in °C")
    feels_like: int = Field(..., description="Feels like temperature in °C")
    humidity: int = Field(..., ge=0, le=100, description="Humidity percentage")
    pressure: int = Field(..., description="Pressure in hPa")
    wind_speed: float = Field(..., ge=0, description="Wind speed")
    visibility: float = Field(..., ge=0, description="Visibility in km")
    condition: str = Field(..., description="Weather condition description")


class ForecastDay(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: date
    temp_max: int = Field(..., description="Maximum temperature in °C")
    temp_min: int = Field(..., description="Minimum temperature in °C")
    condition: str = Field(..., description="Weather condition description")
    precipitation: int = Field(
        ..., ge=0, le=100, description="Precipitation probability percentage"
    )


class WeatherData(BaseModel):
    model_config = ConfigDict(frozen=True)

    current: CurrentConditions
    forecast: List[ForecastDay] = Field(
        ..., min_length=FORECAST_DAYS, max_length=FORECAST_DAYS
    )
