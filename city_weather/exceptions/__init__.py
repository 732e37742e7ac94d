"""City weather service exceptions."""

from .common import (
    WeatherAppException,
    TransportException,
    CityNotFoundException,
    ParseException,
    ValidationError,
)

__all__ = [
    "WeatherAppException",
    "TransportException",
    "CityNotFoundException",
    "ParseException",
    "ValidationError",
]
