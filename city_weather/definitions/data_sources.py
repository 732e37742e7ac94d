"""
This module defines data sources and shared enumerations for the application.
"""

from enum import Enum
from typing import Literal, List


ProviderMode = Literal["live", "mock"]
ErrorKind = Literal["not_found", "unavailable"]

MOCK_CONDITIONS: List[str] = [
    "clear sky",
    "few clouds",
    "scattered clouds",
    "broken clouds",
    "shower rain",
    "rain",
    "thunderstorm",
    "snow",
    "mist",
]

FORECAST_DAYS = 5


class LoadState(str, Enum):
    """Lifecycle of a view's current request context."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class SortColumn(str, Enum):
    """Columns of the city table that can be sorted."""

    NAME = "name"
    COUNTRY = "country"
    TIMEZONE = "timezone"
    POPULATION = "population"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"
