"""
This module defines schemas for the city detail endpoint.
"""

from datetime import date
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from city_weather.definitions.data_sources import LoadState, ErrorKind
from city_weather.models.city import City
from city_weather.models.weather import CurrentConditions


class ForecastCard(BaseModel):
    date: date
    temp_max: int
    temp_min: int
    condition: str
    precipitation: int
    icon: str


class CityDetailSnapshot(BaseModel):
    """
    State of the city detail page.

    Weather is only ever present together with its city.
    """

    state: LoadState
    city: Optional[City] = None
    current: Optional[CurrentConditions] = None
    forecast: List[ForecastCard] = Field(default_factory=list)
    icon: Optional[str] = Field(None, description="Icon for the current condition")
    background: Tuple[str, str] = Field(..., description="Gradient (from, to) colour tokens")
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    using_mock_data: bool
