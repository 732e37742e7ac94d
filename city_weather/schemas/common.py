"""
This module defines schemas shared by the city list and detail views.
"""

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from city_weather.definitions.conditions import classify_condition
from city_weather.definitions.data_sources import SortColumn, SortDirection
from city_weather.models.city import CityRow
from city_weather.models.weather import WeatherSummary


class SortConfig(BaseModel):
    """
    Active column sort of the city table.
    """

    model_config = ConfigDict(frozen=True)

    column: SortColumn
    direction: SortDirection = SortDirection.ASC


class CityRowView(BaseModel):
    """
    One row of the city table as rendered by a client.

    Attributes:
        id: City identifier, also the detail page path parameter
        weather: Summary once fetched, None while absent
        icon: Condition icon for the weather cell, None without weather
    """

    id: str
    name: str
    country: str
    timezone: str
    population: int
    latitude: float
    longitude: float
    weather: Optional[WeatherSummary] = None
    icon: Optional[str] = None

    @classmethod
    def from_row(cls, row: CityRow) -> "CityRowView":
        icon = classify_condition(row.weather.condition).icon if row.weather else None
        return cls(**row.city.model_dump(), weather=row.weather, icon=icon)


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Detailed error information")
    request_id: Optional[str] = Field(None, description="Request tracking ID")


class HealthResponse(BaseModel):
    status: str = Field(..., description="Service health status")
    version: str = Field(..., description="API version")
    timestamp: str = Field(..., description="Current timestamp")
    services: Dict[str, str] = Field(..., description="Status of dependent services")
