"""
Payload models for the two upstream providers.

Validation failures of these models are treated as parse failures by the
clients that use them. Non-finite numbers (JSON NaN or Infinity) are
rejected here.
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, FiniteFloat


class DirectoryFields(BaseModel):
    name: str
    cou_name_en: Optional[str] = None
    timezone: Optional[str] = None
    population: Optional[int] = None
    coordinates: Tuple[FiniteFloat, FiniteFloat]


class DirectoryRecord(BaseModel):
    recordid: str
    fields: DirectoryFields


class DirectoryResponse(BaseModel):
    records: List[DirectoryRecord] = Field(default_factory=list)


class ProviderCondition(BaseModel):
    description: str


class ProviderCurrent(BaseModel):
    temp: FiniteFloat
    feels_like: FiniteFloat
    humidity: int
    pressure: int
    wind_speed: FiniteFloat
    visibility: FiniteFloat = Field(..., description="Visibility in meters")
    weather: List[ProviderCondition] = Field(..., min_length=1)


class ProviderDailyTemp(BaseModel):
    max: FiniteFloat
    min: FiniteFloat


class ProviderDaily(BaseModel):
    dt: int = Field(..., description="Unix timestamp in seconds")
    temp: ProviderDailyTemp
    pop: FiniteFloat = Field(0.0, ge=0, le=1, description="Probability of precipitation")
    weather: List[ProviderCondition] = Field(..., min_length=1)


class OneCallResponse(BaseModel):
    current: ProviderCurrent
    daily: List[ProviderDaily]


class ProviderMain(BaseModel):
    temp: FiniteFloat


class CurrentWeatherResponse(BaseModel):
    main: ProviderMain
    weather: List[ProviderCondition] = Field(..., min_length=1)
