from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from city_weather.models.weather import WeatherSummary


class City(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Directory record identifier")
    name: str = Field(..., description="City name")
    country: str = Field(..., description="Country name")
    timezone: str = Field(..., description="Timezone label")
    population: int = Field(..., ge=0, description="Population")
    latitude: float = Field(..., description="Latitude in decimal degrees")
    longitude: float = Field(..., description="Longitude in decimal degrees")


class CityRow(BaseModel):
    """
    A loaded city together with its weather summary, once fetched.
    """

    model_config = ConfigDict(frozen=True)

    city: City
    weather: Optional[WeatherSummary] = None

    @property
    def id(self) -> str:
        return self.city.id

    def with_weather(self, weather: WeatherSummary) -> "CityRow":
        return self.model_copy(update={"weather": weather})
