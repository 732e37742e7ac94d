from datetime import date, datetime, UTC
from typing import Optional, Dict, Any

import httpx

from city_weather.config import Settings, get_settings
from city_weather.exceptions import ParseException
from city_weather.models.external import OneCallResponse, CurrentWeatherResponse
from city_weather.models.weather import (
    WeatherData,
    WeatherSummary,
    CurrentConditions,
    ForecastDay,
)
from city_weather.definitions.data_sources import FORECAST_DAYS
from city_weather.services.mock_weather import MockWeatherGenerator, mock_weather_generator
from city_weather.utils.logger import setup_logger
from city_weather.utils.rounding import round_half_up

logger = setup_logger(__name__)


def _forecast_date(timestamp: int) -> date:
    try:
        return datetime.fromtimestamp(timestamp, UTC).date()
    except (ValueError, OverflowError, OSError) as e:
        raise ParseException(f"Invalid forecast timestamp: {timestamp}") from e


class WeatherClient:
    """
    Client for the weather provider that never fails towards its caller.

    Without a usable credential no request is made at all. Any transport
    error, non-success status or malformed payload is logged and answered
    with mock weather for the same coordinates.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        generator: MockWeatherGenerator = mock_weather_generator,
    ):
        self.settings = settings or get_settings()
        self.client = http_client or httpx.AsyncClient(timeout=self.settings.http_timeout)
        self.generator = generator

    async def close(self):
        await self.client.aclose()

    @property
    def using_mock_data(self) -> bool:
        return not self.settings.has_credential

    async def fetch_current_and_forecast(self, lat: float, lon: float) -> WeatherData:
        if self.using_mock_data:
            return self.generator.detail(lat, lon)

        params = {
            "lat": lat,
            "lon": lon,
            "exclude": "minutely,hourly",
            "units": "metric",
            "appid": self.settings.openweather_api_key,
        }
        payload = await self._get("onecall", params, lat, lon)
        if payload is None:
            return self.generator.detail(lat, lon)

        try:
            return self._transform_one_call(payload)
        except (ParseException, ValueError, TypeError, OverflowError) as e:
            self._log_fallback("parse_error", lat, lon, error=e)
            return self.generator.detail(lat, lon)

    async def fetch_summary(self, lat: float, lon: float) -> WeatherSummary:
        if self.using_mock_data:
            return self.generator.summary(lat, lon)

        params = {
            "lat": lat,
            "lon": lon,
            "units": "metric",
            "appid": self.settings.openweather_api_key,
        }
        payload = await self._get("weather", params, lat, lon)
        if payload is None:
            return self.generator.summary(lat, lon)

        try:
            data = CurrentWeatherResponse(**payload)
            return WeatherSummary(
                temp=round_half_up(data.main.temp),
                condition=data.weather[0].description,
            )
        except (ValueError, TypeError, OverflowError) as e:
            self._log_fallback("parse_error", lat, lon, error=e)
            return self.generator.summary(lat, lon)

    async def _get(
        self, endpoint: str, params: Dict[str, Any], lat: float, lon: float
    ) -> Optional[Dict[str, Any]]:
        """
        Issue one provider request; None means the caller should use mock data.
        """
        url = f"{self.settings.weather_api_url.rstrip('/')}/{endpoint}"
        try:
            response = await self.client.get(url, params=params)
        except httpx.HTTPError as e:
            self._log_fallback("transport_error", lat, lon, error=e)
            return None

        if not response.is_success:
            logger.warning(
                "Weather API returned non-success status, falling back to mock data",
                extra={
                    "event": "weather_fallback_mock",
                    "reason": "http_status",
                    "status_code": response.status_code,
                    "endpoint": endpoint,
                    "lat": lat,
                    "lon": lon,
                },
            )
            return None

        try:
            payload = response.json()
        except ValueError as e:
            self._log_fallback("parse_error", lat, lon, error=e)
            return None

        if not isinstance(payload, dict):
            self._log_fallback("parse_error", lat, lon, error=ParseException("Payload is not an object"))
            return None
        return payload

    @staticmethod
    def _log_fallback(reason: str, lat: float, lon: float, error: Exception) -> None:
        logger.warning(
            "Weather API request failed, falling back to mock data",
            extra={
                "event": "weather_fallback_mock",
                "reason": reason,
                "lat": lat,
                "lon": lon,
                "error": str(error),
                "error_type": type(error).__name__,
            },
        )

    @staticmethod
    def _transform_one_call(payload: Dict[str, Any]) -> WeatherData:
        data = OneCallResponse(**payload)

        if len(data.daily) < FORECAST_DAYS:
            raise ParseException(
                f"Expected at least {FORECAST_DAYS} forecast days, got {len(data.daily)}"
            )

        current = CurrentConditions(
            temp=round_half_up(data.current.temp),
            feels_like=round_half_up(data.current.feels_like),
            humidity=data.current.humidity,
            pressure=data.current.pressure,
            wind_speed=data.current.wind_speed,
            visibility=data.current.visibility / 1000,
            condition=data.current.weather[0].description,
        )

        forecast = [
            ForecastDay(
                date=_forecast_date(day.dt),
                temp_max=round_half_up(day.temp.max),
                temp_min=round_half_up(day.temp.min),
                condition=day.weather[0].description,
                precipitation=round_half_up(day.pop * 100),
            )
            for day in data.daily[:FORECAST_DAYS]
        ]

        return WeatherData(current=current, forecast=forecast)
