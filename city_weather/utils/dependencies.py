"""
FastAPI dependency injection providers.

Clients share the application's httpx.AsyncClient, created in the lifespan
handler, and receive the settings explicitly.
"""

import httpx
from fastapi import Depends, Request

from city_weather.config import Settings, get_settings
from city_weather.services.city_directory import CityDirectoryClient
from city_weather.services.session_store import ListSessionStore
from city_weather.services.weather_client import WeatherClient


async def get_http_client(request: Request) -> httpx.AsyncClient:
    """
    Provide the shared outbound HTTP client.

    Returns:
        httpx.AsyncClient: Client owned by the application lifespan
    """
    return request.app.state.http_client


async def get_session_store(request: Request) -> ListSessionStore:
    return request.app.state.session_store


async def get_weather_client(
    http_client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> WeatherClient:
    """
    Provide the weather client.

    Args:
        http_client: Shared HTTP client from dependency
        settings: Application settings

    Returns:
        WeatherClient: Client that falls back to mock weather
    """
    return WeatherClient(settings=settings, http_client=http_client)


async def get_city_directory(
    http_client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> CityDirectoryClient:
    return CityDirectoryClient(settings=settings, http_client=http_client)
