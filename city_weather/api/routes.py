"""
This module defines the stateless city and health routes.
"""

from datetime import datetime, UTC
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, Request
from fastapi.responses import JSONResponse

from city_weather.config import Settings, get_settings
from city_weather.definitions.data_sources import LoadState, SortColumn, SortDirection
from city_weather.exceptions import WeatherAppException
from city_weather.schemas.cities import CityPageResponse
from city_weather.schemas.common import CityRowView, ErrorResponse, HealthResponse, SortConfig
from city_weather.schemas.detail import CityDetailSnapshot
from city_weather.services.city_detail import CityDetailView
from city_weather.services.city_directory import CityDirectoryClient
from city_weather.services.city_list import (
    merge_cities,
    fetch_weather_summaries,
    attach_weather,
    sort_cities,
)
from city_weather.services.weather_client import WeatherClient
from city_weather.utils.dependencies import get_city_directory, get_weather_client
from city_weather.utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(tags=["cities"])


def error_response(request: Request, status_code: int, error: str, detail: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error=error,
            detail=detail,
            request_id=getattr(request.state, "request_id", None),
        ).model_dump(),
    )


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)):
    """
    Health check endpoint that returns service status.
    """
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        timestamp=datetime.now(UTC).isoformat(),
        services={"weather_provider": "live" if settings.has_credential else "mock"},
    )


@router.get(
    "/cities",
    response_model=CityPageResponse,
    responses={502: {"model": ErrorResponse}},
)
async def list_cities(
    request: Request,
    page: int = Query(1, ge=1, description="1-based page number"),
    q: str = Query("", max_length=100, description="Search term"),
    sort: Optional[SortColumn] = Query(None, description="Column to sort the page by"),
    direction: SortDirection = Query(SortDirection.ASC, description="Sort direction"),
    directory: CityDirectoryClient = Depends(get_city_directory),
    weather_client: WeatherClient = Depends(get_weather_client),
    settings: Settings = Depends(get_settings),
):
    """
    Get one page of cities with weather summaries.
    """
    try:
        cities = await directory.search(page, q)
    except WeatherAppException as e:
        logger.error(
            "Error listing cities",
            extra={
                "event": "api_error",
                "page": page,
                "search_term": q,
                "error": str(e),
                "error_type": type(e).__name__,
                "request_id": getattr(request.state, "request_id", None),
            },
        )
        return error_response(
            request, 502, "City directory unavailable", "Failed to load cities. Please try again later."
        )

    rows = merge_cities([], cities)
    summaries = await fetch_weather_summaries(
        weather_client, rows, settings.weather_enrichment_limit
    )
    rows = attach_weather(rows, summaries)

    sort_config = None
    if sort is not None:
        sort_config = SortConfig(column=sort, direction=direction)
        rows = sort_cities(rows, sort_config.column, sort_config.direction)

    return CityPageResponse(
        page=page,
        search_term=q,
        cities=[CityRowView.from_row(row) for row in rows],
        has_more=bool(cities),
        sort=sort_config,
        using_mock_data=weather_client.using_mock_data,
    )


@router.get(
    "/cities/{city_id}",
    response_model=CityDetailSnapshot,
    responses={404: {"model": CityDetailSnapshot}, 502: {"model": CityDetailSnapshot}},
)
async def get_city_detail(
    request: Request,
    city_id: str = Path(..., min_length=1, max_length=100),
    directory: CityDirectoryClient = Depends(get_city_directory),
    weather_client: WeatherClient = Depends(get_weather_client),
):
    """
    Get a city with current conditions and a five day forecast.
    """
    snapshot = await CityDetailView(directory, weather_client).load(city_id)

    if snapshot.state == LoadState.FAILED:
        status_code = 404 if snapshot.error_kind == "not_found" else 502
        logger.warning(
            "City detail unavailable",
            extra={
                "event": "api_error",
                "city_id": city_id,
                "status_code": status_code,
                "request_id": getattr(request.state, "request_id", None),
            },
        )
        return JSONResponse(status_code=status_code, content=snapshot.model_dump(mode="json"))

    return snapshot
