"""
This module provides access to the public city directory.
"""

from typing import Optional, Dict, Any, List

import httpx
from pydantic import ValidationError as PydanticValidationError

from city_weather.config import Settings, get_settings
from city_weather.exceptions import (
    TransportException,
    CityNotFoundException,
    ParseException,
    ValidationError,
)
from city_weather.models.city import City
from city_weather.models.external import DirectoryResponse, DirectoryRecord
from city_weather.utils.logger import setup_logger

logger = setup_logger(__name__)

UNKNOWN_TIMEZONE = "Unknown"


class CityDirectoryClient:
    """
    Client for the geographic city directory.

    Failures are not absorbed here: transport problems raise
    TransportException, malformed payloads raise ParseException and an
    identifier without records raises CityNotFoundException.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings or get_settings()
        self.client = http_client or httpx.AsyncClient(timeout=self.settings.http_timeout)

    async def close(self):
        await self.client.aclose()

    @property
    def page_size(self) -> int:
        return self.settings.city_page_size

    async def search(self, page: int = 1, search_term: str = "") -> List[City]:
        """
        Fetch one page of cities sorted by name.

        Args:
            page: 1-based page number
            search_term: Optional free-text filter

        Returns:
            Cities on the page; an empty list means there are no more results
        """
        if page < 1:
            raise ValidationError(f"Page must be 1 or greater, got {page}")

        params: Dict[str, Any] = {
            "dataset": self.settings.city_directory_dataset,
            "rows": self.page_size,
            "start": (page - 1) * self.page_size,
            "sort": "name",
        }
        if search_term:
            params["q"] = search_term

        response = await self._get(params)
        cities = [self._normalize(record) for record in response.records]

        logger.info(
            "City page fetched",
            extra={
                "event": "city_page_fetched",
                "page": page,
                "search_term": search_term,
                "count": len(cities),
            },
        )
        return cities

    async def get_by_id(self, city_id: str) -> City:
        """
        Look up a single city by its directory record identifier.
        """
        params = {
            "dataset": self.settings.city_directory_dataset,
            "q": f"recordid:{city_id}",
        }

        response = await self._get(params)
        if not response.records:
            logger.warning(
                "City not found",
                extra={"event": "city_not_found", "city_id": city_id},
            )
            raise CityNotFoundException(city_id)

        return self._normalize(response.records[0])

    async def _get(self, params: Dict[str, Any]) -> DirectoryResponse:
        try:
            response = await self.client.get(self.settings.city_directory_url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "City directory returned non-success status",
                extra={
                    "event": "city_directory_error",
                    "status_code": e.response.status_code,
                    "error": str(e),
                },
            )
            raise TransportException(
                f"Failed to fetch cities: {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.error(
                "City directory request failed",
                extra={
                    "event": "city_directory_error",
                    "error": str(e),
                    "error_type": type(e).__name__,
                },
            )
            raise TransportException(f"Failed to fetch cities: {e}") from e

        try:
            return DirectoryResponse(**response.json())
        except (ValueError, TypeError) as e:
            # pydantic's ValidationError is a ValueError
            logger.error(
                "City directory payload could not be parsed",
                extra={
                    "event": "city_directory_parse_error",
                    "error": str(e),
                    "error_type": type(e).__name__,
                },
            )
            raise ParseException(f"Malformed city directory response: {e}") from e

    @staticmethod
    def _normalize(record: DirectoryRecord) -> City:
        fields = record.fields
        # coordinates[0] is read as latitude, coordinates[1] as longitude.
        latitude, longitude = fields.coordinates
        try:
            return City(
                id=record.recordid,
                name=fields.name,
                country=fields.cou_name_en or "",
                timezone=fields.timezone or UNKNOWN_TIMEZONE,
                population=fields.population or 0,
                latitude=latitude,
                longitude=longitude,
            )
        except PydanticValidationError as e:
            raise ParseException(f"Invalid city record {record.recordid}: {e}") from e
