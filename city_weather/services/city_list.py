"""
This module orchestrates the paginated, searchable city list.
"""

import asyncio
from typing import Dict, Iterable, List, Optional, Set

from city_weather.config import Settings, get_settings
from city_weather.definitions.data_sources import LoadState, SortColumn, SortDirection
from city_weather.exceptions import WeatherAppException
from city_weather.models.city import City, CityRow
from city_weather.models.weather import WeatherSummary
from city_weather.schemas.cities import CityListSnapshot
from city_weather.schemas.common import CityRowView, SortConfig
from city_weather.services.city_directory import CityDirectoryClient
from city_weather.services.weather_client import WeatherClient
from city_weather.utils.debounce import Debouncer
from city_weather.utils.logger import setup_logger

logger = setup_logger(__name__)

LOAD_ERROR_MESSAGE = "Failed to load cities. Please try again later."
EMPTY_MESSAGE = "No cities found. Try a different search term."


def merge_cities(existing: List[CityRow], incoming: Iterable[City]) -> List[CityRow]:
    """
    Append cities whose id has not been seen yet, keeping first-seen order.
    """
    seen: Set[str] = {row.id for row in existing}
    merged = list(existing)
    for city in incoming:
        if city.id in seen:
            continue
        seen.add(city.id)
        merged.append(CityRow(city=city))
    return merged


def sort_cities(
    rows: List[CityRow], column: SortColumn, direction: SortDirection
) -> List[CityRow]:
    """
    Stable sort of the loaded rows by one table column.
    """
    return sorted(
        rows,
        key=lambda row: getattr(row.city, column.value),
        reverse=direction == SortDirection.DESC,
    )


def next_sort(current: Optional[SortConfig], column: SortColumn) -> SortConfig:
    """
    Sorting the active column again flips direction; any other column starts ascending.
    """
    if current is not None and current.column == column:
        direction = (
            SortDirection.DESC
            if current.direction == SortDirection.ASC
            else SortDirection.ASC
        )
        return SortConfig(column=column, direction=direction)
    return SortConfig(column=column, direction=SortDirection.ASC)


def suggest_names(rows: List[CityRow], text: str, limit: int = 5) -> List[str]:
    if len(text) <= 1:
        return []
    needle = text.lower()
    return [row.city.name for row in rows if needle in row.city.name.lower()][:limit]


async def fetch_weather_summaries(
    weather_client: WeatherClient, rows: List[CityRow], limit: int = 20
) -> Dict[str, WeatherSummary]:
    """
    Fetch summaries for the first ``limit`` rows still missing weather.

    Requests run concurrently. A failing request only loses its own row.

    Returns:
        Summaries keyed by city id
    """
    pending = [row for row in rows if row.weather is None][:limit]
    if not pending:
        return {}

    results = await asyncio.gather(
        *(
            weather_client.fetch_summary(row.city.latitude, row.city.longitude)
            for row in pending
        ),
        return_exceptions=True,
    )

    summaries: Dict[str, WeatherSummary] = {}
    for row, result in zip(pending, results):
        if isinstance(result, BaseException):
            logger.warning(
                "Weather summary unavailable",
                extra={
                    "event": "weather_summary_failed",
                    "city_id": row.id,
                    "error": str(result),
                    "error_type": type(result).__name__,
                },
            )
            continue
        summaries[row.id] = result
    return summaries


def attach_weather(
    rows: List[CityRow], summaries: Dict[str, WeatherSummary]
) -> List[CityRow]:
    return [
        row.with_weather(summaries[row.id]) if row.id in summaries else row
        for row in rows
    ]


class CityListView:
    """
    State of one city list: loaded pages, search box, sort and weather cells.

    Every search starts a new request generation. Responses that arrive for
    an older generation are dropped so that a slow, superseded query cannot
    overwrite newer results.
    """

    def __init__(
        self,
        directory: CityDirectoryClient,
        weather_client: WeatherClient,
        settings: Optional[Settings] = None,
    ):
        self.directory = directory
        self.weather_client = weather_client
        self.settings = settings or get_settings()

        self.state = LoadState.IDLE
        self.cities: List[CityRow] = []
        self.page = 1
        self.search_term = ""
        self.input_text = ""
        self.has_more = True
        self.loading = False
        self.error: Optional[str] = None
        self.sort: Optional[SortConfig] = None
        self.suggestions: List[str] = []
        self.show_suggestions = False

        self._generation = 0
        self._debouncer = Debouncer(
            self.settings.search_debounce_ms / 1000, self._search_and_enrich
        )

    @property
    def generation(self) -> int:
        return self._generation

    async def load_initial(self) -> None:
        await self.search(self.search_term)

    async def search(self, term: str) -> None:
        """
        Start a new search context and load its first page.
        """
        self._generation += 1
        self.search_term = term
        self.page = 1
        self.has_more = True
        self.error = None
        await self._load(1, term, self._generation)

    def on_input(self, text: str) -> List[str]:
        """
        Handle a keystroke in the search box.

        Suggestions update straight away; the directory query runs only after
        the debounce delay passes without further input.
        """
        self.input_text = text
        self.suggestions = suggest_names(self.cities, text, self.settings.suggestion_limit)
        self.show_suggestions = bool(self.suggestions)
        self._debouncer.trigger(text)
        return self.suggestions

    async def select_suggestion(self, suggestion: str) -> None:
        self._debouncer.cancel()
        self.input_text = suggestion
        self.suggestions = []
        self.show_suggestions = False
        await self.search(suggestion)

    async def on_row_visible(self, index: int) -> bool:
        """
        Infinite scroll trigger for the row at ``index``.

        Returns:
            True if another page was requested
        """
        threshold = len(self.cities) - self.settings.scroll_prefetch_rows
        if self.state == LoadState.FAILED:
            return False
        if index != threshold or self.loading or not self.has_more:
            return False

        self.page += 1
        await self._load(self.page, self.search_term, self._generation)
        return True

    def sort_by(self, column: SortColumn) -> SortConfig:
        self.sort = next_sort(self.sort, column)
        self.cities = sort_cities(self.cities, self.sort.column, self.sort.direction)
        return self.sort

    async def enrich_weather(self) -> int:
        """
        Fill in weather summaries for one capped batch of rows.

        Returns:
            Number of rows that received weather
        """
        generation = self._generation
        summaries = await fetch_weather_summaries(
            self.weather_client, self.cities, self.settings.weather_enrichment_limit
        )
        if generation != self._generation:
            logger.info(
                "Discarding weather for superseded search",
                extra={
                    "event": "stale_response_discarded",
                    "received": len(summaries),
                    "generation": generation,
                    "current_generation": self._generation,
                },
            )
            return 0
        if summaries:
            # Merge by id: the list may have been re-sorted or extended meanwhile.
            self.cities = attach_weather(self.cities, summaries)
        return len(summaries)

    async def retry(self) -> None:
        await self.search(self.search_term)

    async def wait_for_search(self) -> None:
        await self._debouncer.wait()

    def close(self) -> None:
        self._debouncer.cancel()

    async def _search_and_enrich(self, term: str) -> None:
        await self.search(term)
        if self.state == LoadState.LOADED:
            await self.enrich_weather()

    async def _load(self, page: int, term: str, generation: int) -> None:
        self.loading = True
        self.state = LoadState.LOADING
        try:
            new_cities = await self.directory.search(page, term)
        except WeatherAppException as e:
            if generation != self._generation:
                self._discard(page, term, generation)
                return
            logger.error(
                "Failed to load cities",
                extra={
                    "event": "city_page_failed",
                    "page": page,
                    "search_term": term,
                    "error": str(e),
                    "error_type": type(e).__name__,
                },
            )
            self.error = LOAD_ERROR_MESSAGE
            self.state = LoadState.FAILED
            self.loading = False
            return

        if generation != self._generation:
            self._discard(page, term, generation)
            return

        if page == 1:
            self.cities = merge_cities([], new_cities)
        else:
            self.cities = merge_cities(self.cities, new_cities)
        if not new_cities:
            self.has_more = False

        self.state = LoadState.LOADED
        self.loading = False
        logger.info(
            "City page loaded",
            extra={
                "event": "city_page_loaded",
                "page": page,
                "search_term": term,
                "received": len(new_cities),
                "total": len(self.cities),
                "has_more": self.has_more,
            },
        )

    def _discard(self, page: int, term: str, generation: int) -> None:
        logger.info(
            "Discarding stale city page",
            extra={
                "event": "stale_response_discarded",
                "page": page,
                "search_term": term,
                "generation": generation,
                "current_generation": self._generation,
            },
        )

    def snapshot(self, session_id: Optional[str] = None) -> CityListSnapshot:
        empty = (
            self.state == LoadState.LOADED and not self.loading and not self.cities
        )
        return CityListSnapshot(
            session_id=session_id,
            state=self.state,
            cities=[CityRowView.from_row(row) for row in self.cities],
            page=self.page,
            search_term=self.search_term,
            input_text=self.input_text,
            has_more=self.has_more,
            loading=self.loading,
            error=self.error,
            sort=self.sort,
            suggestions=self.suggestions,
            show_suggestions=self.show_suggestions,
            using_mock_data=self.weather_client.using_mock_data,
            empty_message=EMPTY_MESSAGE if empty else None,
        )
