"""
This module defines the routes for stateful city list sessions.

A session owns one CityListView: it keeps loaded pages, the search box, the
debounced query and the sort between requests.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from city_weather.config import Settings, get_settings
from city_weather.definitions.data_sources import LoadState
from city_weather.schemas.cities import (
    CityListSnapshot,
    SearchInputRequest,
    SuggestionSelectRequest,
    RowVisibleRequest,
    SortRequest,
)
from city_weather.services.city_directory import CityDirectoryClient
from city_weather.services.city_list import CityListView
from city_weather.services.session_store import ListSessionStore
from city_weather.services.weather_client import WeatherClient
from city_weather.utils.dependencies import (
    get_city_directory,
    get_weather_client,
    get_session_store,
)
from city_weather.utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/sessions/cities", tags=["sessions"])


async def get_view(
    session_id: str,
    store: ListSessionStore = Depends(get_session_store),
) -> CityListView:
    view = store.get(session_id)
    if view is None:
        raise HTTPException(
            status_code=404,
            detail={"error": "Session not found", "session_id": session_id},
        )
    return view


async def _refresh(view: CityListView) -> None:
    if view.state == LoadState.LOADED:
        await view.enrich_weather()


@router.post("", response_model=CityListSnapshot, status_code=201)
async def create_session(
    request: Request,
    store: ListSessionStore = Depends(get_session_store),
    directory: CityDirectoryClient = Depends(get_city_directory),
    weather_client: WeatherClient = Depends(get_weather_client),
    settings: Settings = Depends(get_settings),
) -> CityListSnapshot:
    """
    Open a city list session and load its first page.
    """
    view = CityListView(directory, weather_client, settings)
    session_id = store.create(view)

    await view.load_initial()
    await _refresh(view)

    logger.info(
        "List session created",
        extra={
            "event": "session_created",
            "session_id": session_id,
            "state": view.state.value,
            "request_id": getattr(request.state, "request_id", None),
        },
    )
    return view.snapshot(session_id)


@router.get("/{session_id}", response_model=CityListSnapshot)
async def get_session(session_id: str, view: CityListView = Depends(get_view)):
    return view.snapshot(session_id)


@router.post("/{session_id}/input", response_model=CityListSnapshot)
async def search_input(
    session_id: str,
    body: SearchInputRequest,
    view: CityListView = Depends(get_view),
) -> CityListSnapshot:
    """
    Record search box input.

    Suggestions come back immediately; the query itself runs once input has
    been quiet for the debounce period.
    """
    view.on_input(body.text)
    return view.snapshot(session_id)


@router.post("/{session_id}/select", response_model=CityListSnapshot)
async def select_suggestion(
    session_id: str,
    body: SuggestionSelectRequest,
    view: CityListView = Depends(get_view),
) -> CityListSnapshot:
    await view.select_suggestion(body.suggestion)
    await _refresh(view)
    return view.snapshot(session_id)


@router.post("/{session_id}/visible", response_model=CityListSnapshot)
async def row_visible(
    session_id: str,
    body: RowVisibleRequest,
    view: CityListView = Depends(get_view),
) -> CityListSnapshot:
    """
    Report that a table row scrolled into view.
    """
    if await view.on_row_visible(body.index):
        await _refresh(view)
    return view.snapshot(session_id)


@router.post("/{session_id}/sort", response_model=CityListSnapshot)
async def sort_session(
    session_id: str,
    body: SortRequest,
    view: CityListView = Depends(get_view),
) -> CityListSnapshot:
    view.sort_by(body.column)
    return view.snapshot(session_id)


@router.post("/{session_id}/retry", response_model=CityListSnapshot)
async def retry_session(
    session_id: str,
    view: CityListView = Depends(get_view),
) -> CityListSnapshot:
    await view.retry()
    await _refresh(view)
    return view.snapshot(session_id)


@router.post("/{session_id}/weather", response_model=CityListSnapshot)
async def enrich_session(
    session_id: str,
    view: CityListView = Depends(get_view),
) -> CityListSnapshot:
    """
    Fetch weather for the next batch of rows that have none yet.
    """
    await view.enrich_weather()
    return view.snapshot(session_id)


@router.delete("/{session_id}", status_code=204)
async def close_session(
    session_id: str,
    store: ListSessionStore = Depends(get_session_store),
) -> Response:
    if not store.remove(session_id):
        raise HTTPException(
            status_code=404,
            detail={"error": "Session not found", "session_id": session_id},
        )
    return Response(status_code=204)
