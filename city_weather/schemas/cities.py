"""
This module defines schemas for the city list endpoints.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from city_weather.definitions.data_sources import LoadState, SortColumn
from city_weather.schemas.common import CityRowView, SortConfig


class CityListSnapshot(BaseModel):
    """
    Complete state of a city list session, ready for rendering.
    """

    session_id: Optional[str] = Field(None, description="List session identifier")
    state: LoadState
    cities: List[CityRowView] = Field(default_factory=list)
    page: int = Field(..., ge=1, description="Last requested page (1-based)")
    search_term: str = Field("", description="Search term of the loaded results")
    input_text: str = Field("", description="Text currently in the search box")
    has_more: bool = Field(..., description="Whether further pages are believed to exist")
    loading: bool = False
    error: Optional[str] = None
    sort: Optional[SortConfig] = None
    suggestions: List[str] = Field(default_factory=list)
    show_suggestions: bool = False
    using_mock_data: bool = Field(..., description="Weather comes from the mock generator")
    empty_message: Optional[str] = Field(
        None, description="Shown instead of a spinner when nothing matched"
    )


class CityPageResponse(BaseModel):
    """
    A single stateless page of cities with weather summaries.
    """

    page: int
    search_term: str
    cities: List[CityRowView]
    has_more: bool
    sort: Optional[SortConfig] = None
    using_mock_data: bool


class SearchInputRequest(BaseModel):
    text: str = Field("", max_length=100)


class SuggestionSelectRequest(BaseModel):
    suggestion: str = Field(..., min_length=1, max_length=100)


class RowVisibleRequest(BaseModel):
    index: int = Field(..., ge=0)


class SortRequest(BaseModel):
    column: SortColumn
