"""
Tests for the stateless city routes.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from city_weather.config import get_settings
from city_weather.exceptions import CityNotFoundException, TransportException
from city_weather.main import app
from city_weather.services.weather_client import WeatherClient
from city_weather.utils.dependencies import get_city_directory, get_weather_client


@pytest.fixture
def directory():
    return AsyncMock()


@pytest.fixture
def client(directory, mock_settings, generator):
    weather_client = WeatherClient(settings=mock_settings, http_client=AsyncMock(), generator=generator)

    app.dependency_overrides[get_city_directory] = lambda: directory
    app.dependency_overrides[get_weather_client] = lambda: weather_client
    app.dependency_overrides[get_settings] = lambda: mock_settings

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


class TestHealth:
    def test_reports_mock_provider(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["services"] == {"weather_provider": "mock"}


class TestListCities:
    """Test cases for GET /cities."""

    def test_page_with_weather(self, client, directory, city_factory):
        directory.search.return_value = [
            city_factory("a", name="Oslo", latitude=0.0, longitude=0.0),
            city_factory("b", name="Bern", latitude=1.5, longitude=0.0),
        ]

        response = client.get("/cities", params={"page": 2, "q": "o"})

        assert response.status_code == 200
        directory.search.assert_awaited_once_with(2, "o")
        body = response.json()
        assert body["page"] == 2
        assert body["has_more"] is True
        assert body["using_mock_data"] is True
        assert [city["name"] for city in body["cities"]] == ["Oslo", "Bern"]
        assert body["cities"][0]["weather"] == {"temp": 15, "condition": "clear sky"}
        assert body["cities"][0]["icon"] == "☀️"
        assert body["cities"][1]["weather"]["temp"] == 17

    def test_sorted_page(self, client, directory, city_factory):
        directory.search.return_value = [
            city_factory("a", population=5),
            city_factory("b", population=1),
            city_factory("c", population=3),
        ]

        response = client.get("/cities", params={"sort": "population", "direction": "desc"})

        body = response.json()
        assert [city["population"] for city in body["cities"]] == [5, 3, 1]
        assert body["sort"] == {"column": "population", "direction": "desc"}

    def test_empty_page(self, client, directory):
        directory.search.return_value = []

        response = client.get("/cities", params={"q": "spring"})

        assert response.status_code == 200
        assert response.json()["cities"] == []
        assert response.json()["has_more"] is False

    def test_directory_failure(self, client, directory):
        directory.search.side_effect = TransportException("Failed to fetch cities: 500", 500)

        response = client.get("/cities")

        assert response.status_code == 502
        body = response.json()
        assert body["error"] == "City directory unavailable"
        assert body["request_id"].startswith("req_")

    def test_invalid_page(self, client):
        assert client.get("/cities", params={"page": 0}).status_code == 422


class TestCityDetail:
    """Test cases for GET /cities/{city_id}."""

    def test_detail(self, client, directory, city_factory):
        directory.get_by_id.return_value = city_factory("abc", name="Lyon", latitude=0.0, longitude=0.0)

        response = client.get("/cities/abc")

        assert response.status_code == 200
        body = response.json()
        assert body["state"] == "loaded"
        assert body["city"]["name"] == "Lyon"
        assert body["current"]["temp"] == 15
        assert len(body["forecast"]) == 5
        assert body["forecast"][0]["date"] == "2024-03-01"
        assert body["icon"] == "☀️"
        assert body["background"] == ["yellow-100", "blue-200"]

    def test_not_found(self, client, directory):
        directory.get_by_id.side_effect = CityNotFoundException("missing")

        response = client.get("/cities/missing")

        assert response.status_code == 404
        body = response.json()
        assert body["state"] == "failed"
        assert body["error_kind"] == "not_found"
        assert body["current"] is None

    def test_directory_unavailable(self, client, directory):
        directory.get_by_id.side_effect = TransportException("down")

        response = client.get("/cities/abc")

        assert response.status_code == 502
        assert response.json()["error"] == "Failed to load weather data. Please try again later."
