"""
Tests for the city list session routes.
"""

import time
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from city_weather.config import get_settings
from city_weather.exceptions import TransportException
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


@pytest.fixture
def page_of(city_factory):
    def build(start: int, count: int = 20):
        return [city_factory(f"c{i}", name=f"City {i:03d}", population=i) for i in range(start, start + count)]

    return build


def create_session(client) -> dict:
    response = client.post("/sessions/cities")
    assert response.status_code == 201
    return response.json()


class TestSessionLifecycle:
    def test_create_loads_first_page_with_weather(self, client, directory, page_of):
        directory.search.return_value = page_of(0)

        body = create_session(client)

        assert body["session_id"]
        assert body["state"] == "loaded"
        assert body["page"] == 1
        assert len(body["cities"]) == 20
        assert all(city["weather"] is not None for city in body["cities"])
        directory.search.assert_awaited_once_with(1, "")

    def test_get_snapshot(self, client, directory, page_of):
        directory.search.return_value = page_of(0)
        session_id = create_session(client)["session_id"]

        response = client.get(f"/sessions/cities/{session_id}")

        assert response.status_code == 200
        assert response.json()["session_id"] == session_id

    def test_unknown_session(self, client):
        assert client.get("/sessions/cities/unknown").status_code == 404
        assert client.post("/sessions/cities/unknown/retry").status_code == 404

    def test_delete_session(self, client, directory, page_of):
        directory.search.return_value = page_of(0)
        session_id = create_session(client)["session_id"]

        assert client.delete(f"/sessions/cities/{session_id}").status_code == 204
        assert client.get(f"/sessions/cities/{session_id}").status_code == 404
        assert client.delete(f"/sessions/cities/{session_id}").status_code == 404


class TestSessionInteractions:
    def test_scroll_loads_next_page(self, client, directory, page_of):
        directory.search.side_effect = [page_of(0), page_of(20)]
        session_id = create_session(client)["session_id"]

        response = client.post(f"/sessions/cities/{session_id}/visible", json={"index": 15})

        body = response.json()
        assert body["page"] == 2
        assert len(body["cities"]) == 40
        assert body["has_more"] is True

    def test_scroll_on_other_row_does_nothing(self, client, directory, page_of):
        directory.search.return_value = page_of(0)
        session_id = create_session(client)["session_id"]

        body = client.post(f"/sessions/cities/{session_id}/visible", json={"index": 3}).json()

        assert body["page"] == 1
        assert directory.search.await_count == 1

    def test_sort_toggles(self, client, directory, page_of):
        directory.search.return_value = page_of(0, 3)
        session_id = create_session(client)["session_id"]

        first = client.post(f"/sessions/cities/{session_id}/sort", json={"column": "population"}).json()
        second = client.post(f"/sessions/cities/{session_id}/sort", json={"column": "population"}).json()

        assert first["sort"] == {"column": "population", "direction": "asc"}
        assert [c["population"] for c in first["cities"]] == [0, 1, 2]
        assert second["sort"] == {"column": "population", "direction": "desc"}
        assert [c["population"] for c in second["cities"]] == [2, 1, 0]

    def test_invalid_sort_column(self, client, directory, page_of):
        directory.search.return_value = page_of(0, 3)
        session_id = create_session(client)["session_id"]

        response = client.post(f"/sessions/cities/{session_id}/sort", json={"column": "weather"})

        assert response.status_code == 422

    def test_input_returns_suggestions_and_debounces(self, client, directory, city_factory):
        directory.search.side_effect = [
            [city_factory("1", name="Springfield"), city_factory("2", name="Boston")],
            [city_factory("1", name="Springfield")],
        ]
        session_id = create_session(client)["session_id"]

        body = client.post(f"/sessions/cities/{session_id}/input", json={"text": "spr"}).json()

        assert body["suggestions"] == ["Springfield"]
        assert body["show_suggestions"] is True
        assert body["input_text"] == "spr"
        assert body["search_term"] == ""

        deadline = time.monotonic() + 2
        snapshot = body
        while time.monotonic() < deadline:
            snapshot = client.get(f"/sessions/cities/{session_id}").json()
            if snapshot["search_term"] == "spr" and not snapshot["loading"]:
                break
            time.sleep(0.02)

        assert snapshot["search_term"] == "spr"
        directory.search.assert_awaited_with(1, "spr")

    def test_select_suggestion(self, client, directory, city_factory):
        directory.search.side_effect = [
            [city_factory("1", name="Springfield")],
            [city_factory("1", name="Springfield")],
        ]
        session_id = create_session(client)["session_id"]

        body = client.post(
            f"/sessions/cities/{session_id}/select", json={"suggestion": "Springfield"}
        ).json()

        assert body["search_term"] == "Springfield"
        assert body["show_suggestions"] is False
        assert body["cities"][0]["weather"] is not None

    def test_empty_search_shows_message(self, client, directory, city_factory):
        directory.search.side_effect = [[city_factory("1")], []]
        session_id = create_session(client)["session_id"]

        body = client.post(
            f"/sessions/cities/{session_id}/select", json={"suggestion": "spring"}
        ).json()

        assert body["cities"] == []
        assert body["has_more"] is False
        assert body["loading"] is False
        assert body["empty_message"] == "No cities found. Try a different search term."

    def test_failure_then_retry(self, client, directory, page_of):
        directory.search.side_effect = [TransportException("down"), page_of(0)]

        failed = create_session(client)
        assert failed["state"] == "failed"
        assert failed["error"] == "Failed to load cities. Please try again later."

        body = client.post(f"/sessions/cities/{failed['session_id']}/retry").json()

        assert body["state"] == "loaded"
        assert body["error"] is None
        assert len(body["cities"]) == 20

    def test_weather_batch_endpoint(self, client, directory, page_of):
        directory.search.return_value = page_of(0, 25)
        session_id = create_session(client)["session_id"]

        before = client.get(f"/sessions/cities/{session_id}").json()
        after = client.post(f"/sessions/cities/{session_id}/weather").json()

        assert sum(city["weather"] is not None for city in before["cities"]) == 20
        assert sum(city["weather"] is not None for city in after["cities"]) == 25
