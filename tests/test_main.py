"""
Tests for the main application module.
"""

import pytest
from fastapi.testclient import TestClient

from city_weather.main import app


class TestMainApplication:
    """Test suite for main FastAPI application configuration.

    Validates application setup, middleware configuration,
    router registration, and API documentation endpoints.
    """

    @pytest.fixture
    def client(self):
        """Create a FastAPI test client with the lifespan running.

        Yields:
            TestClient: Configured test client for API testing
        """
        with TestClient(app) as client:
            yield client

    def test_app_creation(self):
        """Test FastAPI application initialization."""
        assert app.title == "City Weather API"
        assert app.version == "1.0.0"
        assert app.docs_url == "/docs"
        assert app.redoc_url == "/redoc"
        assert app.openapi_url == "/openapi.json"

    def test_cors_middleware_added(self):
        middleware_classes = [m.cls.__name__ for m in app.user_middleware]
        assert "CORSMiddleware" in str(middleware_classes)

    def test_request_tracker_middleware_added(self):
        """Test that request tracking middleware is installed."""
        middleware_classes = [m.cls.__name__ for m in app.user_middleware]
        assert "RequestTrackerMiddleware" in str(middleware_classes)

    def test_routers_included(self):
        """Test API router registration.

        Verifies that the stateless city routes and the list
        session routes are mounted.
        """
        routes = [route.path for route in app.routes]

        assert "/health" in routes
        assert "/cities" in routes
        assert "/cities/{city_id}" in routes
        assert "/sessions/cities" in routes
        assert "/sessions/cities/{session_id}/input" in routes

    def test_prometheus_metrics_endpoint(self):
        routes = [route.path for route in app.routes]
        assert any("/prometheus-metrics" in route for route in routes)

    def test_lifespan_sets_up_state(self, client):
        """Test that startup creates the shared HTTP client and session store."""
        assert app.state.http_client is not None
        assert len(app.state.session_store) == 0

    def test_request_headers(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.headers["X-Request-ID"].startswith("req_")
        assert "X-Process-Time" in response.headers
