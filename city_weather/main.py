from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from city_weather.api import routes, sessions
from city_weather.config import get_settings
from city_weather.middleware.request_tracker import RequestTrackerMiddleware
from city_weather.services.session_store import ListSessionStore
from city_weather.utils.logger import setup_logger

logger = setup_logger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Starting City Weather API...",
        extra={
            "event": "startup",
            "weather_provider": "live" if settings.has_credential else "mock",
        },
    )

    app.state.http_client = httpx.AsyncClient(timeout=settings.http_timeout)
    app.state.session_store = ListSessionStore(max_size=settings.session_store_size)

    yield

    logger.info("Shutting down City Weather API...")

    app.state.session_store.clear()
    await app.state.http_client.aclose()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

app.add_middleware(RequestTrackerMiddleware)

Instrumentator().instrument(app).expose(app, endpoint="/prometheus-metrics")

app.include_router(routes.router)
app.include_router(sessions.router)

if __name__ == "__main__":
    uvicorn.run(
        "city_weather.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level=settings.log_level.lower()
    )
