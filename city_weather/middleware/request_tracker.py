import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from city_weather.utils.logger import setup_logger

logger = setup_logger(__name__)


class RequestTrackerMiddleware(BaseHTTPMiddleware):
    """
    Tags every request with an id, times it and logs the outcome.

    The id is stored on ``request.state.request_id`` for error bodies and
    echoed back in the ``X-Request-ID`` header.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = f"req_{uuid.uuid4().hex[:8]}_{int(time.time() * 1000)}"
        request.state.request_id = request_id
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            elapsed = time.perf_counter() - started
            logger.error(
                "Request failed",
                extra={
                    "event": "request_failed",
                    "request_id": request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "process_time": elapsed,
                    "error": str(e),
                    "error_type": type(e).__name__,
                },
            )
            return Response(
                content="Internal server error",
                status_code=500,
                headers={
                    "X-Process-Time": f"{elapsed:.3f}",
                    "X-Request-ID": request_id,
                },
            )

        elapsed = time.perf_counter() - started
        response.headers["X-Process-Time"] = f"{elapsed:.3f}"
        response.headers["X-Request-ID"] = request_id
        logger.info(
            "Request completed",
            extra={
                "event": "request_completed",
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "process_time": elapsed,
            },
        )
        return response
