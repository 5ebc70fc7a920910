"""
Travel API Backend — Request Logging Middleware
=================================================

What:  One access-log line per HTTP request with status and duration, on
       the `travel_api.access` logger.

Levels:
    5xx → ERROR, 4xx → WARNING, everything else → INFO, except:
    - GET /uploads/... that succeed log at DEBUG; a place list makes the
      app fetch one image per card, which would drown the API lines
    - /health is not logged at all (health checks run every few seconds)

Never logged: request bodies (signup/login carry passwords) and uploaded
image bytes.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from travel_api.config import settings
from travel_api.middleware.request_id import request_id_var

logger = logging.getLogger("travel_api.access")

_QUIET_PATHS = {"/health"}


def access_log_level(path: str, status: int) -> int:
    """Log level for one finished request."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    if path.startswith(f"/{settings.upload_url_prefix}/"):
        return logging.DEBUG
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in _QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        # request.client is None under ASGI test transports
        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")
        status = response.status_code

        logger.log(
            access_log_level(path, status),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
