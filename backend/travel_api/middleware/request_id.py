"""
Travel API Backend — Request ID Middleware
============================================

What:  Tags each request with an ID and returns it in X-Request-ID.
Why:   The mobile client shows the ID next to a failed like, comment or
       upload; the same ID is in every log line and in the error body, so a
       report like "request 1f2e3d4c failed" maps straight to the logs.

Client-supplied IDs:
    Accepted when they are 1-64 characters of [A-Za-z0-9._-]. Anything else
    (newlines, spaces, very long values) is replaced by a generated ID, so a
    header value can never forge extra log lines.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
_VALID_REQUEST_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    """Short random ID (8 hex chars)."""
    return uuid.uuid4().hex[:8]


def pick_request_id(header_value: Optional[str]) -> str:
    """The client's ID when it is safe to log, otherwise a fresh one."""
    if header_value and _VALID_REQUEST_ID.fullmatch(header_value):
        return header_value
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Sets request_id_var and request.state.request_id, echoes the header."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = pick_request_id(request.headers.get(REQUEST_ID_HEADER))
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
