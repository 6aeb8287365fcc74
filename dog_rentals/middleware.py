"""
FastAPI middleware for request tracing and correlation.
"""

from __future__ import annotations

import uuid
from typing import Awaitable, Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add unique request IDs to each HTTP request.

    For every incoming request this middleware:
    1. Stores a UUID in request.state.request_id for route handlers
    2. Binds it into structlog contextvars so every log line carries it
    3. Returns it to the client in the X-Request-ID response header
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        structlog.contextvars.bind_contextvars(http_request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("http_request_id")

        response.headers["X-Request-ID"] = request_id
        return response
