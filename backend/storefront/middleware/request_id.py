"""
Storefront Backend — Request ID Middleware
============================================

What:  Assigns each request a correlation ID and returns it as X-Request-ID.
Why:   Gate rejections, handler errors and access logs for one request all
       carry the same ID, and error bodies include it for support tickets.
How:   Reuses a client-supplied X-Request-ID when it is short and printable,
       otherwise generates a short UUID prefix. Stored in a ContextVar so
       loggers and exception handlers can read it without the request.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

MAX_CLIENT_REQUEST_ID_LENGTH = 64


def _accept_client_id(value: str | None) -> bool:
    return bool(value) and len(value) <= MAX_CLIENT_REQUEST_ID_LENGTH and value.isprintable()


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Sets request_id_var and request.state.request_id; echoes the header."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        supplied = request.headers.get("X-Request-ID")
        rid = supplied if _accept_client_id(supplied) else str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
