"""
Storefront Backend — Request Logging Middleware
=================================================

What:  One access-log line per request: method, path, status, duration,
       request ID, client IP and, for requests that passed the gate, the
       token subject.
How:   Wraps call_next, measures with perf_counter, picks the level from
       the status class (5xx ERROR, 4xx WARNING, otherwise INFO).

Never logged: request bodies, x-api-key, Authorization headers or tokens.
GET /health is skipped (probed every few seconds by load balancers).
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from storefront.middleware.request_id import request_id_var

logger = logging.getLogger("storefront.access")

SKIPPED_PATHS = {"/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Structured access logging correlated by request ID."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        rid = request_id_var.get("")
        auth = getattr(request.state, "auth", None)
        subject = auth.subject if auth is not None else None

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s as %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            subject or "-",
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
                "subject": subject,
            },
        )

        return response
