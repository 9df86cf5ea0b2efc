"""
Storefront Backend — Custom Exception Hierarchy
=================================================

What:  Errors raised by services and gate stages, each tied to one HTTP status.
How:   Every error carries a client-safe message plus a context dict.
       main.register_exception_handlers() turns them into the shared
       {"error", "message", "details", "request_id"} body.

Exception Hierarchy:
    StorefrontError (base)
    ├── ValidationError          → 400 (business rule violated)
    ├── UnauthorizedError        → 401 (API key, bearer token or login)
    ├── RateLimitExceededError   → 403 (window exhausted)
    ├── NotFoundError            → 404
    ├── ConflictError            → 409 (unique email, rows still referenced)
    └── DatabaseError            → 500

Gate rejections are terminal: a request that raises UnauthorizedError or
RateLimitExceededError never reaches its handler.
"""

from typing import Any, Dict, Optional


class StorefrontError(Exception):
    """
    Base exception for all Storefront application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only where a handler opts in)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(StorefrontError):
    """
    Raised when client input fails a business rule.

    When:    Blank email, negative price, non-positive quantity, an order that
             references an unknown user or product.
    HTTP:    400 Bad Request

    Schema-level problems (wrong JSON types, malformed UUIDs) are still
    reported by FastAPI as 422.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class UnauthorizedError(StorefrontError):
    """
    Raised when a request cannot be authenticated.

    When:    Missing or wrong x-api-key, missing or malformed Authorization
             header, bad/expired bearer token, wrong login credentials.
    HTTP:    401 Unauthorized

    The message stays generic. `reason` is a short code (missing_api_key,
    token_expired, ...) returned in the error details and used in logs.
    """

    def __init__(
        self,
        message: str = "Authentication required",
        reason: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if reason:
            ctx["reason"] = reason
        super().__init__(message=message, context=ctx)
        self.reason = reason


class RateLimitExceededError(StorefrontError):
    """
    Raised when the process-wide request window is exhausted.

    When:    After rate_limit_per_minute admitted requests in the current
             60-second window.
    HTTP:    403 Forbidden

    Response includes:
        - retry_after: Seconds until the current window resets
        - Retry-After header for HTTP-compliant clients
    """

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after


class NotFoundError(StorefrontError):
    """
    Raised when a requested resource does not exist.

    When:    GET/PUT/DELETE on /users/{id}, /products/{id}, /orders/{id}
             with an unknown UUID.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(StorefrontError):
    """
    Raised when a write violates a uniqueness or referential constraint.

    When:    Creating a user with an email that already exists, deleting a
             user or product that still has orders.
    HTTP:    409 Conflict
    """

    def __init__(
        self,
        message: str = "The request conflicts with existing data",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(StorefrontError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. Detailed error
    info is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
