"""
Storefront Backend — Login Route
==================================

What:  POST /login exchanges the admin credentials for a bearer token.
Why:   Protected routes require both the API key and a token from here.
How:   Constant-time comparison against ADMIN_USER / ADMIN_PASS; on success
       the app's TokenService signs a token for the admin username.

This route is public (no gate) but still answers 401 on bad credentials.
"""

import hmac
import logging

from fastapi import APIRouter, Request

from storefront.exceptions import UnauthorizedError
from storefront.schemas.auth import LoginRequest, LoginResponse
from storefront.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


def _matches(supplied: str, expected: str) -> bool:
    return hmac.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        200: {"description": "Login successful", "model": LoginResponse},
        401: {"description": "Unauthorized", "model": ErrorResponse},
    },
    summary="Obtain a bearer token",
)
async def login(body: LoginRequest, request: Request) -> LoginResponse:
    app_settings = request.app.state.settings
    token_service = request.app.state.token_service

    # Evaluate both comparisons so timing doesn't reveal which one failed
    user_ok = _matches(body.username, app_settings.admin_user)
    pass_ok = _matches(body.password, app_settings.admin_pass)
    if not (user_ok and pass_ok):
        logger.warning("Failed login attempt for username=%r", body.username)
        raise UnauthorizedError(message="Invalid username or password", reason="bad_credentials")

    token = token_service.issue(app_settings.admin_user)
    logger.info("Issued token for %s", app_settings.admin_user)
    return LoginResponse(token=token, expires_in=token_service.expiry_seconds)
