"""
Storefront Backend — Bearer Token Issuer/Verifier
===================================================

What:  Issues and verifies HS256 JWTs with the shared JWT_SECRET.
Who:   POST /login issues tokens; the gate's JWT stage verifies them.

Claims:
    sub  Subject (the admin username)
    iat  Issued-at, seconds since epoch
    exp  Expiry, iat + jwt_expiry_seconds (default 1 hour)

Verification checks the signature, the token structure and the exp claim
(PyJWT's default temporal validation). Every failure is reported as
UnauthorizedError; the underlying PyJWT reason is kept in the error context
for logs.
"""

import logging
import time
from typing import Callable

import jwt

from storefront.exceptions import UnauthorizedError
from storefront.schemas.auth import TokenClaims

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
DEFAULT_EXPIRY_SECONDS = 60 * 60


class TokenService:
    """
    Stateless signer/verifier bound to one secret.

    Args:
        secret: HMAC secret shared by issuer and verifier
        expiry_seconds: Lifetime of issued tokens
        clock: Wall-clock source for iat/exp (seconds since epoch)
    """

    def __init__(
        self,
        secret: str,
        expiry_seconds: int = DEFAULT_EXPIRY_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self._secret = secret
        self.expiry_seconds = expiry_seconds
        self._clock = clock

    def issue(self, subject: str) -> str:
        """Sign a token for `subject` valid for expiry_seconds from now."""
        now = int(self._clock())
        payload = {
            "sub": subject,
            "iat": now,
            "exp": now + self.expiry_seconds,
        }
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode and validate a token.

        Returns:
            TokenClaims with sub, iat, exp

        Raises:
            UnauthorizedError: bad signature, malformed token, expired token,
                               or missing required claims
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                options={"require": ["sub", "iat", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise UnauthorizedError(message="Token has expired", reason="token_expired")
        except jwt.InvalidTokenError as e:
            raise UnauthorizedError(
                message="Invalid authentication token",
                reason="token_invalid",
                context={"error_type": type(e).__name__},
            )

        return TokenClaims(sub=payload["sub"], iat=payload["iat"], exp=payload["exp"])
