"""
Storefront Backend — Authentication Schemas
=============================================

What:  Login payloads and the decoded bearer-token claims.
"""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str = Field(description="Admin username")
    password: str = Field(description="Admin password")


class LoginResponse(BaseModel):
    """
    What:  Returned by POST /login on valid credentials.
    How:   Clients send the token back as `Authorization: Bearer <token>`
           together with the x-api-key header on protected routes.
    """
    token: str = Field(description="Signed HS256 JWT")
    token_type: str = Field(default="bearer")
    expires_in: int = Field(description="Seconds until the token expires")


class TokenClaims(BaseModel):
    """Claims carried by every issued token (seconds since epoch)."""
    sub: str = Field(description="Subject the token was issued to")
    iat: int = Field(description="Issued-at timestamp")
    exp: int = Field(description="Expiry timestamp")
