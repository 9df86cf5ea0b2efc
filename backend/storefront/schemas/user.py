"""
Storefront Backend — User Schemas
===================================
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class UserRequest(BaseModel):
    """Body for POST /users and PUT /users/{id}. Blank emails are rejected with 400."""
    email: str = Field(description="User email address", max_length=255)


class UserResponse(BaseModel):
    id: uuid.UUID = Field(description="Unique user identifier (UUID)")
    email: str
    created_at: datetime = Field(description="When the user was created (UTC ISO 8601)")

    model_config = {"from_attributes": True}
