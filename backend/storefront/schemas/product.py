"""
Storefront Backend — Product Schemas
======================================
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

# BIGINT upper bound (products.price_cents, orders.total_cents)
MAX_CENTS = 2**63 - 1


class NewProduct(BaseModel):
    """Body for POST /products. price_cents < 0 is rejected with 400."""
    name: str = Field(max_length=255)
    price_cents: int = Field(le=MAX_CENTS, description="Unit price in cents")


class ProductUpdate(BaseModel):
    """Body for PUT /products/{id}. Omitted fields are left unchanged."""
    name: Optional[str] = Field(default=None, max_length=255)
    price_cents: Optional[int] = Field(default=None, le=MAX_CENTS)


class ProductResponse(BaseModel):
    id: uuid.UUID
    name: str
    price_cents: int
    created_at: datetime

    model_config = {"from_attributes": True}
