"""
Storefront Backend — Order Schemas
====================================

What:  Order creation payload and responses.
Why:   OrderDetailResponse adds the audit history; the list endpoint returns
       the compact OrderResponse to keep pages small.
"""

import uuid
from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

# INTEGER upper bound (orders.quantity)
MAX_QUANTITY = 2**31 - 1


class NewOrder(BaseModel):
    """Body for POST /orders. quantity <= 0 is rejected with 400."""
    user_id: uuid.UUID
    product_id: uuid.UUID
    quantity: int = Field(le=MAX_QUANTITY)


class OrderHistoryItem(BaseModel):
    action: str = Field(description="What happened to the order, e.g. 'created'")
    created_at: datetime

    model_config = {"from_attributes": True}


class OrderResponse(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    product_id: uuid.UUID
    quantity: int
    total_cents: int = Field(description="price_cents * quantity at creation time")
    created_at: datetime

    model_config = {"from_attributes": True}


class OrderDetailResponse(OrderResponse):
    history: List[OrderHistoryItem] = Field(default_factory=list)
