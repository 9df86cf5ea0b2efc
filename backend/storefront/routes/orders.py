"""
Storefront Backend — Order Route Handlers
===========================================

What:  Place orders and read them back. All behind the gate.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.database import get_db_session
from storefront.middleware.gate import require_gate
from storefront.schemas.common import ErrorResponse
from storefront.schemas.order import NewOrder, OrderDetailResponse, OrderResponse
from storefront.services.order_service import order_service

router = APIRouter(
    prefix="/orders",
    tags=["Orders"],
    dependencies=[Depends(require_gate)],
    responses={
        401: {"description": "Missing/invalid API key or token", "model": ErrorResponse},
        403: {"description": "Rate limit exceeded", "model": ErrorResponse},
    },
)


@router.post(
    "",
    status_code=201,
    response_model=OrderDetailResponse,
    responses={
        400: {
            "description": "Non-positive quantity, unknown user or unknown product",
            "model": ErrorResponse,
        },
    },
    summary="Place an order",
)
async def create_order(
    payload: NewOrder,
    db: AsyncSession = Depends(get_db_session),
) -> OrderDetailResponse:
    return await order_service.create_order(
        db,
        user_id=payload.user_id,
        product_id=payload.product_id,
        quantity=payload.quantity,
    )


@router.get("", response_model=List[OrderResponse], summary="List orders (newest first)")
async def list_orders(
    user_id: Optional[UUID] = Query(default=None, description="Only orders of this user"),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    db: AsyncSession = Depends(get_db_session),
) -> List[OrderResponse]:
    return await order_service.list_orders(db, user_id=user_id, limit=limit, offset=offset)


@router.get(
    "/{order_id}",
    response_model=OrderDetailResponse,
    responses={404: {"description": "Order not found", "model": ErrorResponse}},
    summary="Get an order with its history",
)
async def get_order(
    order_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> OrderDetailResponse:
    return await order_service.get_order(db, order_id)
