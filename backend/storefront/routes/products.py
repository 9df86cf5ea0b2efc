"""
Storefront Backend — Product Route Handlers
=============================================

What:  Catalogue endpoints. All behind the gate.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.database import get_db_session
from storefront.middleware.gate import require_gate
from storefront.schemas.common import ErrorResponse
from storefront.schemas.product import NewProduct, ProductResponse, ProductUpdate
from storefront.services.product_service import product_service

router = APIRouter(
    prefix="/products",
    tags=["Products"],
    dependencies=[Depends(require_gate)],
    responses={
        401: {"description": "Missing/invalid API key or token", "model": ErrorResponse},
        403: {"description": "Rate limit exceeded", "model": ErrorResponse},
    },
)


@router.get("", response_model=List[ProductResponse], summary="List products (newest first)")
async def list_products(
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    db: AsyncSession = Depends(get_db_session),
) -> List[ProductResponse]:
    return await product_service.list_products(db, limit=limit, offset=offset)


@router.post(
    "",
    status_code=201,
    response_model=ProductResponse,
    responses={400: {"description": "Blank name or negative price", "model": ErrorResponse}},
    summary="Create a product",
)
async def create_product(
    payload: NewProduct,
    db: AsyncSession = Depends(get_db_session),
) -> ProductResponse:
    return await product_service.create_product(
        db, name=payload.name, price_cents=payload.price_cents
    )


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"description": "Product not found", "model": ErrorResponse}},
    summary="Get a product",
)
async def get_product(
    product_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> ProductResponse:
    return await product_service.get_product(db, product_id)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        400: {"description": "Blank name or negative price", "model": ErrorResponse},
        404: {"description": "Product not found", "model": ErrorResponse},
    },
    summary="Update a product (partial)",
)
async def update_product(
    product_id: UUID,
    payload: ProductUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> ProductResponse:
    return await product_service.update_product(
        db, product_id, name=payload.name, price_cents=payload.price_cents
    )


@router.delete(
    "/{product_id}",
    status_code=204,
    responses={
        404: {"description": "Product not found", "model": ErrorResponse},
        409: {"description": "Product has orders", "model": ErrorResponse},
    },
    summary="Delete a product",
)
async def delete_product(
    product_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await product_service.delete_product(db, product_id)
    return Response(status_code=204)
