"""
Storefront Backend — User Route Handlers
==========================================

What:  CRUD endpoints for customer accounts. All behind the gate.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.database import get_db_session
from storefront.middleware.gate import require_gate
from storefront.schemas.common import ErrorResponse
from storefront.schemas.user import UserRequest, UserResponse
from storefront.services.user_service import user_service

# Every route on this router passes API key → JWT → rate limit first
router = APIRouter(
    prefix="/users",
    tags=["Users"],
    dependencies=[Depends(require_gate)],
    responses={
        401: {"description": "Missing/invalid API key or token", "model": ErrorResponse},
        403: {"description": "Rate limit exceeded", "model": ErrorResponse},
    },
)


@router.get("", response_model=List[UserResponse], summary="List users (newest first)")
async def list_users(
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    db: AsyncSession = Depends(get_db_session),
) -> List[UserResponse]:
    return await user_service.list_users(db, limit=limit, offset=offset)


@router.post(
    "",
    status_code=201,
    response_model=UserResponse,
    responses={
        400: {"description": "Blank email", "model": ErrorResponse},
        409: {"description": "Email already registered", "model": ErrorResponse},
    },
    summary="Create a user",
)
async def create_user(
    payload: UserRequest,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await user_service.create_user(db, email=payload.email)


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    responses={404: {"description": "User not found", "model": ErrorResponse}},
    summary="Get a user",
)
async def get_user(
    user_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await user_service.get_user(db, user_id)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    responses={
        400: {"description": "Blank email", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
        409: {"description": "Email already registered", "model": ErrorResponse},
    },
    summary="Change a user's email",
)
async def update_user(
    user_id: UUID,
    payload: UserRequest,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await user_service.update_user(db, user_id, email=payload.email)


@router.delete(
    "/{user_id}",
    status_code=204,
    responses={
        404: {"description": "User not found", "model": ErrorResponse},
        409: {"description": "User has orders", "model": ErrorResponse},
    },
    summary="Delete a user",
)
async def delete_user(
    user_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await user_service.delete_user(db, user_id)
    return Response(status_code=204)
