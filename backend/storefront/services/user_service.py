"""
Storefront Backend — User Service
===================================

What:  CRUD for customer accounts.
Who:   Called by the /users route handlers (behind the gate).

Error Handling Strategy:
    Business rule violations → ValidationError (400)
    Unknown id               → NotFoundError (404)
    Duplicate email, or deleting a user who still has orders
                             → ConflictError (409)
    Any other SQLAlchemy failure → DatabaseError (500, details logged only)
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List

from sqlalchemy import desc, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.exceptions import ConflictError, DatabaseError, NotFoundError, ValidationError
from storefront.models.user import User
from storefront.schemas.user import UserResponse

logger = logging.getLogger(__name__)


class UserService:
    """Stateless; receives the request's session on every call."""

    @staticmethod
    def _clean_email(email: str) -> str:
        cleaned = (email or "").strip()
        if not cleaned:
            raise ValidationError(message="email required", field="email")
        return cleaned

    async def _load(self, db: AsyncSession, user_id: uuid.UUID) -> User:
        try:
            user = await db.get(User, user_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching user %s: %s", user_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the user. Please try again.",
                context={"user_id": str(user_id)},
            )
        if user is None:
            raise NotFoundError(resource="user", resource_id=str(user_id))
        return user

    async def list_users(
        self, db: AsyncSession, limit: int = 50, offset: int = 0
    ) -> List[UserResponse]:
        """Newest users first."""
        try:
            result = await db.execute(
                select(User).order_by(desc(User.created_at)).limit(limit).offset(offset)
            )
            users = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing users: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve users. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return [UserResponse.model_validate(user) for user in users]

    async def get_user(self, db: AsyncSession, user_id: uuid.UUID) -> UserResponse:
        return UserResponse.model_validate(await self._load(db, user_id))

    async def create_user(self, db: AsyncSession, email: str) -> UserResponse:
        """
        Insert a new user.

        Raises:
            ValidationError: blank email
            ConflictError: email already registered
            DatabaseError: insert failed
        """
        email = self._clean_email(email)
        user = User(id=uuid.uuid4(), email=email, created_at=datetime.now(timezone.utc))

        try:
            db.add(user)
            await db.flush()
        except IntegrityError:
            raise ConflictError(
                message=f"A user with email '{email}' already exists",
                context={"email": email},
            )
        except SQLAlchemyError as e:
            logger.error("Database error creating user: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        logger.info("User created: %s", user.id)
        return UserResponse.model_validate(user)

    async def update_user(
        self, db: AsyncSession, user_id: uuid.UUID, email: str
    ) -> UserResponse:
        email = self._clean_email(email)
        user = await self._load(db, user_id)
        user.email = email

        try:
            await db.flush()
        except IntegrityError:
            raise ConflictError(
                message=f"A user with email '{email}' already exists",
                context={"email": email},
            )
        except SQLAlchemyError as e:
            logger.error("Database error updating user %s: %s", user_id, str(e), exc_info=True)
            raise DatabaseError(context={"user_id": str(user_id)})

        return UserResponse.model_validate(user)

    async def delete_user(self, db: AsyncSession, user_id: uuid.UUID) -> None:
        user = await self._load(db, user_id)

        try:
            await db.delete(user)
            await db.flush()
        except IntegrityError:
            # orders.user_id is ON DELETE RESTRICT
            raise ConflictError(
                message="User has orders and cannot be deleted",
                context={"user_id": str(user_id)},
            )
        except SQLAlchemyError as e:
            logger.error("Database error deleting user %s: %s", user_id, str(e), exc_info=True)
            raise DatabaseError(context={"user_id": str(user_id)})

        logger.info("User deleted: %s", user_id)


user_service = UserService()
