"""
Storefront Backend — Order Service
====================================

What:  Places orders and reads them back with their audit history.
Who:   Called by the /orders route handlers (behind the gate).

Order Placement Flow:
    ┌──────────┐    ┌──────────────┐    ┌──────────────┐    ┌──────────────┐
    │ quantity │───▶│ user exists? │───▶│ product      │───▶│ insert order │
    │   > 0    │    │              │    │ exists?      │    │ + history    │
    └──────────┘    └──────────────┘    └──────────────┘    └──────────────┘
         400              400                  400

    total_cents = product.price_cents * quantity, fixed at creation.
    Every order gets one 'created' history row in the same transaction.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.exceptions import DatabaseError, NotFoundError, StorefrontError, ValidationError
from storefront.models.order import Order, OrderHistory
from storefront.models.product import Product
from storefront.models.user import User
from storefront.schemas.order import OrderDetailResponse, OrderResponse
from storefront.schemas.product import MAX_CENTS

logger = logging.getLogger(__name__)

ORDER_CREATED = "created"


class OrderService:
    """Stateless; receives the request's session on every call."""

    async def create_order(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        product_id: uuid.UUID,
        quantity: int,
    ) -> OrderDetailResponse:
        """
        Place an order for `quantity` units of one product.

        Raises:
            ValidationError: quantity <= 0, unknown user, unknown product,
                             total beyond BIGINT
            DatabaseError: lookup or insert failed
        """
        if quantity <= 0:
            raise ValidationError(message="quantity must be positive", field="quantity")

        try:
            user = await db.get(User, user_id)
            if user is None:
                raise ValidationError(message="user not found", field="user_id")

            product = await db.get(Product, product_id)
            if product is None:
                raise ValidationError(message="product not found", field="product_id")

            total_cents = product.price_cents * quantity
            if total_cents > MAX_CENTS:
                raise ValidationError(message="order total too large", field="quantity")

            now = datetime.now(timezone.utc)
            order = Order(
                id=uuid.uuid4(),
                user_id=user.id,
                product_id=product.id,
                quantity=quantity,
                total_cents=total_cents,
                created_at=now,
            )
            order.history.append(
                OrderHistory(id=uuid.uuid4(), action=ORDER_CREATED, created_at=now)
            )
            db.add(order)
            await db.flush()

        except StorefrontError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error creating order: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not place the order. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info(
            "Order %s created: user=%s product=%s qty=%d total=%d",
            order.id, user_id, product_id, quantity, order.total_cents,
        )
        return OrderDetailResponse.model_validate(order)

    async def get_order(self, db: AsyncSession, order_id: uuid.UUID) -> OrderDetailResponse:
        try:
            order = await db.get(Order, order_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching order %s: %s", order_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the order. Please try again.",
                context={"order_id": str(order_id)},
            )
        if order is None:
            raise NotFoundError(resource="order", resource_id=str(order_id))
        return OrderDetailResponse.model_validate(order)

    async def list_orders(
        self,
        db: AsyncSession,
        user_id: Optional[uuid.UUID] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[OrderResponse]:
        """Newest orders first, optionally only those of one user."""
        query = select(Order)
        if user_id is not None:
            query = query.where(Order.user_id == user_id)
        query = query.order_by(desc(Order.created_at)).limit(limit).offset(offset)

        try:
            result = await db.execute(query)
            orders = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing orders: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve orders. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return [OrderResponse.model_validate(o) for o in orders]


order_service = OrderService()
