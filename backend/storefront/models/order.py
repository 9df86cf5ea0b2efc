"""
Storefront Backend — Order and OrderHistory SQLAlchemy Models
===============================================================

What:  ORM models for the `orders` and `order_history` tables.
Why:   An order snapshots the total at creation time; the history table is
       an append-only audit trail of what happened to each order.

Relationships:
    users 1 ──< orders >── 1 products
    orders 1 ──< order_history

Foreign keys are RESTRICT on delete: a user or product that has orders
cannot be deleted (surfaced to clients as 409 Conflict).
"""

import uuid
from datetime import datetime, timezone
from typing import List

from sqlalchemy import BigInteger, ForeignKey, Index, Integer, String, text
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.database import Base


class Order(Base):
    """A single-product purchase by a user."""

    __tablename__ = "orders"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        server_default=text("gen_random_uuid()"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
    )

    product_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("products.id", ondelete="RESTRICT"),
        nullable=False,
    )

    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    # Snapshot of price_cents * quantity; later price changes don't rewrite it
    total_cents: Mapped[int] = mapped_column(BigInteger, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    history: Mapped[List["OrderHistory"]] = relationship(
        back_populates="order",
        order_by="OrderHistory.created_at",
        lazy="selectin",
    )

    __table_args__ = (
        Index("idx_orders_created_at", created_at.desc()),
        Index("idx_orders_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<Order(id={self.id}, user_id={self.user_id}, "
            f"product_id={self.product_id}, total_cents={self.total_cents})>"
        )


class OrderHistory(Base):
    """One audit entry for an order (e.g. action='created')."""

    __tablename__ = "order_history"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        server_default=text("gen_random_uuid()"),
    )

    order_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
    )

    action: Mapped[str] = mapped_column(String(50), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    order: Mapped[Order] = relationship(back_populates="history")

    __table_args__ = (
        Index("idx_order_history_order_id", "order_id"),
    )

    def __repr__(self) -> str:
        return f"<OrderHistory(order_id={self.order_id}, action='{self.action}')>"
