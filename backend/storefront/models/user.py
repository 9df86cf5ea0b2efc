"""
Storefront Backend — User SQLAlchemy Model
============================================

What:  ORM model representing the `users` table in PostgreSQL.
Who:   Used by UserService for CRUD and by OrderService to validate order owners.

Table Design:
    - UUID primary key, generated in Python so the service can return it
      without a round trip
    - email: unique; updates and deletes are addressed by id, not by email
    - created_at: UTC with timezone; lists are ordered newest first
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Index, String, text
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID
from sqlalchemy.orm import Mapped, mapped_column

from storefront.database import Base


class User(Base):
    """A customer account that can place orders."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        server_default=text("gen_random_uuid()"),
    )

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Login/contact email, unique across users",
    )

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_users_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
