"""
Storefront Backend — Product Service
======================================

What:  Catalogue CRUD. Prices are integer cents and never negative.
Who:   Called by the /products route handlers (behind the gate).
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import desc, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.exceptions import ConflictError, DatabaseError, NotFoundError, ValidationError
from storefront.models.product import Product
from storefront.schemas.product import ProductResponse

logger = logging.getLogger(__name__)


def _validate_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError(message="name required", field="name")
    return cleaned


def _validate_price(price_cents: int) -> int:
    if price_cents < 0:
        raise ValidationError(message="price_cents must be positive", field="price_cents")
    return price_cents


class ProductService:
    """Stateless; receives the request's session on every call."""

    async def _load(self, db: AsyncSession, product_id: uuid.UUID) -> Product:
        try:
            product = await db.get(Product, product_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching product %s: %s", product_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the product. Please try again.",
                context={"product_id": str(product_id)},
            )
        if product is None:
            raise NotFoundError(resource="product", resource_id=str(product_id))
        return product

    async def list_products(
        self, db: AsyncSession, limit: int = 50, offset: int = 0
    ) -> List[ProductResponse]:
        """Newest products first."""
        try:
            result = await db.execute(
                select(Product).order_by(desc(Product.created_at)).limit(limit).offset(offset)
            )
            products = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing products: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve products. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return [ProductResponse.model_validate(p) for p in products]

    async def get_product(self, db: AsyncSession, product_id: uuid.UUID) -> ProductResponse:
        return ProductResponse.model_validate(await self._load(db, product_id))

    async def create_product(
        self, db: AsyncSession, name: str, price_cents: int
    ) -> ProductResponse:
        product = Product(
            id=uuid.uuid4(),
            name=_validate_name(name),
            price_cents=_validate_price(price_cents),
            created_at=datetime.now(timezone.utc),
        )

        try:
            db.add(product)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating product: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        logger.info("Product created: %s (%d cents)", product.id, product.price_cents)
        return ProductResponse.model_validate(product)

    async def update_product(
        self,
        db: AsyncSession,
        product_id: uuid.UUID,
        name: Optional[str] = None,
        price_cents: Optional[int] = None,
    ) -> ProductResponse:
        """
        Partial update; omitted fields keep their values.

        Existing orders keep their total_cents snapshot.
        """
        product = await self._load(db, product_id)
        if name is not None:
            product.name = _validate_name(name)
        if price_cents is not None:
            product.price_cents = _validate_price(price_cents)

        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating product %s: %s", product_id, str(e), exc_info=True)
            raise DatabaseError(context={"product_id": str(product_id)})

        return ProductResponse.model_validate(product)

    async def delete_product(self, db: AsyncSession, product_id: uuid.UUID) -> None:
        product = await self._load(db, product_id)

        try:
            await db.delete(product)
            await db.flush()
        except IntegrityError:
            raise ConflictError(
                message="Product has orders and cannot be deleted",
                context={"product_id": str(product_id)},
            )
        except SQLAlchemyError as e:
            logger.error("Database error deleting product %s: %s", product_id, str(e), exc_info=True)
            raise DatabaseError(context={"product_id": str(product_id)})

        logger.info("Product deleted: %s", product_id)


product_service = ProductService()
