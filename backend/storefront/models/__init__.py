"""
Storefront Backend — ORM Models
================================

Importing this package registers every table with Base.metadata, which is
what Alembic's --autogenerate inspects.
"""

from storefront.models.order import Order, OrderHistory
from storefront.models.product import Product
from storefront.models.user import User

__all__ = ["User", "Product", "Order", "OrderHistory"]
