"""
Storefront Backend — Pydantic Request/Response Schemas
=======================================================

Schemas are separate from SQLAlchemy models so API contracts change
independently of the database schema and never leak internal fields.
"""
