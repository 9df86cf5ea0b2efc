"""
Storefront Backend — Application Package Initializer
====================================================

E-commerce API package. Run with `python -m storefront` or
`uvicorn storefront.main:app`; migrations live in backend/alembic.

Layers (each imports only the ones below it):

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Gate (API key → JWT → rate limit) │  ← Runs before protected handlers
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Users, products, orders, tokens
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
