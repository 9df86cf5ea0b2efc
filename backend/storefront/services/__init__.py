"""
Storefront Backend — Services Layer
=====================================

What:  Business logic between routes (HTTP) and the database.

Service Inventory:
    - TokenService:   Issue/verify HS256 bearer tokens (login + gate)
    - UserService:    Customer account CRUD
    - ProductService: Catalogue CRUD
    - OrderService:   Order placement with audit history

Services take the request's AsyncSession as an argument and hold no
per-request state, so one module-level instance serves every request.
"""
