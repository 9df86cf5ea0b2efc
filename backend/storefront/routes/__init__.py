"""
Storefront Backend — API Routes Package
=========================================

Route Inventory:
    Public (no gate):
    - health.py:    GET  /health
    - auth.py:      POST /login

    Protected (API key → JWT → rate limit):
    - users.py:     GET/POST /users, GET/PUT/DELETE /users/{id}
    - products.py:  GET/POST /products, GET/PUT/DELETE /products/{id}
    - orders.py:    GET/POST /orders, GET /orders/{id}

Routes are thin: extract input, call a service, shape the response.
Protected routers declare `dependencies=[Depends(require_gate)]` once at
router level so no handler can be added without the gate.
"""
