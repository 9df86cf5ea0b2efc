"""
Storefront Backend — Middleware Package
========================================

Two layers of request processing live here:

Application-wide Starlette middleware (every route):
    Request → [Request ID] → [Logging] → [CORS] → Router

Protected-route gate (users, products, orders only):
    Router → [API key] → [JWT] → [Rate limit] → Handler

The gate is not registered as Starlette middleware; it is an explicit
GatePipeline attached to protected routers through the `require_gate`
dependency, so /health and /login never pass through it.
"""
