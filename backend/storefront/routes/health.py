"""
Storefront Backend — Health Check Route
=========================================

What:  Liveness/readiness probe for Docker and load balancers.
How:   Probes the database with SELECT 1. Always answers 200; a database
       outage is reported as status "degraded" rather than failing the probe.
       Not gated and not rate limited.
"""

import time

from fastapi import APIRouter

from storefront import __version__
from storefront.database import check_database
from storefront.schemas.common import HealthResponse

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    database_ok = await check_database()
    return HealthResponse(
        status="ok" if database_ok else "degraded",
        version=__version__,
        database="connected" if database_ok else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
