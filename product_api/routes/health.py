"""
Product Catalog API — Health Check Route
=========================================

What:  Health check endpoint for monitoring and load balancer checks.
How:   Pings the product store with a trivial query and reports uptime.
Who:   Docker health checks, load balancers, monitoring.

Status levels:
    - healthy:   store reachable
    - unhealthy: store unreachable (still HTTP 200; the body carries the state)
"""

import logging
import time

from fastapi import APIRouter, Depends

from product_api import __version__
from product_api.dependencies import get_product_store
from product_api.schemas.product import HealthResponse
from product_api.services.store import ProductStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    store: ProductStore = Depends(get_product_store),
) -> HealthResponse:
    """
    Check the service and its store.

    The access log middleware skips this path; a failed ping is logged by
    the store itself.
    """
    connected = await store.ping()

    return HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
