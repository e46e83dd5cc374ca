"""
Employee Roster API: Service Root & Health Check Routes
==========================================================

What:  GET / (greeting with a pointer to the docs) and GET /health.
Why:   Container health checks and load balancers need a cheap probe that
       says whether the store behind the service is reachable.
How:   /health runs SELECT 1 through the storage client.

Status levels:
    - healthy:   store reachable (HTTP 200)
    - unhealthy: store unreachable or never connected (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from roster import __version__
from roster.database import StorageClient, get_storage_client
from roster.schemas.employee import HealthResponse, RootResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Module-level: initialized once when the module loads
_start_time = time.time()


@router.get("/", response_model=RootResponse, summary="Service greeting")
async def root(request: Request) -> RootResponse:
    return RootResponse(
        message=f"{request.app.title} is running",
        docs=request.app.docs_url or "",
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Store unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(
    client: StorageClient = Depends(get_storage_client),
):
    """
    Probe the store and report aggregate status with uptime.

    Returns 503 (same body shape) when the store does not answer.
    """
    db_status = "disconnected"
    if client.is_connected and await client.ping():
        db_status = "connected"
    else:
        logger.warning("Health check: database unreachable")

    body = HealthResponse(
        status="healthy" if db_status == "connected" else "unhealthy",
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    if db_status != "connected":
        return JSONResponse(status_code=503, content=body.model_dump())
    return body
