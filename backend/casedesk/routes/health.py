"""
CaseDesk Backend: Liveness and Health Routes
============================================

What:  ``GET /`` answers a fixed plain-text string as long as the process
       is serving. ``GET /health`` additionally probes the database.
Who:   Container health checks, load balancers, humans with curl.

Status levels for /health:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import PlainTextResponse

from casedesk import __version__
from casedesk.database import DataStore, get_store
from casedesk.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

LIVENESS_TEXT = "Backend is running!"

# Module-level: uptime is measured from the first import
_start_time = time.time()


@router.get("/", response_class=PlainTextResponse, summary="Liveness probe")
async def root() -> str:
    return LIVENESS_TEXT


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(
    response: Response,
    store: DataStore = Depends(get_store),
) -> HealthResponse:
    """
    Check the database with ``SELECT 1`` and report aggregate status.
    """
    if await store.ping():
        db_status, overall = "connected", "healthy"
    else:
        db_status, overall = "disconnected", "unhealthy"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
