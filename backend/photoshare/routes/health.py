"""
PhotoShare Backend — Health Check Route
=========================================

What:  Health check endpoint for monitoring and load balancer checks.
How:   Runs `SELECT 1` against the database and reports whether media-host
       credentials are configured (no upload is attempted).

Status levels:
    - healthy:   database reachable, media host configured (HTTP 200)
    - degraded:  database reachable, uploads will fail (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from photoshare import __version__
from photoshare.config import settings
from photoshare.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
)
async def health_check(request: Request):
    db_status = "connected"
    overall = "healthy"

    try:
        await request.app.state.database.ping()
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    media_status = "configured" if settings.media_configured else "unconfigured"
    if media_status != "configured" and overall == "healthy":
        overall = "degraded"

    report = HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        media=media_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    status_code = 503 if overall == "unhealthy" else 200
    return JSONResponse(status_code=status_code, content=report.model_dump())
