"""
NGO Site Backend - Root & Health Check Routes
=============================================

What:  `GET /` banner and `GET /health` for monitoring and load balancers.
How:   Pings the record store (SELECT 1 or a TinyDB read) and checks that the
       upload directory is writable.

Status levels:
    - healthy:   record store reachable and upload dir writable (HTTP 200)
    - unhealthy: either check failed (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse

from ngo_api import __version__
from ngo_api.bootstrap import AppServices
from ngo_api.dependencies import get_services
from ngo_api.exceptions import StorageError
from ngo_api.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def root() -> str:
    return "NGO backend running! Use /api/members or /api/events"


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "A storage dependency is down", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(services: AppServices = Depends(get_services)):
    records_status = "connected"
    assets_status = "available"

    # ── Check Record Store ────────────────────────────────────────────────
    try:
        await services.member_records.ping()
    except StorageError as e:
        records_status = "disconnected"
        logger.warning("Health check: record store unreachable: %s", e.message)

    # ── Check Asset Directory ─────────────────────────────────────────────
    if not services.assets.check_writable():
        assets_status = "unavailable"
        logger.warning("Health check: upload dir not writable: %s", services.assets.upload_dir)

    healthy = records_status == "connected" and assets_status == "available"
    body = HealthResponse(
        status="healthy" if healthy else "unhealthy",
        version=__version__,
        backend=services.settings.storage_backend,
        records=records_status,
        assets=assets_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    return JSONResponse(status_code=200 if healthy else 503, content=body.model_dump())
