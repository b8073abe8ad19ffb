"""Health endpoints."""

import time
from datetime import UTC, datetime

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from stayboard import __version__
from stayboard.models import DetailedHealthResponse, HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Basic health check endpoint.

    Returns simple status for Docker healthcheck and basic monitoring.
    For detailed health status, use `/health/ready`.
    """
    return HealthResponse(status="ok", version=__version__)


@router.get("/health/live", response_model=HealthResponse)
async def liveness_check():
    """Liveness probe - is the application process running?"""
    return HealthResponse(status="ok", version=__version__)


@router.get("/health/ready", response_model=DetailedHealthResponse)
async def readiness_check(request: Request):
    """Readiness probe - can the application serve traffic?

    Checks local dependencies only. Weather and rate providers are not
    probed: their failures degrade content instead of failing requests.

    **Returns:**
    - 200: Application is ready to serve requests
    - 503: Application is not ready (dependency failure)
    """
    state = request.app.state
    checks: dict[str, str] = {}

    client = getattr(state, "http_client", None)
    checks["http_client"] = "ok" if client is not None and not client.is_closed else "failed"

    store = getattr(state, "listing_store", None)
    if store is None:
        checks["listing_store"] = "failed"
    else:
        checks["listing_store"] = f"ok ({len(await store.list_all())} listings)"

    startup_time = getattr(state, "startup_time", None)
    if startup_time is not None:
        checks["uptime_seconds"] = str(int(time.time() - startup_time))
    checks["requests_served"] = str(getattr(state, "request_count", 0))

    all_healthy = checks["http_client"] == "ok" and checks["listing_store"].startswith("ok")
    status_code = 200 if all_healthy else 503
    status = "healthy" if all_healthy else "unhealthy"

    return JSONResponse(
        status_code=status_code,
        content=DetailedHealthResponse(
            status=status,
            version=__version__,
            timestamp=datetime.now(UTC),
            checks=checks,
        ).model_dump(mode="json"),
    )
