"""
Health Check Routes - liveness and readiness endpoints.

Neither endpoint contacts a model backend; provider availability shows up
per query in ModelResponse.error.
"""
import os
from datetime import datetime

from fastapi import APIRouter, Depends

from filecontext import __version__
from filecontext.api.dependencies import get_app_settings
from filecontext.core.config import Settings
from filecontext.core.logging_config import get_logger
from filecontext.models.query import HealthResponse

logger = get_logger(__name__)

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check endpoint",
)
async def health_check() -> HealthResponse:
    """Report that the API is running."""
    logger.debug("Health check requested")

    return HealthResponse(
        status="healthy",
        version=__version__,
        timestamp=datetime.utcnow()
    )


@router.get(
    "/ready",
    response_model=HealthResponse,
    summary="Readiness check endpoint",
)
async def readiness_check(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    """
    Report whether the service can accept queries.

    The service is 'degraded' when the storage directory exists but is not
    writable, since uploads would fail.
    """
    logger.debug("Readiness check requested")

    storage_dir = os.path.abspath(settings.storage_dir)
    writable = not os.path.isdir(storage_dir) or os.access(storage_dir, os.W_OK)

    return HealthResponse(
        status="ready" if writable else "degraded",
        version=__version__,
        timestamp=datetime.utcnow()
    )
