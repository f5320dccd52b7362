"""
Health check router.

Provides a health endpoint for liveness/readiness probes.
Reports unhealthy (503) when the store cannot be reached.
"""

import logging
from typing import Union

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from bandpulse.core.config import settings
from bandpulse.domain.artists.entities import utcnow
from bandpulse.infrastructure.database import get_engine, ping
from bandpulse.interfaces.artists.schemas import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Store unreachable"}},
    summary="Health check",
    description="Returns application health status, version and environment.",
)
def health_check(engine: Engine = Depends(get_engine)) -> Union[HealthResponse, JSONResponse]:
    """Return current application health status."""
    try:
        ping(engine)
    except SQLAlchemyError:
        logger.warning("Health check failed: store unreachable", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "unhealthy",
                "timestamp": utcnow().isoformat(),
                "error": "Database connection failed",
            },
        )

    return HealthResponse(
        status="ok",
        version=settings.version,
        environment=settings.environment,
        timestamp=utcnow(),
    )
