"""Health check endpoints for liveness and readiness probes."""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

router = APIRouter()
logger = logging.getLogger(__name__)

SERVICE_NAME = "taskboard"


@router.get("/health")
async def health_check():
    """
    Liveness probe.
    Returns 200 OK if the service is running.
    """
    return {"status": "healthy", "service": SERVICE_NAME}


@router.get("/ready")
async def readiness_check(request: Request):
    """
    Readiness probe.
    Returns 200 OK once the database answers a trivial query, 503 otherwise.
    """
    try:
        with request.app.state.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Readiness check failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable", "service": SERVICE_NAME},
        )
    return {"status": "ready", "service": SERVICE_NAME}
