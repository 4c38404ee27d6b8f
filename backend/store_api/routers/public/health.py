"""
Health check endpoints.
Provides basic and detailed health status of the service and its dependencies.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shared.config.logging import store_api_logger as logger
from shared.config.settings import settings
from shared.infrastructure.db import get_db


router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
def health_check():
    """
    Basic health check endpoint.
    Returns service status without checking dependencies.
    """
    return {
        "status": "healthy",
        "service": "store-api",
        "environment": settings.environment,
    }


@router.get("/health/detailed")
def detailed_health_check(db: Session = Depends(get_db)):
    """
    Health check that verifies database connectivity.
    Returns 503 when the database is unreachable.
    """
    checks = {
        "service": "store-api",
        "environment": settings.environment,
        "dependencies": {},
        "cms": {"configured": bool(settings.cms_base_url)},
    }

    try:
        db.execute(text("SELECT 1"))
        checks["dependencies"]["database"] = {"status": "healthy"}
        checks["status"] = "healthy"
    except SQLAlchemyError as e:
        logger.error("Health check: database unreachable", error=str(e))
        checks["dependencies"]["database"] = {"status": "unhealthy", "error": type(e).__name__}
        checks["status"] = "degraded"
        return JSONResponse(content=checks, status_code=503)

    return checks
