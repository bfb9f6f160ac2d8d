"""
Health check endpoints.

Reports service identity and the status of the database and cache.
"""

import logging
from typing import Dict, Any
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from sqlalchemy import text
from datetime import datetime, timezone

from job_tracker.core.cache import ApplicantCache, get_cache
from job_tracker.core.config import settings
from job_tracker.core.database import get_db
from job_tracker.schemas.applicant import HealthResponse

router = APIRouter(tags=["Health"])
logger = logging.getLogger(__name__)


@router.get("/health", status_code=status.HTTP_200_OK, response_model=HealthResponse)
async def health_check():
    """
    Basic health check endpoint.

    Returns 200 OK if the service is running.
    Use this for simple uptime monitoring and load balancer health checks.
    """
    return {
        "status": "healthy",
        "service": settings.SERVICE_NAME,
        "version": settings.VERSION,
    }


@router.get("/health/detailed", status_code=status.HTTP_200_OK)
def detailed_health_check(
    db: Session = Depends(get_db),
    cache: ApplicantCache = Depends(get_cache),
) -> Dict[str, Any]:
    """
    Detailed health check with dependency status.

    The database is required; the cache is optional, so an unreachable cache
    marks the service degraded rather than unhealthy.
    """
    health_status = {
        "status": "healthy",
        "service": settings.SERVICE_NAME,
        "version": settings.VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "checks": {}
    }

    try:
        db.execute(text("SELECT 1"))
        health_status["checks"]["database"] = {
            "status": "healthy",
            "message": "Database connection successful"
        }
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        health_status["status"] = "unhealthy"
        health_status["checks"]["database"] = {
            "status": "unhealthy",
            "message": f"Database error: {str(e)}"
        }

    if cache.ping():
        health_status["checks"]["cache"] = {
            "status": "healthy",
            "message": "Redis connection successful"
        }
    else:
        if health_status["status"] == "healthy":
            health_status["status"] = "degraded"
        health_status["checks"]["cache"] = {
            "status": "unhealthy",
            "message": "Redis unreachable, listings served from database"
        }

    return health_status
