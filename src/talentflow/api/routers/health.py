"""Health check endpoint."""

from datetime import datetime

from fastapi import APIRouter

from talentflow.core.config import get_settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Report that the service is up."""
    settings = get_settings()
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
        "database_enabled": settings.database.enabled,
        "timestamp": datetime.utcnow().isoformat(),
    }
