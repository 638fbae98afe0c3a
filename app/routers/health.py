"""Health check endpoints."""
from fastapi import APIRouter
import logging

from ..core.config import settings
from ..core.database import engine, health_check_db

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["Health"])

@router.get("/")
async def health_check():
    """Basic health check"""
    return {
        "status": "healthy",
        "service": "EduApp API",
        "version": settings.app_version,
    }

@router.get("/db-health")
async def database_health():
    """Database health check with a SELECT 1 round trip"""
    healthy = await health_check_db()
    return {
        "status": "healthy" if healthy else "unhealthy",
        "database": engine.dialect.name,
    }
