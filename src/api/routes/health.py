"""
Health check endpoints.

Provides endpoints for monitoring application health and status.
"""

from typing import Any, Dict

from fastapi import APIRouter

from analysis.analyzer import get_size_analyzer
from config.settings import get_settings
from services.session_manager import get_session_manager


router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "service": "size-advisor-api",
    }


@router.get("/health/detailed")
async def detailed_health_check() -> Dict[str, Any]:
    """
    Detailed health check.

    Checks:
    - Configuration loaded
    - Vision model credential present
    - Active sessions
    """
    settings = get_settings()
    analyzer = get_size_analyzer()

    return {
        "status": "healthy" if analyzer.configured else "degraded",
        "service": "size-advisor-api",
        "environment": settings.environment,
        "checks": {
            "config": "ok",
            "analyzer": {
                "status": "configured" if analyzer.configured else "not_configured",
                "model": analyzer.model,
            },
            "sessions": get_session_manager().get_stats(),
        },
    }


@router.get("/ready")
async def readiness_check() -> Dict[str, str]:
    """
    Kubernetes-style readiness probe.

    Not ready while the API key is missing: every analysis would fail.
    """
    if not get_size_analyzer().configured:
        return {"status": "not_ready", "reason": "api_key_not_configured"}
    return {"status": "ready"}


@router.get("/live")
async def liveness_check() -> Dict[str, str]:
    """Kubernetes-style liveness probe."""
    return {"status": "alive"}
