"""
Health check router for observability.
"""
from fastapi import APIRouter

from toggles.api.dependencies import (
    get_evaluation_cache,
    get_feature_flag_service,
    get_flag_store,
)
from toggles.config import get_settings

router = APIRouter(tags=["health"])


@router.get("/health", summary="Health Check")
async def health_check() -> dict:
    """Basic health check endpoint."""
    return {"status": "healthy"}


@router.get("/health/ready", summary="Readiness Check")
async def readiness_check() -> dict:
    """
    Readiness check for Kubernetes.
    Reports flag store, evaluation cache and expiration handling state.
    """
    settings = get_settings()

    return {
        "status": "ready",
        "flag_store": {
            "flags": len(get_flag_store()),
        },
        "evaluation_cache": {
            "enabled": settings.EVALUATION_CACHE_ENABLED,
            "size": get_evaluation_cache().size(),
            "ttl_seconds": settings.EVALUATION_CACHE_TTL_SEC,
        },
        "expiration": {
            "policy": settings.EXPIRED_FLAG_POLICY,
            "enforced": get_feature_flag_service().has_expiration_gate,
        },
    }
