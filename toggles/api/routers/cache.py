"""
Evaluation cache management router.
Lets operators inspect and invalidate cached evaluation results.
"""
import logging

from fastapi import APIRouter, Depends

from toggles.api.dependencies import get_evaluation_cache
from toggles.config import get_settings
from toggles.core.cache import CacheInterface
from toggles.models.schemas import CacheStats

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/cache", tags=["cache"])


def _stats(cache: CacheInterface[bool]) -> CacheStats:
    settings = get_settings()
    return CacheStats(
        size=cache.size(),
        enabled=settings.EVALUATION_CACHE_ENABLED,
        ttl_seconds=settings.EVALUATION_CACHE_TTL_SEC,
    )


@router.get("", response_model=CacheStats, summary="Cache Stats")
async def cache_stats(
    cache: CacheInterface[bool] = Depends(get_evaluation_cache),
) -> CacheStats:
    return _stats(cache)


@router.delete("", response_model=CacheStats, summary="Clear Cache")
async def clear_cache(
    cache: CacheInterface[bool] = Depends(get_evaluation_cache),
) -> CacheStats:
    """Drop every cached evaluation."""
    cache.clear()
    logger.info("Evaluation cache cleared")
    return _stats(cache)


@router.post("/clear-expired", summary="Evict Expired Entries")
async def clear_expired(
    cache: CacheInterface[bool] = Depends(get_evaluation_cache),
) -> dict:
    removed = cache.clear_expired()
    return {"removed": removed, "size": cache.size()}


@router.delete("/{key}", summary="Delete Cache Entry")
async def delete_entry(
    key: str,
    cache: CacheInterface[bool] = Depends(get_evaluation_cache),
) -> dict:
    """Remove one cached evaluation by its key (e.g. `flag:123456`)."""
    return {"key": key, "deleted": cache.delete(key)}
