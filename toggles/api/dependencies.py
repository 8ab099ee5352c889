"""
Dependency injection container.
Creates and wires all application components.
Uses FastAPI's dependency injection system.
"""
from functools import lru_cache
from typing import Union

from toggles.config import get_settings
from toggles.core.cache import CacheInterface, InMemoryCache
from toggles.repositories.memory import InMemoryFlagStore, load_flags_file
from toggles.services.cached import CachedFeatureFlagService
from toggles.services.expiration import build_expiration_gate
from toggles.services.feature_flags import FeatureFlagService


# =============================================================================
# Singleton Instances (Application Lifetime)
# =============================================================================


@lru_cache()
def get_flag_store() -> InMemoryFlagStore:
    """Get singleton flag store, seeded from FLAG_SEED_FILE when configured."""
    settings = get_settings()
    flags = load_flags_file(settings.FLAG_SEED_FILE) if settings.FLAG_SEED_FILE else []
    return InMemoryFlagStore(flags)


@lru_cache()
def get_evaluation_cache() -> CacheInterface[bool]:
    """Get singleton evaluation result cache."""
    return InMemoryCache[bool]()


@lru_cache()
def get_feature_flag_service() -> FeatureFlagService:
    """Get singleton evaluation service."""
    settings = get_settings()
    return FeatureFlagService(
        flag_store=get_flag_store(),
        on_expired=build_expiration_gate(settings.EXPIRED_FLAG_POLICY),
    )


@lru_cache()
def get_cached_feature_flag_service() -> CachedFeatureFlagService:
    """Get singleton caching facade over the evaluation service."""
    settings = get_settings()
    return CachedFeatureFlagService(
        service=get_feature_flag_service(),
        cache=get_evaluation_cache(),
        ttl_seconds=settings.EVALUATION_CACHE_TTL_SEC,
    )


# =============================================================================
# Request-Scoped Dependencies (Per-Request Lifetime)
# =============================================================================


def get_flag_evaluator() -> Union[FeatureFlagService, CachedFeatureFlagService]:
    """
    Get the evaluator used by the API.
    The cached facade unless EVALUATION_CACHE_ENABLED is off.
    """
    if get_settings().EVALUATION_CACHE_ENABLED:
        return get_cached_feature_flag_service()
    return get_feature_flag_service()


# =============================================================================
# Cleanup Functions
# =============================================================================


def clear_caches() -> None:
    """Clear all cached singleton instances (for testing)."""
    get_flag_store.cache_clear()
    get_evaluation_cache.cache_clear()
    get_feature_flag_service.cache_clear()
    get_cached_feature_flag_service.cache_clear()
