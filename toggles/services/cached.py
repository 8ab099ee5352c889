"""
Cached evaluation facade.
Memoizes single-flag evaluations in a pluggable TTL cache.
"""
import logging
from typing import Dict, List, Optional, Sequence

from toggles.core import telemetry
from toggles.core.cache import CacheInterface
from toggles.core.hashing import murmur_hash
from toggles.models.schemas import EvaluationContext
from toggles.services.feature_flags import FeatureFlagService

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300  # 5 minutes
CACHE_KEY_PREFIX = "flag:"


def derive_cache_key(
    name: str,
    user: Optional[str] = None,
    roles: Optional[Sequence[str]] = None,
    groups: Optional[Sequence[str]] = None,
) -> str:
    """
    Build a canonical cache key for an evaluation request.

    Roles and groups are sorted so their order does not matter, and absent
    values collide with empty ones. The joined string is hashed, so distinct
    requests may (rarely) share a key; no exact-match check is made.
    """
    canonical = "|".join([
        name,
        user or "",
        ",".join(sorted(roles or [])),
        ",".join(sorted(groups or [])),
    ])
    return f"{CACHE_KEY_PREFIX}{murmur_hash(canonical)}"


class CachedFeatureFlagService:
    """
    FeatureFlagService wrapper caching `evaluate_one` results.

    True and False results are cached alike. Concurrent misses for the same
    key may each reach the store; the last write wins.

    `evaluate_many` is passed through uncached.
    """

    def __init__(
            self,
            service: FeatureFlagService,
            cache: CacheInterface[bool],
            ttl_seconds: float = DEFAULT_TTL_SECONDS,
    ) -> None:
        """
        Args:
            service: Underlying evaluation service
            cache: Cache backend for evaluation results
            ttl_seconds: Lifetime of each cached result
        """
        self._service = service
        self._cache = cache
        self._ttl_seconds = ttl_seconds

    @property
    def cache(self) -> CacheInterface[bool]:
        """Backing cache, exposed for manual invalidation."""
        return self._cache

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    async def evaluate_one(self, name: str, context: EvaluationContext) -> bool:
        """Check a flag, answering from the cache when possible."""
        key = derive_cache_key(name, context.user, context.roles, context.groups)

        cached = self._cache.get(key)
        if cached is not None:
            telemetry.record_cache_lookup(hit=True)
            logger.debug(f"Cache hit for flag '{name}'", extra={"flag": name, "cache_key": key})
            return cached

        telemetry.record_cache_lookup(hit=False)
        result = await self._service.evaluate_one(name, context)
        self._cache.set(key, result, self._ttl_seconds)
        logger.debug(
            f"Cache miss for flag '{name}', stored {result}",
            extra={"flag": name, "cache_key": key},
        )
        return result

    async def evaluate_many(
            self,
            names: Optional[List[str]],
            context: EvaluationContext,
    ) -> Dict[str, bool]:
        """Batch evaluation, not cached."""
        return await self._service.evaluate_many(names, context)

    def invalidate(self, name: str, context: EvaluationContext) -> bool:
        """Drop the cached result for one request shape, returns True if it was cached."""
        key = derive_cache_key(name, context.user, context.roles, context.groups)
        return self._cache.delete(key)
