"""Services package - business logic layer."""
from .cached import CachedFeatureFlagService, derive_cache_key
from .expiration import build_expiration_gate
from .feature_flags import FeatureFlagService
from .rules import evaluate_flag_for_user

__all__ = [
    "CachedFeatureFlagService",
    "FeatureFlagService",
    "build_expiration_gate",
    "derive_cache_key",
    "evaluate_flag_for_user",
]
