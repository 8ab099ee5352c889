"""Core infrastructure components."""
from .cache import CacheInterface, InMemoryCache
from .exceptions import (
    AppException,
    ConfigurationError,
    NotFoundError,
    SeedFileError,
    ValidationError,
)
from .hashing import bucket_for, murmur_hash

__all__ = [
    "AppException",
    "ConfigurationError",
    "CacheInterface",
    "InMemoryCache",
    "NotFoundError",
    "SeedFileError",
    "ValidationError",
    "bucket_for",
    "murmur_hash",
]
