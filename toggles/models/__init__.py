"""Models package - domain entities and interfaces."""
from .interfaces import ExpirationGate, FlagStore
from .schemas import (
    BatchEvaluationRequest,
    BatchEvaluationResponse,
    CacheStats,
    ErrorResponse,
    EvaluationContext,
    Flag,
    FlagActiveResponse,
    UserHash,
)

__all__ = [
    # Interfaces
    "ExpirationGate",
    "FlagStore",
    # Schemas
    "BatchEvaluationRequest",
    "BatchEvaluationResponse",
    "CacheStats",
    "ErrorResponse",
    "EvaluationContext",
    "Flag",
    "FlagActiveResponse",
    "UserHash",
]
