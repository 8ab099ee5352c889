"""
Domain models using Pydantic.
All data structures for flag evaluation.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


# =============================================================================
# Domain Models (Internal)
# =============================================================================


class Flag(BaseModel):
    """
    Feature flag record with its targeting rules.
    Owned by the Flag Store; treated as an immutable value during evaluation.
    """

    model_config = ConfigDict(frozen=True)

    id: Optional[int] = Field(default=None, description="Store-assigned identifier")
    name: str = Field(..., min_length=1, description="Unique flag name")
    everyone: Optional[bool] = Field(
        default=None,
        description="Force on (true) or off (false) for everyone; null defers to other rules",
    )
    percent: Optional[float] = Field(
        default=None,
        ge=0,
        le=99.9,
        description="Percentage rollout (0-99.9)",
    )
    roles: Optional[List[str]] = Field(default=None, description="Roles with the flag enabled")
    groups: Optional[List[str]] = Field(default=None, description="Groups with the flag enabled")
    users: Optional[List[str]] = Field(default=None, description="User IDs with the flag enabled")
    note: Optional[str] = Field(default=None, description="Where the flag is used and what it does")
    expires: Optional[datetime] = Field(default=None, description="Expiration timestamp")
    created: datetime = Field(default_factory=utcnow)
    modified: datetime = Field(default_factory=utcnow)

    @field_validator("roles", "groups", "users")
    @classmethod
    def _empty_list_is_absent(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        return value or None

    @field_validator("expires", "created", "modified")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def is_expired(self, now: datetime) -> bool:
        """True when an expiration is set and has been reached."""
        return self.expires is not None and self.expires <= now


class EvaluationContext(BaseModel):
    """Per-request description of who is asking."""

    user: Optional[str] = Field(default=None, description="User identifier")
    roles: Optional[List[str]] = Field(default=None, description="Roles the user holds")
    groups: Optional[List[str]] = Field(default=None, description="Groups the user belongs to")


class UserHash(BaseModel):
    """Rollout bucket assignment for a user (debugging aid)."""

    user_id: str
    hash: int = Field(..., ge=0, description="Unsigned 32-bit MurmurHash3 value")
    bucket: int = Field(..., ge=0, le=99, description="hash mod 100")


# =============================================================================
# API Models (External)
# =============================================================================


class FlagActiveResponse(BaseModel):
    """Single flag evaluation response."""

    name: str
    is_active: bool
    user: Optional[str] = None
    roles: Optional[List[str]] = None
    groups: Optional[List[str]] = None


class BatchEvaluationRequest(EvaluationContext):
    """Batch evaluation request; omit `names` to evaluate every flag."""

    names: Optional[List[str]] = Field(
        default=None,
        description="Flag names to evaluate (all flags when omitted)",
    )


class BatchEvaluationResponse(BaseModel):
    """Batch evaluation response."""

    results: Dict[str, bool] = Field(..., description="Flag name -> active")


class CacheStats(BaseModel):
    """Evaluation cache statistics."""

    size: int = Field(..., description="Entries stored, including expired ones not yet evicted")
    enabled: bool
    ttl_seconds: int


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: Dict[str, Any] = Field(..., description="Error details")
