"""
Flags API router.
Exposes flag lookup, single and batch evaluation, and bucket debugging.

Read-only: flags change only by re-seeding the store (FLAG_SEED_FILE) or
through InMemoryFlagStore.add/replace/remove in process.
"""
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query

from toggles.api.dependencies import get_flag_evaluator, get_flag_store
from toggles.core.exceptions import NotFoundError
from toggles.models.schemas import (
    BatchEvaluationRequest,
    BatchEvaluationResponse,
    EvaluationContext,
    Flag,
    FlagActiveResponse,
    UserHash,
)
from toggles.repositories.memory import InMemoryFlagStore
from toggles.services.cached import CachedFeatureFlagService
from toggles.services.feature_flags import FeatureFlagService

router = APIRouter(prefix="/v1", tags=["flags"])

Evaluator = Union[FeatureFlagService, CachedFeatureFlagService]


@router.get("/flags", response_model=List[Flag], summary="List Flags")
async def list_flags(
    store: InMemoryFlagStore = Depends(get_flag_store),
) -> List[Flag]:
    """Return every flag, ordered by id."""
    return await store.list_flags()


@router.get("/flags/{name}", response_model=Flag, summary="Get Flag")
async def get_flag(
    name: str,
    store: InMemoryFlagStore = Depends(get_flag_store),
) -> Flag:
    """Return a single flag by name."""
    flag = await store.get_by_name(name)
    if flag is None:
        raise NotFoundError("Flag", name)
    return flag


@router.get(
    "/flags/{name}/active",
    response_model=FlagActiveResponse,
    summary="Check Flag For User",
    description="""
    Evaluate one flag for a user context.

    Rules apply in order, first match wins:
    everyone override, user list, groups, roles, percentage rollout.
    Unknown flags are reported as inactive.
    """,
)
async def is_active(
    name: str,
    user: Optional[str] = Query(default=None, description="User identifier"),
    roles: Optional[List[str]] = Query(default=None, description="User roles"),
    groups: Optional[List[str]] = Query(default=None, description="User groups"),
    evaluator: Evaluator = Depends(get_flag_evaluator),
) -> FlagActiveResponse:
    context = EvaluationContext(user=user, roles=roles, groups=groups)
    active = await evaluator.evaluate_one(name, context)
    return FlagActiveResponse(
        name=name,
        is_active=active,
        user=user,
        roles=roles,
        groups=groups,
    )


@router.post(
    "/flags/evaluate",
    response_model=BatchEvaluationResponse,
    summary="Evaluate Flags",
)
async def evaluate_flags(
    request: BatchEvaluationRequest,
    evaluator: Evaluator = Depends(get_flag_evaluator),
) -> BatchEvaluationResponse:
    """Evaluate the requested flags (or all flags) for one user context."""
    context = EvaluationContext(
        user=request.user,
        roles=request.roles,
        groups=request.groups,
    )
    results = await evaluator.evaluate_many(request.names, context)
    return BatchEvaluationResponse(results=results)


@router.get(
    "/users/{user_id}/hash",
    response_model=UserHash,
    summary="Hash User ID",
)
async def hash_user(user_id: str) -> UserHash:
    """Show the hash and rollout bucket a user is assigned to."""
    return FeatureFlagService.hash_user_id(user_id)
