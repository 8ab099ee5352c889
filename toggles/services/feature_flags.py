"""
Feature flag evaluation service.
Fetches flags from the Flag Store, applies the expiration gate, then the rule evaluator.
"""
import inspect
import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional

from toggles.core import telemetry
from toggles.core.hashing import bucket_for, murmur_hash
from toggles.models.interfaces import ExpirationGate, FlagStore
from toggles.models.schemas import EvaluationContext, Flag, UserHash, utcnow
from toggles.services.rules import evaluate_flag_for_user

logger = logging.getLogger(__name__)


class FeatureFlagService:
    """
    Evaluates flags stored in a FlagStore.

    Responsibilities:
    - Resolve flag names through the store (single or batch lookup)
    - Consult the expiration gate for flags past their expiry
    - Apply rule evaluation

    Store and gate errors propagate unchanged; a missing flag evaluates to False.
    """

    def __init__(
            self,
            flag_store: FlagStore,
            on_expired: Optional[ExpirationGate] = None,
            clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """
        Initialize evaluation service with dependencies.

        Args:
            flag_store: Source of flag records
            on_expired: Optional gate consulted for expired flags; when absent,
                expired flags are evaluated as if they had not expired
            clock: Returns the current timezone-aware time
        """
        self._store = flag_store
        self._on_expired = on_expired
        self._clock = clock

    @property
    def has_expiration_gate(self) -> bool:
        """Whether expired flags are routed through a gate."""
        return self._on_expired is not None

    async def evaluate_one(self, name: str, context: EvaluationContext) -> bool:
        """
        Check whether a single flag is active for the given context.

        Args:
            name: Flag name
            context: User, roles and groups of the request

        Returns:
            True if active, False if inactive or the flag does not exist
        """
        flag = await self._store.get_by_name(name)
        if flag is None:
            logger.debug(f"Flag '{name}' not found, evaluating as inactive")
            telemetry.record_evaluation(telemetry.OUTCOME_NOT_FOUND)
            return False

        return await self._evaluate(flag, context, self._clock())

    async def evaluate_many(
            self,
            names: Optional[List[str]],
            context: EvaluationContext,
    ) -> Dict[str, bool]:
        """
        Check several flags with a single store lookup.

        Args:
            names: Flag names to evaluate, or None for every flag in the store
            context: User, roles and groups of the request

        Returns:
            Mapping of flag name to active status, in requested (or store) order;
            names missing from the store map to False
        """
        if names is None:
            flags = await self._store.list_flags()
            requested = [flag.name for flag in flags]
        else:
            flags = await self._store.get_many_by_name(names) if names else []
            requested = names

        by_name = {flag.name: flag for flag in flags}
        now = self._clock()
        results: Dict[str, bool] = {}

        for name in requested:
            flag = by_name.get(name)
            if flag is None:
                telemetry.record_evaluation(telemetry.OUTCOME_NOT_FOUND)
                results[name] = False
                continue
            results[name] = await self._evaluate(flag, context, now)

        logger.debug(
            f"Evaluated {len(results)} flags, {sum(results.values())} active"
        )
        return results

    async def _evaluate(
            self,
            flag: Flag,
            context: EvaluationContext,
            now: datetime,
    ) -> bool:
        """Expiration gate first, then the rule evaluator."""
        if self._on_expired is not None and flag.is_expired(now):
            override = self._on_expired(flag)
            if inspect.isawaitable(override):
                override = await override
            if override is not None:
                telemetry.record_evaluation(telemetry.OUTCOME_EXPIRED_OVERRIDE)
                return override

        active = evaluate_flag_for_user(flag, context)
        telemetry.record_evaluation(
            telemetry.OUTCOME_ACTIVE if active else telemetry.OUTCOME_INACTIVE
        )
        return active

    @staticmethod
    def hash_user_id(user_id: str) -> UserHash:
        """Return the raw hash and rollout bucket for a user (debugging aid)."""
        return UserHash(
            user_id=user_id,
            hash=murmur_hash(user_id),
            bucket=bucket_for(user_id),
        )
