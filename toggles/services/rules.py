"""
Rule evaluator.
Decides whether a flag is active for a request using a fixed precedence:
everyone override > user allow-list > groups > roles > percentage rollout > off.
"""
import logging
from typing import Iterable, Optional

from toggles.core.hashing import bucket_for
from toggles.models.schemas import EvaluationContext, Flag

logger = logging.getLogger(__name__)


def _intersects(requested: Optional[Iterable[str]], allowed: Optional[Iterable[str]]) -> bool:
    """Both sides non-empty and sharing at least one exact (case-sensitive) value."""
    if not requested or not allowed:
        return False
    return not set(requested).isdisjoint(allowed)


def evaluate_flag_for_user(flag: Flag, context: EvaluationContext) -> bool:
    """
    Evaluate a flag's rules for one user context.

    Pure function of its inputs; the first matching rule wins.

    Args:
        flag: Flag configuration
        context: User, roles and groups of the request

    Returns:
        True if the flag is active for this context
    """
    # Everyone override ignores every other field
    if flag.everyone is not None:
        return flag.everyone

    if context.user and flag.users and context.user in flag.users:
        return True

    if _intersects(context.groups, flag.groups):
        return True

    if _intersects(context.roles, flag.roles):
        return True

    if context.user and flag.percent is not None and flag.percent > 0:
        bucket = bucket_for(context.user)
        # percent may carry a decimal (e.g. 25.5), compare as a real number
        in_rollout = bucket < flag.percent
        logger.debug(
            f"Rollout check flag={flag.name} bucket={bucket} "
            f"percent={flag.percent} active={in_rollout}"
        )
        return in_rollout

    return False
