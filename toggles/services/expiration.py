"""
Built-in expiration gates.

A gate is any callable taking the expired Flag and returning True/False to
override the evaluation result, or None to let rule evaluation proceed.
"""
import logging
from typing import Optional

from toggles.core.exceptions import ConfigurationError
from toggles.models.interfaces import ExpirationGate
from toggles.models.schemas import Flag

logger = logging.getLogger(__name__)


def defer_expired(flag: Flag) -> Optional[bool]:
    """Report the expired flag and keep evaluating its rules."""
    logger.warning(
        f"Flag '{flag.name}' expired at {flag.expires.isoformat()}, evaluating rules anyway",
        extra={"flag": flag.name},
    )
    return None


def disable_expired(flag: Flag) -> Optional[bool]:
    """Treat expired flags as inactive (fail closed)."""
    logger.info(f"Flag '{flag.name}' expired, forcing inactive", extra={"flag": flag.name})
    return False


def enable_expired(flag: Flag) -> Optional[bool]:
    """Treat expired flags as fully rolled out."""
    logger.info(f"Flag '{flag.name}' expired, forcing active", extra={"flag": flag.name})
    return True


EXPIRATION_POLICIES = {
    "defer": defer_expired,
    "disable": disable_expired,
    "enable": enable_expired,
}


def build_expiration_gate(policy: Optional[str]) -> Optional[ExpirationGate]:
    """
    Resolve a configured policy name to a gate.

    Returns:
        The gate, or None when no policy is configured (expiration is not enforced)

    Raises:
        ConfigurationError: If the policy name is unknown
    """
    if policy is None:
        return None
    try:
        return EXPIRATION_POLICIES[policy]
    except KeyError:
        raise ConfigurationError(
            "EXPIRED_FLAG_POLICY",
            policy,
            f"unknown expiration policy, expected one of {sorted(EXPIRATION_POLICIES)}",
        ) from None
