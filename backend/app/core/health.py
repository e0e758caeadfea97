"""
Health-check helpers for liveness and readiness probes.

Liveness  — is the process alive and not deadlocked?  (cheap, no I/O)
Readiness — can it serve traffic?  (Redis, when the notification channel uses it)
"""

import logging

from app.core.config import settings
from app.core.redis_client import ping as redis_ping

logger = logging.getLogger(__name__)


def check_redis() -> bool:
    """Check Redis by PING via shared client."""
    return redis_ping()


def redis_required() -> bool:
    """Whether Redis is required for readiness (check and fail 503 if down)."""
    return bool(settings.REDIS_ENABLED)


def liveness_check() -> tuple[bool, list[str]]:
    """
    Lightweight liveness probe — just confirms the Python process is responsive.
    No I/O.  Return format matches readiness_check for consistency.
    """
    return (True, [])


def readiness_check() -> tuple[bool, list[str]]:
    """
    Run the required dependency checks.
    Returns (ok, list of failure messages). ok is False if any required check fails.
    """
    failures: list[str] = []

    if redis_required() and not check_redis():
        logger.warning("Readiness: redis unreachable at %s", settings.redis_url)
        failures.append("redis")

    return (len(failures) == 0, failures)
