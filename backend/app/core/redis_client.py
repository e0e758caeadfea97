"""
Shared Redis client for the notification channel and health checks.

All Redis connections go through this module so there is exactly one
connection per process. Only a successful connection is cached; a failed
attempt is retried on the next call.
"""

import logging
import threading

import redis

from app.core.config import settings

_LOG = logging.getLogger(__name__)

_lock = threading.Lock()
_client: "redis.Redis | None" = None


def get_redis() -> "redis.Redis | None":
    """Return the shared Redis client (str responses).

    Returns ``None`` when ``REDIS_ENABLED`` is ``False`` or the server cannot
    be reached right now.
    """
    global _client
    if _client is not None:
        return _client
    with _lock:
        if _client is None:
            _client = _create_client()
        return _client


def reset() -> None:
    """Forget the cached client (next get_redis() reconnects)."""
    global _client
    with _lock:
        _client = None


def _create_client() -> "redis.Redis | None":
    if not settings.REDIS_ENABLED:
        return None
    try:
        r = redis.Redis.from_url(settings.redis_url, decode_responses=True)
        r.ping()
        return r
    except redis.RedisError as e:
        _LOG.warning("Redis unavailable at %s: %s", settings.redis_url, e)
        return None


def ping() -> bool:
    """Quick health check: True if the shared client (or a fresh one) can PING."""
    client = get_redis()
    if client is None:
        return False
    try:
        return bool(client.ping())
    except redis.RedisError:
        return False
