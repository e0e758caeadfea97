"""
User notification channel for script outcomes.

RedisNotifier publishes each event on ``{NOTIFICATION_CHANNEL_PREFIX}.{user_id}``
so a socket gateway can forward it to the user's browser. MemoryNotifier keeps
events in a bounded outbox; it is only used when jobs run inline (eager queue)
with Redis disabled, or when injected by tests.

When a remote worker cannot reach Redis, ``get_notifier`` raises
NotificationUnavailableError so the task fails and the broker redelivers it.
"""

import logging
import threading
from typing import Any, Protocol

import redis

from app.core.config import settings
from app.core.redis_client import get_redis
from app.models import ScriptResponseEvent

logger = logging.getLogger(__name__)

OUTBOX_LIMIT = 1000


class NotificationUnavailableError(ConnectionError):
    """Raised when no notification transport can deliver to the user."""

    pass


class Notifier(Protocol):
    def notify(
        self, user_id: str, status: int, response: dict[str, Any], watcher: str
    ) -> None: ...


def user_channel(user_id: str) -> str:
    return f"{settings.NOTIFICATION_CHANNEL_PREFIX}.{user_id}"


class RedisNotifier:
    def __init__(self, client: "redis.Redis") -> None:
        self._client = client

    def notify(
        self, user_id: str, status: int, response: dict[str, Any], watcher: str
    ) -> None:
        event = ScriptResponseEvent(status=status, response=response, watcher=watcher)
        channel = user_channel(user_id)
        receivers = self._client.publish(channel, event.model_dump_json())
        logger.debug(
            "Published %s (status=%s) to %s, %s receiver(s)",
            event.type,
            status,
            channel,
            receivers,
        )


class MemoryNotifier:
    def __init__(self, limit: int = OUTBOX_LIMIT) -> None:
        self._lock = threading.Lock()
        self._limit = limit
        self.outbox: list[tuple[str, ScriptResponseEvent]] = []

    def notify(
        self, user_id: str, status: int, response: dict[str, Any], watcher: str
    ) -> None:
        event = ScriptResponseEvent(status=status, response=response, watcher=watcher)
        with self._lock:
            self.outbox.append((user_id, event))
            del self.outbox[: -self._limit]

    def clear(self) -> None:
        with self._lock:
            self.outbox.clear()


MEMORY_NOTIFIER = MemoryNotifier()


def get_notifier() -> Notifier:
    """
    Redis publisher when Redis is enabled. The in-process outbox only when
    Redis is disabled and jobs run inline; any other case raises.
    """
    if settings.REDIS_ENABLED:
        client = get_redis()
        if client is None:
            raise NotificationUnavailableError(
                f"Redis unreachable at {settings.redis_url}; cannot notify user"
            )
        return RedisNotifier(client)
    if settings.celery_eager:
        return MEMORY_NOTIFIER
    raise NotificationUnavailableError(
        "REDIS_ENABLED is off but jobs run on a remote worker; no channel reaches the user"
    )
