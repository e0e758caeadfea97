"""Unit tests for the notification channel."""

import json
from collections.abc import Generator
from unittest.mock import MagicMock, patch

import pytest
import redis

from app import notify
from app.core import redis_client
from app.notify import (
    MemoryNotifier,
    NotificationUnavailableError,
    RedisNotifier,
    get_notifier,
    user_channel,
)


def test_user_channel_uses_prefix() -> None:
    with patch("app.notify.settings") as m:
        m.NOTIFICATION_CHANNEL_PREFIX = "notifications.user"
        assert user_channel("42") == "notifications.user.42"


def test_redis_notifier_publishes_event_json() -> None:
    client = MagicMock()
    client.publish.return_value = 1
    RedisNotifier(client).notify("42", 200, {"result": 1}, "w1")
    channel, payload = client.publish.call_args.args
    assert channel == user_channel("42")
    assert json.loads(payload) == {
        "type": "script_response",
        "status": 200,
        "response": {"result": 1},
        "watcher": "w1",
    }


def test_memory_notifier_outbox() -> None:
    n = MemoryNotifier()
    n.notify("u", 500, {"kind": "E", "message": "m"}, "w")
    assert len(n.outbox) == 1
    user_id, event = n.outbox[0]
    assert user_id == "u"
    assert event.status == 500
    n.clear()
    assert n.outbox == []


def test_memory_notifier_outbox_bounded() -> None:
    n = MemoryNotifier(limit=2)
    for i in range(3):
        n.notify("u", 200, {"i": i}, f"w{i}")
    assert [event.watcher for _, event in n.outbox] == ["w1", "w2"]


class TestGetNotifier:
    def test_eager_queue_without_redis_uses_outbox(self) -> None:
        with patch.object(notify, "settings") as m:
            m.REDIS_ENABLED = False
            m.celery_eager = True
            assert get_notifier() is notify.MEMORY_NOTIFIER

    def test_remote_worker_without_redis_raises(self) -> None:
        with patch.object(notify, "settings") as m:
            m.REDIS_ENABLED = False
            m.celery_eager = False
            with pytest.raises(NotificationUnavailableError):
                get_notifier()

    def test_redis_enabled_but_down_raises(self) -> None:
        with (
            patch.object(notify, "settings") as m,
            patch.object(notify, "get_redis", return_value=None),
        ):
            m.REDIS_ENABLED = True
            m.celery_eager = True
            with pytest.raises(NotificationUnavailableError):
                get_notifier()

    def test_redis_enabled_and_up(self) -> None:
        with (
            patch.object(notify, "settings") as m,
            patch.object(notify, "get_redis", return_value=MagicMock()),
        ):
            m.REDIS_ENABLED = True
            assert isinstance(get_notifier(), RedisNotifier)


class TestRedisClient:
    @pytest.fixture(autouse=True)
    def _fresh_client(self) -> Generator[None, None, None]:
        redis_client.reset()
        yield
        redis_client.reset()

    def test_disabled_returns_none(self) -> None:
        with patch.object(redis_client, "settings") as m:
            m.REDIS_ENABLED = False
            assert redis_client.get_redis() is None

    def test_failed_connection_is_retried(self) -> None:
        healthy = MagicMock()
        with (
            patch.object(redis_client, "settings") as m,
            patch.object(
                redis_client.redis.Redis,
                "from_url",
                side_effect=[redis.ConnectionError("refused"), healthy],
            ),
        ):
            m.REDIS_ENABLED = True
            m.redis_url = "redis://localhost:1/0"
            assert redis_client.get_redis() is None
            assert redis_client.get_redis() is healthy
            assert redis_client.get_redis() is healthy
