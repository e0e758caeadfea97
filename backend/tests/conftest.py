from collections.abc import Generator
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from app.core.security import create_access_token
from app.main import app
from app.notify import MEMORY_NOTIFIER, MemoryNotifier

RICH_TEXT_SCREEN_CONFIG = [
    {
        "name": "Page 1",
        "items": [
            {
                "component": "FormTextArea",
                "config": {"name": "notes", "richtext": True},
            },
            {"component": "FormInput", "config": {"name": "other"}},
        ],
    }
]


@pytest.fixture(scope="module")
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def user_token_headers() -> dict[str, str]:
    token = create_access_token("user-1", expires_delta=timedelta(minutes=5))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def memory_notifier() -> Generator[MemoryNotifier, None, None]:
    MEMORY_NOTIFIER.clear()
    yield MEMORY_NOTIFIER
    MEMORY_NOTIFIER.clear()
