"""Tests for the application factory and its error handlers."""

from unittest.mock import patch

from fastapi.testclient import TestClient
from pydantic import BaseModel

from app.main import create_app


class _Contact(BaseModel):
    email: str
    watcher: str


def _client() -> TestClient:
    application = create_app()

    @application.post("/_contact", tags=["test"])
    def contact(body: _Contact) -> dict:
        return body.model_dump()

    @application.get("/_boom", tags=["test"])
    def boom() -> None:
        raise RuntimeError("kaput")

    return TestClient(application, raise_server_exceptions=False)


def test_validation_errors_flattened() -> None:
    r = _client().post("/_contact", json={"email": 1})
    assert r.status_code == 422
    detail = r.json()["detail"]
    assert isinstance(detail, str)
    assert "email: " in detail
    assert "watcher: Field required" in detail
    assert "body" not in detail


def test_unhandled_error_hides_message_outside_local() -> None:
    client = _client()
    with patch("app.main.settings") as m:
        m.ENVIRONMENT = "production"
        r = client.get("/_boom")
    assert r.status_code == 500
    assert r.json() == {"detail": "Internal server error"}


def test_unhandled_error_shows_message_locally() -> None:
    client = _client()
    with patch("app.main.settings") as m:
        m.ENVIRONMENT = "local"
        r = client.get("/_boom")
    assert r.status_code == 500
    assert r.json() == {"detail": "Internal server error: kaput"}
