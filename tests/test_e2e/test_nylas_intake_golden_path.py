"""E2E: app FastAPI completo, webhook direto e push do Pub/Sub.

Usa a pilha real (settings por env, bootstrap, router, sink de logging);
nenhuma chamada externa é feita.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import logging
from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from app.app import create_app
from app.bootstrap import get_notification_use_case
from config.settings import get_base_settings, get_nylas_settings, get_pubsub_settings

SECRET = "e2e-secret"


def _sign(body: bytes) -> str:
    return hmac.new(SECRET.encode("utf-8"), body, hashlib.sha256).hexdigest()


def _clear_caches() -> None:
    for cached in (
        get_base_settings,
        get_nylas_settings,
        get_pubsub_settings,
        get_notification_use_case,
    ):
        cached.cache_clear()


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch) -> Iterator[TestClient]:
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("NYLAS_WEBHOOK_SECRET", SECRET)
    monkeypatch.delenv("NYLAS_WEBHOOK_SECRET_ID", raising=False)
    _clear_caches()
    with TestClient(create_app()) as test_client:
        yield test_client
    _clear_caches()


def test_challenge_handshake(client: TestClient) -> None:
    response = client.get("/webhook/nylas", params={"challenge": "tok-123"})

    assert response.status_code == 200
    assert response.content == b"tok-123"
    assert response.headers["content-type"] == "text/plain"


def test_signed_webhook_is_processed(
    client: TestClient, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.INFO)
    body = json.dumps(
        {
            "specversion": "1.0",
            "type": "message.created.transformed",
            "id": "notif-e2e",
            "data": {
                "application_id": "app",
                "object": {
                    "id": "msg-e2e",
                    "subject": "Golden path",
                    "from": [{"email": "ana@example.com", "name": "Ana"}],
                },
            },
        }
    ).encode("utf-8")

    response = client.post(
        "/webhook/nylas",
        content=body,
        headers={"content-type": "application/json", "x-nylas-signature": _sign(body)},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True}
    summary = next(r for r in caplog.records if r.getMessage() == "message_created")
    assert summary.subject == "Golden path"
    assert summary.notification_id == "notif-e2e"


def test_tampered_webhook_is_rejected(client: TestClient) -> None:
    body = b'{"type":"message.created"}'

    response = client.post(
        "/webhook/nylas",
        content=body,
        headers={"x-nylas-signature": _sign(b'{"type": "message.created"}')},
    )

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid signature"}


def test_pubsub_push_is_acknowledged(client: TestClient) -> None:
    inner = json.dumps({"type": "event.created", "data": {"object": {"title": "Daily"}}})
    envelope = {
        "message": {
            "data": base64.b64encode(inner.encode("utf-8")).decode("ascii"),
            "messageId": "pubsub-1",
            "publishTime": "2024-05-01T12:00:00Z",
        },
        "subscription": "projects/p/subscriptions/nylas-push",
    }

    response = client.post("/pubsub/nylas", json=envelope)

    assert response.status_code == 204
    assert response.content == b""


def test_pubsub_without_data_is_rejected(client: TestClient) -> None:
    response = client.post("/pubsub/nylas", json={"message": {"messageId": "x"}})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid message format"}


def test_probes(client: TestClient) -> None:
    assert client.post("/").json() == {"hello": "world"}
    assert client.get("/health").json()["status"] == "healthy"
    ready = client.get("/ready")
    assert ready.status_code == 200
    assert ready.json()["checks"]["webhook_secret"]["status"] == "ok"
