"""Testes para endpoints da rota de webhook Nylas."""

from __future__ import annotations

import hashlib
import hmac
import json
from types import SimpleNamespace

import pytest
from starlette.requests import Request

from api.normalizers.nylas import classify_notification
from api.routes.nylas import webhook
from app.bootstrap.dependencies import create_notification_router
from app.use_cases.nylas import ProcessNotificationUseCase
from tests.fakes.fake_notification_sink import RecordingSink
from utils.errors import SecretUnavailableError

SECRET = "nylas-secret"
BODY = b'{"specversion":"1.0","type":"message.created","id":"n1","data":{"object":{"id":"m1"}}}'


def _sign(payload: bytes, secret: str = SECRET) -> str:
    return hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()


def _build_request(
    *,
    method: str,
    query_string: str = "",
    body: bytes = b"",
    headers: dict[str, str] | None = None,
) -> Request:
    header_items = headers or {}
    raw_headers = [(k.lower().encode("utf-8"), v.encode("utf-8")) for k, v in header_items.items()]
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "path": "/webhook/nylas",
        "raw_path": b"/webhook/nylas",
        "query_string": query_string.encode("utf-8"),
        "headers": raw_headers,
    }
    sent = False

    async def _receive() -> dict[str, object]:
        nonlocal sent
        if sent:
            return {"type": "http.request", "body": b"", "more_body": False}
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, _receive)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def configured(monkeypatch: pytest.MonkeyPatch, sink: RecordingSink) -> dict[str, object]:
    """Settings e pipeline de teste; `secret` pode ser alterado por teste."""
    state: dict[str, object] = {"secret": SECRET}

    monkeypatch.setattr(
        webhook,
        "get_nylas_settings",
        lambda: SimpleNamespace(
            max_body_bytes=1024 * 1024,
            signature_header="x-nylas-signature",
        ),
    )
    monkeypatch.setattr(webhook, "get_base_settings", lambda: SimpleNamespace(gcp_project=""))

    async def _fake_resolve(settings: object, project_id: str | None = None) -> str | None:
        secret = state["secret"]
        if isinstance(secret, Exception):
            raise secret
        return secret  # type: ignore[return-value]

    monkeypatch.setattr(webhook, "resolve_webhook_secret", _fake_resolve)

    use_case = ProcessNotificationUseCase(
        classify=classify_notification,
        router=create_notification_router(sink),
    )
    monkeypatch.setattr(webhook, "get_notification_use_case", lambda: use_case)
    return state


class TestChallenge:
    """GET /webhook/nylas."""

    @pytest.mark.asyncio
    async def test_echoes_challenge_as_plain_text(self) -> None:
        request = _build_request(method="GET", query_string="challenge=abc123")

        response = await webhook.verify_webhook(request)

        assert response.status_code == 200
        assert response.body == b"abc123"
        assert response.headers["content-type"] == "text/plain"

    @pytest.mark.asyncio
    async def test_url_decoded_token_is_echoed_exactly(self) -> None:
        request = _build_request(method="GET", query_string="challenge=a%2Bb%20c%22d")

        response = await webhook.verify_webhook(request)

        assert response.body == b'a+b c"d'

    @pytest.mark.asyncio
    async def test_without_challenge_returns_empty_body(self) -> None:
        response = await webhook.verify_webhook(_build_request(method="GET"))

        assert response.status_code == 200
        assert response.body == b""


class TestReceiveWebhook:
    """POST /webhook/nylas."""

    @pytest.mark.asyncio
    async def test_valid_signature_returns_success(
        self, configured: dict[str, object], sink: RecordingSink
    ) -> None:
        request = _build_request(
            method="POST",
            body=BODY,
            headers={"x-nylas-signature": _sign(BODY), "x-correlation-id": "cid-1"},
        )

        response = await webhook.receive_webhook(request)

        assert response == {"success": True}
        assert sink.fields_of("message_created")["notification_id"] == "n1"

    @pytest.mark.asyncio
    async def test_reserialized_body_is_rejected(
        self, configured: dict[str, object], sink: RecordingSink
    ) -> None:
        reserialized = json.dumps(json.loads(BODY)).encode("utf-8")
        request = _build_request(
            method="POST",
            body=reserialized,
            headers={"x-nylas-signature": _sign(BODY)},
        )

        response = await webhook.receive_webhook(request)

        assert response.status_code == 401
        assert json.loads(response.body) == {"error": "Invalid signature"}
        assert sink.events == []

    @pytest.mark.asyncio
    async def test_missing_secret_skips_verification(
        self, configured: dict[str, object], sink: RecordingSink
    ) -> None:
        configured["secret"] = None
        request = _build_request(
            method="POST",
            body=BODY,
            headers={"x-nylas-signature": "not-checked"},
        )

        response = await webhook.receive_webhook(request)

        assert response == {"success": True}
        assert "message_created" in sink.names()

    @pytest.mark.asyncio
    async def test_missing_signature_header_skips_verification(
        self, configured: dict[str, object]
    ) -> None:
        response = await webhook.receive_webhook(_build_request(method="POST", body=BODY))

        assert response == {"success": True}

    @pytest.mark.asyncio
    async def test_raw_body_unavailable_returns_400(
        self, configured: dict[str, object], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def _no_body(request: Request, max_bytes: int) -> None:
            return None

        monkeypatch.setattr(webhook, "capture_raw_body", _no_body)
        request = _build_request(
            method="POST",
            body=BODY,
            headers={"x-nylas-signature": _sign(BODY)},
        )

        response = await webhook.receive_webhook(request)

        assert response.status_code == 400
        assert json.loads(response.body) == {"error": "Raw body not available"}

    @pytest.mark.asyncio
    async def test_malformed_json_is_acknowledged(
        self, configured: dict[str, object], sink: RecordingSink
    ) -> None:
        body = b"{not json"
        request = _build_request(
            method="POST",
            body=body,
            headers={"x-nylas-signature": _sign(body)},
        )

        response = await webhook.receive_webhook(request)

        assert response == {"success": True}
        assert sink.events == []

    @pytest.mark.asyncio
    async def test_unknown_category_returns_success(
        self, configured: dict[str, object], sink: RecordingSink
    ) -> None:
        body = b'{"type":"folder.deleted","data":{"object":{"id":"f1"}}}'
        request = _build_request(
            method="POST",
            body=body,
            headers={"x-nylas-signature": _sign(body)},
        )

        response = await webhook.receive_webhook(request)

        assert response == {"success": True}
        assert sink.fields_of("notification_unhandled")["category"] == "folder.deleted"

    @pytest.mark.asyncio
    async def test_processing_failure_returns_500(
        self, configured: dict[str, object], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        class _BrokenUseCase:
            def execute(self, document: object, delivery: object) -> None:
                raise RuntimeError("boom")

        monkeypatch.setattr(webhook, "get_notification_use_case", lambda: _BrokenUseCase())
        request = _build_request(
            method="POST",
            body=BODY,
            headers={"x-nylas-signature": _sign(BODY)},
        )

        response = await webhook.receive_webhook(request)

        assert response.status_code == 500
        assert json.loads(response.body) == {"error": "Failed to process webhook"}

    @pytest.mark.asyncio
    async def test_secret_unavailable_returns_500(self, configured: dict[str, object]) -> None:
        configured["secret"] = SecretUnavailableError("nylas-webhook-secret")
        request = _build_request(method="POST", body=BODY)

        response = await webhook.receive_webhook(request)

        assert response.status_code == 500
        assert json.loads(response.body) == {"error": "Failed to process webhook"}

    @pytest.mark.asyncio
    async def test_oversized_body_returns_413(
        self, configured: dict[str, object], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(
            webhook,
            "get_nylas_settings",
            lambda: SimpleNamespace(max_body_bytes=16, signature_header="x-nylas-signature"),
        )

        response = await webhook.receive_webhook(_build_request(method="POST", body=BODY))

        assert response.status_code == 413
