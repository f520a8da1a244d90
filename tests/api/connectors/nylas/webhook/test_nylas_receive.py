import hashlib
import hmac

import pytest

from api.connectors.nylas.webhook.receive import (
    InvalidSignatureError,
    WebhookRequestError,
    authenticate_webhook_request,
)
from utils.errors import RawBodyUnavailableError


def _sign(payload: bytes, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()


def test_authenticate_webhook_request_ok() -> None:
    body = b'{"type":"message.created"}'
    headers = {"x-nylas-signature": _sign(body, "secret")}

    result = authenticate_webhook_request(body, headers, "secret")

    assert result.valid is True
    assert result.skipped is False


def test_authenticate_webhook_request_invalid_signature() -> None:
    body = b'{"type":"message.created"}'
    headers = {"x-nylas-signature": "deadbeef"}

    with pytest.raises(InvalidSignatureError, match="signature_mismatch"):
        authenticate_webhook_request(body, headers, "secret")


def test_invalid_signature_is_webhook_request_error() -> None:
    assert issubclass(InvalidSignatureError, WebhookRequestError)


def test_authenticate_webhook_request_without_secret_is_skipped() -> None:
    result = authenticate_webhook_request(b"{}", {}, "")

    assert result.valid is True
    assert result.skipped is True


def test_authenticate_webhook_request_without_raw_body() -> None:
    with pytest.raises(RawBodyUnavailableError):
        authenticate_webhook_request(None, {"x-nylas-signature": "abc"}, "secret")
