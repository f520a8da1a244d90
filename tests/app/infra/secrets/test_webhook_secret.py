from __future__ import annotations

import pytest

from app.infra.secrets import webhook_secret
from config.settings import NylasSettings
from utils.errors import SecretUnavailableError


@pytest.mark.asyncio
async def test_env_secret_takes_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    async def _never(*args: object) -> str:
        raise AssertionError("Secret Manager não deveria ser consultado")

    monkeypatch.setattr(webhook_secret, "get_secret_async", _never)
    settings = NylasSettings(webhook_secret="from-env", webhook_secret_id="sm-id")

    assert await webhook_secret.resolve_webhook_secret(settings, "proj") == "from-env"


@pytest.mark.asyncio
async def test_no_secret_configured_returns_none() -> None:
    assert await webhook_secret.resolve_webhook_secret(NylasSettings()) is None


@pytest.mark.asyncio
async def test_secret_manager_lookup(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[object, ...]] = []

    async def _fake_get_secret(secret_id: str, project_id: str | None = None) -> str:
        calls.append((secret_id, project_id))
        return "from-sm"

    monkeypatch.setattr(webhook_secret, "get_secret_async", _fake_get_secret)
    settings = NylasSettings(webhook_secret_id="nylas-webhook-secret")

    assert await webhook_secret.resolve_webhook_secret(settings, "proj") == "from-sm"
    assert calls == [("nylas-webhook-secret", "proj")]


@pytest.mark.asyncio
async def test_secret_manager_failure_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    async def _failing(secret_id: str, project_id: str | None = None) -> str:
        raise ConnectionError("network down")

    monkeypatch.setattr(webhook_secret, "get_secret_async", _failing)
    settings = NylasSettings(webhook_secret_id="nylas-webhook-secret")

    with pytest.raises(SecretUnavailableError):
        await webhook_secret.resolve_webhook_secret(settings, "")
