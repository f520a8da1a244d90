"""Secrets — integração com provedores de segredos.

Módulos disponíveis:
    - gcp_secrets: Integração com Google Cloud Secret Manager
    - webhook_secret: Resolução do secret HMAC do webhook (env > Secret Manager)
"""

from __future__ import annotations

from app.infra.secrets.gcp_secrets import get_secret, get_secret_async
from app.infra.secrets.webhook_secret import resolve_webhook_secret

__all__ = [
    "get_secret",
    "get_secret_async",
    "resolve_webhook_secret",
]
