"""Resolução do secret HMAC do webhook Nylas.

Ordem de precedência:
1. NYLAS_WEBHOOK_SECRET (env, típico em desenvolvimento)
2. NYLAS_WEBHOOK_SECRET_ID (Secret Manager, staging/production)
3. Nenhum: verificação de assinatura é pulada com warning
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.infra.secrets.gcp_secrets import get_secret_async
from utils.errors import SecretUnavailableError

if TYPE_CHECKING:
    from config.settings import NylasSettings

logger = logging.getLogger(__name__)


async def resolve_webhook_secret(
    settings: NylasSettings,
    project_id: str | None = None,
) -> str | None:
    """Retorna o secret do webhook ou None se nenhum estiver configurado.

    Raises:
        SecretUnavailableError: Secret Manager configurado mas inacessível.
    """
    if settings.webhook_secret:
        return settings.webhook_secret
    if not settings.webhook_secret_id:
        return None

    try:
        return await get_secret_async(settings.webhook_secret_id, project_id or None)
    except Exception as exc:
        logger.error(
            "webhook_secret_unavailable",
            extra={
                "secret_id": settings.webhook_secret_id,
                "error_type": type(exc).__name__,
            },
        )
        raise SecretUnavailableError(settings.webhook_secret_id) from exc
