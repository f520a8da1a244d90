"""Leitura do segredo do webhook Nylas no Google Cloud Secret Manager.

Usado quando NYLAS_WEBHOOK_SECRET_ID está definido. Só leituras bem
sucedidas entram no cache do processo; falhas são repetidas na próxima chamada.
"""

from __future__ import annotations

import asyncio
import logging
import os
from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from google.cloud.secretmanager import SecretManagerServiceClient

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _get_client() -> SecretManagerServiceClient:
    """Cliente único do Secret Manager, criado sob demanda."""
    from google.cloud import secretmanager

    return secretmanager.SecretManagerServiceClient()


@lru_cache(maxsize=16)
def get_secret(
    secret_id: str,
    project_id: str | None = None,
    version: str = "latest",
) -> str:
    """Obtém valor de secret do GCP Secret Manager.

    Args:
        secret_id: ID do secret (ex.: nylas-webhook-secret)
        project_id: ID do projeto GCP (default: env GCP_PROJECT)
        version: Versão do secret (default: latest)

    Returns:
        Valor do secret como string

    Raises:
        ValueError: Se project_id não fornecido e GCP_PROJECT não definido
        google.api_core.exceptions.GoogleAPICallError: Falha na API
    """
    if project_id is None:
        project_id = os.getenv("GCP_PROJECT")
        if not project_id:
            msg = "GCP_PROJECT não definido e project_id não fornecido"
            raise ValueError(msg)

    client = _get_client()
    name = f"projects/{project_id}/secrets/{secret_id}/versions/{version}"

    try:
        response = client.access_secret_version(request={"name": name})
    except Exception as exc:
        logger.error(
            "secret_load_error",
            extra={"secret_id": secret_id, "error_type": type(exc).__name__},
        )
        raise
    logger.debug("secret_loaded", extra={"secret_id": secret_id})
    return response.payload.data.decode("UTF-8")


async def get_secret_async(
    secret_id: str,
    project_id: str | None = None,
    version: str = "latest",
) -> str:
    """Obtém secret sem bloquear o event loop.

    O SDK do Secret Manager é síncrono; a chamada roda em thread.
    Depois do primeiro sucesso o valor vem do cache de get_secret.
    """
    return await asyncio.to_thread(get_secret, secret_id, project_id, version)
