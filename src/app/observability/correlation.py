"""Gerenciamento de correlation_id para rastreamento de entregas.

O correlation_id identifica uma entrega (request) nos logs. Ordem de
preferência: header x-correlation-id, messageId do Pub/Sub, UUID novo.
Usa ContextVar para ser async-safe entre requests concorrentes.

Uso:
    token = set_correlation_id(request.headers.get("x-correlation-id"))
    try:
        ...
    finally:
        reset_correlation_id(token)
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual (ou string vazia)."""
    return _correlation_id.get()


def set_correlation_id(*candidates: str | None) -> Token[str]:
    """Define o correlation_id com o primeiro candidato não vazio.

    Args:
        *candidates: Valores em ordem de preferência. Se nenhum for
            válido, gera um novo UUID.

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    value = next((c for c in candidates if c), None) or generate_correlation_id()
    return _correlation_id.set(value)


def reset_correlation_id(token: Token[str]) -> None:
    """Restaura o correlation_id ao valor anterior."""
    _correlation_id.reset(token)


def generate_correlation_id() -> str:
    """Gera um novo correlation_id (UUID v4)."""
    return str(uuid.uuid4())
