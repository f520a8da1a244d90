"""Registro de métricas via structured logging.

As métricas são registradas como logs estruturados e podem ser agregadas
posteriormente (Cloud Logging log-based metrics, BigQuery, etc.).

Métricas suportadas:
- Recebimento: counter de notificações por caminho de entrada e categoria
- Despacho: histogram de latência do router por categoria
- Assinatura: counter de resultados da verificação HMAC

Uso:
    from app.observability.metrics import record_notification_received

    record_notification_received("pubsub", "message.created", correlation_id)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from app.protocols.models import IntakePath

logger = logging.getLogger(__name__)

SignatureOutcome = Literal["valid", "invalid", "skipped", "unavailable"]


def record_notification_received(
    path: IntakePath,
    category: str | None,
    correlation_id: str | None = None,
) -> None:
    """Registra recebimento de notificação.

    Args:
        path: Caminho de entrada ("webhook" ou "pubsub")
        category: Categoria canônica (None quando ausente/malformada)
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_notification_received",
        extra={
            "metric_type": "counter",
            "component": "intake",
            "path": path,
            "category": category or "unclassified",
            "correlation_id": correlation_id,
        },
    )


def record_dispatch_latency(
    category: str,
    latency_ms: float,
    handled: bool,
    correlation_id: str | None = None,
) -> None:
    """Registra latência do despacho de uma notificação.

    Args:
        category: Categoria canônica despachada
        latency_ms: Latência em milissegundos
        handled: True se um handler específico tratou a categoria
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_dispatch_latency",
        extra={
            "metric_type": "latency",
            "component": "dispatch_router",
            "category": category,
            "handled": handled,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_signature_check(
    outcome: SignatureOutcome,
    correlation_id: str | None = None,
) -> None:
    """Registra resultado da verificação de assinatura do webhook."""
    logger.info(
        "metric_signature_check",
        extra={
            "metric_type": "counter",
            "component": "signature_verifier",
            "outcome": outcome,
            "correlation_id": correlation_id,
        },
    )
