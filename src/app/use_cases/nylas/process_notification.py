"""Use case: classificar e despachar um documento de notificação.

Ponto comum aos dois caminhos de entrada. Recebe o texto já autenticado
(webhook) ou desembrulhado (Pub/Sub) e devolve ProcessingResult.

Política de erros:
- Documento malformado: loga o texto bruto e retorna malformed=True
  (a entrega é confirmada; reenviar não corrige o payload)
- Falha inesperada em handler: loga com contexto de replay e propaga
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from app.observability import (
    get_correlation_id,
    record_dispatch_latency,
    record_notification_received,
)
from app.protocols.models import ProcessingResult
from utils.errors import MalformedNotificationError

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.coordinators.nylas.router import NotificationRouter
    from app.protocols.models import DeliveryContext, Notification

logger = logging.getLogger(__name__)

# Limite do texto bruto logado para documentos malformados
RAW_TEXT_LOG_LIMIT = 4096


class ProcessNotificationUseCase:
    """Orquestra classificador e router.

    Sem estado mutável: uma instância atende requests concorrentes.

    Args:
        classify: Função texto -> Notification (levanta MalformedNotificationError)
        router: Router de categorias
    """

    def __init__(
        self,
        classify: Callable[[str | bytes], Notification],
        router: NotificationRouter,
    ) -> None:
        self._classify = classify
        self._router = router

    def execute(self, document: str | bytes, delivery: DeliveryContext) -> ProcessingResult:
        """Classifica e despacha o documento.

        Raises:
            Exception: Falhas inesperadas do router/handlers (mapeadas para 5xx).
        """
        correlation_id = get_correlation_id()
        try:
            notification = self._classify(document)
        except MalformedNotificationError as exc:
            logger.error(
                "notification_malformed",
                extra={
                    "path": delivery.path,
                    "delivery_id": delivery.delivery_id,
                    "error": str(exc),
                    "raw_text": exc.raw_text[:RAW_TEXT_LOG_LIMIT],
                    "raw_text_length": len(exc.raw_text),
                },
            )
            record_notification_received(delivery.path, None, correlation_id)
            return ProcessingResult(notification=None, outcome=None, malformed=True)

        logger.info(
            "notification_received",
            extra={
                "path": delivery.path,
                "delivery_id": delivery.delivery_id,
                "source": notification.source,
                "specversion": notification.specversion,
                "grant_id": notification.data.grant_id,
                **notification.log_context(),
            },
        )
        record_notification_received(delivery.path, notification.canonical_type, correlation_id)

        started_at = time.perf_counter()
        try:
            outcome = self._router.dispatch(notification)
        except Exception:
            logger.exception(
                "notification_dispatch_failed",
                extra={"path": delivery.path, **notification.log_context()},
            )
            raise
        latency_ms = (time.perf_counter() - started_at) * 1000

        if not outcome.handled:
            logger.info(
                "notification_not_handled",
                extra={
                    "path": delivery.path,
                    "handler": outcome.handler,
                    **notification.log_context(),
                },
            )
        record_dispatch_latency(
            outcome.category or "unclassified",
            latency_ms,
            outcome.handled,
            correlation_id,
        )
        return ProcessingResult(notification=notification, outcome=outcome)
