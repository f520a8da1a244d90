"""Factories do pipeline de notificações — criação de implementações concretas.

Conecta classificador, summarizers e sink aos contratos do core.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.normalizers.nylas import (
    classify_notification,
    summarize_event_created,
    summarize_message_created,
    summarize_message_updated,
)
from app.coordinators.nylas.router import NotificationRouter
from app.infra.sinks import LoggingNotificationSink
from app.protocols.models import NotificationCategory
from app.use_cases.nylas import ProcessNotificationUseCase
from config.settings import get_nylas_settings

if TYPE_CHECKING:
    from app.protocols.notification_sink import NotificationSinkProtocol

logger = logging.getLogger(__name__)

# Categorias com handler próprio; as demais caem no ramo default
CATEGORY_HANDLERS = {
    NotificationCategory.MESSAGE_CREATED: summarize_message_created,
    NotificationCategory.MESSAGE_UPDATED: summarize_message_updated,
    NotificationCategory.EVENT_CREATED: summarize_event_created,
}


def create_notification_sink() -> NotificationSinkProtocol:
    """Cria o sink de resumos.

    NYLAS_LOG_FULL_PAYLOAD=true promove o objeto completo para INFO.
    """
    settings = get_nylas_settings()
    payload_level = logging.INFO if settings.log_full_payload else logging.DEBUG
    return LoggingNotificationSink(
        target=logging.getLogger("nylas.notifications"),
        payload_level=payload_level,
    )


def create_notification_router(
    sink: NotificationSinkProtocol | None = None,
) -> NotificationRouter:
    """Cria router com a tabela padrão de categorias."""
    return NotificationRouter(
        CATEGORY_HANDLERS,
        sink or create_notification_sink(),
    )


def create_process_notification_use_case(
    sink: NotificationSinkProtocol | None = None,
) -> ProcessNotificationUseCase:
    """Cria o use case de processamento com router padrão."""
    router = create_notification_router(sink)
    logger.debug(
        "notification_pipeline_created",
        extra={
            "handled_categories": sorted(c.value for c in router.handled_categories),
        },
    )
    return ProcessNotificationUseCase(classify=classify_notification, router=router)
