"""Roteamento de notificações classificadas para handlers por categoria.

Categorias sem handler (incluindo as conhecidas event.updated,
contact.created e contact.updated) caem no ramo default: nome da
categoria e objeto bruto vão para o sink. Nenhuma categoria levanta erro.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from app.protocols.models import DispatchOutcome, NotificationCategory

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from app.protocols.models import Notification
    from app.protocols.notification_sink import NotificationSinkProtocol

    Summarizer = Callable[[object], list[tuple[str, dict[str, Any]]]]

DEFAULT_HANDLER = "default"
UNROUTABLE_HANDLER = "unroutable"
FULL_PAYLOAD_EVENT = "notification_full_payload"


class NotificationRouter:
    """Despacha Notification para o summarizer da categoria.

    A tabela é imutável após a construção; o router não guarda estado
    por notificação e pode atender requests concorrentes.

    Args:
        handlers: Mapa categoria -> summarizer
        sink: Destino dos resumos estruturados
    """

    def __init__(
        self,
        handlers: Mapping[NotificationCategory, Summarizer],
        sink: NotificationSinkProtocol,
    ) -> None:
        if NotificationCategory.UNRECOGNIZED in handlers:
            raise ValueError("UNRECOGNIZED é reservado para o ramo default")
        self._handlers = MappingProxyType(dict(handlers))
        self._sink = sink

    @property
    def handled_categories(self) -> frozenset[NotificationCategory]:
        return frozenset(self._handlers)

    def dispatch(self, notification: Notification) -> DispatchOutcome:
        """Invoca o handler da categoria ou o ramo default."""
        if not notification.routable:
            self._sink.emit(
                "notification_unroutable",
                {
                    "notification_id": notification.id,
                    "reason": "missing_type",
                },
            )
            return DispatchOutcome(category=None, handled=False, handler=UNROUTABLE_HANDLER)

        summarizer = self._handlers.get(notification.category)
        if summarizer is None:
            return self._dispatch_default(notification)

        for event, fields in summarizer(notification.data.object):
            self._sink.emit(event, {"notification_id": notification.id, **fields})
        self._emit_full_payload(notification)

        return DispatchOutcome(
            category=notification.canonical_type,
            handled=True,
            handler=notification.category.value,
        )

    def _dispatch_default(self, notification: Notification) -> DispatchOutcome:
        self._sink.emit(
            "notification_unhandled",
            {
                "notification_id": notification.id,
                "category": notification.canonical_type,
                "known_category": notification.category is not NotificationCategory.UNRECOGNIZED,
                "object": notification.data.object,
            },
        )
        return DispatchOutcome(
            category=notification.canonical_type,
            handled=False,
            handler=DEFAULT_HANDLER,
        )

    def _emit_full_payload(self, notification: Notification) -> None:
        self._sink.emit(
            FULL_PAYLOAD_EVENT,
            {
                "notification_id": notification.id,
                "category": notification.canonical_type,
                "object": notification.data.object,
            },
        )
