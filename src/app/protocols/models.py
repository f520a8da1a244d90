"""Contratos canônicos de notificação.

Notification é o registro decodificado comum aos dois caminhos de entrada
(webhook direto e push do Pub/Sub). O objeto alterado (`data.object`) é um
documento livre: a estrutura varia por categoria e não é validada.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

IntakePath = Literal["webhook", "pubsub"]


class NotificationCategory(Enum):
    """Categorias conhecidas; qualquer outra vira UNRECOGNIZED."""

    MESSAGE_CREATED = "message.created"
    MESSAGE_UPDATED = "message.updated"
    EVENT_CREATED = "event.created"
    EVENT_UPDATED = "event.updated"
    CONTACT_CREATED = "contact.created"
    CONTACT_UPDATED = "contact.updated"
    UNRECOGNIZED = "unrecognized"

    @classmethod
    def from_type(cls, canonical_type: str | None) -> NotificationCategory:
        """Mapeia o tipo canônico para a enum (nunca levanta)."""
        if not canonical_type:
            return cls.UNRECOGNIZED
        try:
            return cls(canonical_type)
        except ValueError:
            return cls.UNRECOGNIZED


@dataclass(frozen=True, slots=True)
class NotificationData:
    """Bloco `data` da notificação.

    Atributos:
        application_id: App Nylas dona do webhook
        grant_id: Conta/grant afetada (opcional)
        object: Entidade alterada (message, event, contact...), sem schema fixo
    """

    application_id: str | None = None
    grant_id: str | None = None
    object: Any = None


@dataclass(frozen=True, slots=True)
class Notification:
    """Notificação Nylas decodificada.

    `id` é chave de idempotência: a entrega é at-least-once e duplicatas
    são toleradas (não deduplicadas aqui).
    """

    id: str | None
    type: str | None
    canonical_type: str | None
    category: NotificationCategory
    specversion: str | None = None
    source: str | None = None
    time: int | None = None
    delivery_attempt: int = 1
    data: NotificationData = field(default_factory=NotificationData)

    @property
    def routable(self) -> bool:
        """False quando a notificação veio sem categoria."""
        return bool(self.canonical_type)

    def log_context(self) -> dict[str, Any]:
        """Campos mínimos para replay/debug (sem PII)."""
        return {
            "notification_id": self.id,
            "notification_type": self.type,
            "category": self.canonical_type,
            "delivery_attempt": self.delivery_attempt,
        }


@dataclass(frozen=True, slots=True)
class DeliveryContext:
    """Metadados de transporte de uma entrega.

    Atributos:
        path: Caminho de entrada (webhook|pubsub)
        delivery_id: messageId do Pub/Sub ou correlation_id do webhook
        publish_time: publishTime do Pub/Sub (quando houver)
        subscription: Assinatura Pub/Sub de origem (quando houver)
        attributes: Atributos da mensagem Pub/Sub
    """

    path: IntakePath
    delivery_id: str = ""
    publish_time: str | None = None
    subscription: str | None = None
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class DispatchOutcome:
    """Resultado do despacho.

    Atributos:
        category: Tipo canônico (None se ausente)
        handled: True se um handler específico tratou
        handler: Nome do handler executado (ou "default")
    """

    category: str | None
    handled: bool
    handler: str


@dataclass(frozen=True, slots=True)
class ProcessingResult:
    """Resultado do processamento de um documento decodificado."""

    notification: Notification | None
    outcome: DispatchOutcome | None
    malformed: bool = False
