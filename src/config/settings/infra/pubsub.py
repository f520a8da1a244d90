"""Settings do Pub/Sub.

Configurações da assinatura Google Cloud Pub/Sub que retransmite
as notificações Nylas (push para /pubsub/nylas ou pull manual).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class PubSubSettings:
    """Configurações do Pub/Sub.

    Attributes:
        project_id: Projeto GCP dono do tópico
        topic: Tópico onde a Nylas publica notificações
        push_subscription: Assinatura push apontando para o serviço
        pull_subscription: Assinatura pull usada para inspeção manual
        push_endpoint: URL pública de /pubsub/nylas
        ack_deadline_seconds: Prazo de ack da assinatura push
        pull_max_messages: Limite de mensagens por pull manual
    """

    project_id: str = ""
    topic: str = "nylas-notifications"
    push_subscription: str = "nylas-push-subscription"
    pull_subscription: str = "nylas-subscriber"
    push_endpoint: str = ""
    ack_deadline_seconds: int = 60
    pull_max_messages: int = 10

    def validate(self) -> list[str]:
        """Valida configurações do Pub/Sub.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []
        # Pub/Sub aceita ack deadline entre 10s e 600s
        if not 10 <= self.ack_deadline_seconds <= 600:
            errors.append("PUBSUB_ACK_DEADLINE_SECONDS deve estar entre 10 e 600")
        if self.pull_max_messages <= 0:
            errors.append("PUBSUB_PULL_MAX_MESSAGES deve ser > 0")
        return errors


def _load_pubsub_from_env() -> PubSubSettings:
    """Carrega PubSubSettings de variáveis de ambiente."""
    return PubSubSettings(
        project_id=os.getenv(
            "PUBSUB_PROJECT_ID", os.getenv("GCP_PROJECT", os.getenv("GOOGLE_CLOUD_PROJECT", ""))
        ),
        topic=os.getenv("PUBSUB_TOPIC", "nylas-notifications"),
        push_subscription=os.getenv("PUBSUB_PUSH_SUBSCRIPTION", "nylas-push-subscription"),
        pull_subscription=os.getenv("PUBSUB_PULL_SUBSCRIPTION", "nylas-subscriber"),
        push_endpoint=os.getenv("PUBSUB_PUSH_ENDPOINT", ""),
        ack_deadline_seconds=int(os.getenv("PUBSUB_ACK_DEADLINE_SECONDS", "60")),
        pull_max_messages=int(os.getenv("PUBSUB_PULL_MAX_MESSAGES", "10")),
    )


@lru_cache(maxsize=1)
def get_pubsub_settings() -> PubSubSettings:
    """Retorna instância cacheada de PubSubSettings."""
    return _load_pubsub_from_env()
