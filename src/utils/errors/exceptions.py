"""Exceções de domínio para falhas na entrada de notificações.

Cada classe carrega a semântica HTTP esperada na borda:
- Erros de cliente (400): retry do provider não ajuda
- Erros de infraestrutura (500): retry pode ajudar
"""

from __future__ import annotations


class NotificationIntakeError(ValueError):
    """Base para falhas de request/payload (erro do cliente)."""


class DecodeError(NotificationIntakeError):
    """Envelope Pub/Sub sem `message.data` ou com base64 inválido."""


class RawBodyUnavailableError(NotificationIntakeError):
    """Verificação de assinatura exigida sem acesso ao corpo bruto."""


class PayloadTooLargeError(NotificationIntakeError):
    """Corpo do request acima do limite configurado."""


class MalformedNotificationError(NotificationIntakeError):
    """Texto decodificado não é um documento JSON de notificação.

    Attributes:
        raw_text: Texto original, preservado para diagnóstico.
    """

    def __init__(self, reason: str, raw_text: str) -> None:
        super().__init__(reason)
        self.raw_text = raw_text


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class SecretUnavailableError(InfrastructureError):
    """Secret do webhook configurado mas não pôde ser carregado."""
