"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    DecodeError,
    InfrastructureError,
    MalformedNotificationError,
    NotificationIntakeError,
    PayloadTooLargeError,
    RawBodyUnavailableError,
    SecretUnavailableError,
)

__all__ = [
    "DecodeError",
    "InfrastructureError",
    "MalformedNotificationError",
    "NotificationIntakeError",
    "PayloadTooLargeError",
    "RawBodyUnavailableError",
    "SecretUnavailableError",
]
