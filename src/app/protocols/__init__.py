"""Protocolos e contratos do core da aplicação."""

from .models import (
    DeliveryContext,
    DispatchOutcome,
    IntakePath,
    Notification,
    NotificationCategory,
    NotificationData,
    ProcessingResult,
)
from .notification_sink import NotificationSinkProtocol

__all__ = [
    "DeliveryContext",
    "DispatchOutcome",
    "IntakePath",
    "Notification",
    "NotificationCategory",
    "NotificationData",
    "NotificationSinkProtocol",
    "ProcessingResult",
]
