"""Use cases específicos da Nylas."""

from .process_notification import ProcessNotificationUseCase

__all__ = [
    "ProcessNotificationUseCase",
]
