"""Sinks — destinos dos resumos de notificação."""

from app.infra.sinks.logging_sink import LoggingNotificationSink

__all__ = ["LoggingNotificationSink"]
