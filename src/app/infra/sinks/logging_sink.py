"""Sink de resumos via logging estruturado (comportamento padrão)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

# Atributos reservados de LogRecord não podem ir em `extra`
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime"}

PAYLOAD_EVENTS = frozenset({"notification_full_payload"})


class LoggingNotificationSink:
    """Emite cada grupo de campos como um log estruturado.

    Eventos com o objeto completo (PAYLOAD_EVENTS) usam `payload_level`,
    por padrão DEBUG; os demais usam `level`.

    Args:
        target: Logger de destino (default: logger do módulo)
        level: Nível dos resumos
        payload_level: Nível dos eventos com objeto completo
    """

    def __init__(
        self,
        target: logging.Logger | None = None,
        level: int = logging.INFO,
        payload_level: int = logging.DEBUG,
    ) -> None:
        self._logger = target or logger
        self._level = level
        self._payload_level = payload_level

    def emit(self, event: str, fields: Mapping[str, Any]) -> None:
        level = self._payload_level if event in PAYLOAD_EVENTS else self._level
        if not self._logger.isEnabledFor(level):
            return
        self._logger.log(level, event, extra=_safe_extra(fields))


def _safe_extra(fields: Mapping[str, Any]) -> dict[str, Any]:
    return {
        (f"field_{key}" if key in _RESERVED_ATTRS else key): value
        for key, value in fields.items()
    }
