"""Protocolo do destino de resumos de notificação."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from collections.abc import Mapping


class NotificationSinkProtocol(Protocol):
    """Contrato mínimo para receber resumos estruturados.

    Handlers chamam `emit` uma vez por grupo de campos reconhecido.
    Implementações não devem levantar exceção por conteúdo do resumo.
    """

    def emit(self, event: str, fields: Mapping[str, Any]) -> None: ...
