"""Classificador de notificações Nylas.

Converte o texto decodificado (corpo do webhook ou `data` do Pub/Sub) em
Notification, canonicalizando o tipo. O pipeline de transformação da Nylas
acrescenta `.transformed` ao tipo (ex: message.created.transformed); o tipo
canônico é o texto anterior à primeira ocorrência do marcador.
"""

from __future__ import annotations

import json
import math
from typing import Any

from app.protocols.models import Notification, NotificationCategory, NotificationData
from utils.errors import MalformedNotificationError

TRANSFORMATION_MARKER = ".transformed"


def canonical_category(raw_type: object) -> str | None:
    """Remove o marcador de transformação do tipo.

    Exemplos:
        message.created.transformed -> message.created
        message.created.transformedV2 -> message.created
        folder.deleted -> folder.deleted
        "" / None / não-string -> None
    """
    if not isinstance(raw_type, str):
        return None
    canonical = raw_type.strip().split(TRANSFORMATION_MARKER, 1)[0].strip()
    return canonical or None


def classify_notification(document: str | bytes) -> Notification:
    """Parseia e classifica uma notificação.

    Args:
        document: Texto JSON (ou bytes UTF-8) da notificação

    Raises:
        MalformedNotificationError: Documento não é JSON de objeto.

    Returns:
        Notification com categoria canônica (UNRECOGNIZED se desconhecida).
    """
    raw_text = _as_text(document)
    try:
        payload = json.loads(raw_text)
    except json.JSONDecodeError as exc:
        raise MalformedNotificationError("invalid_json", raw_text) from exc

    if not isinstance(payload, dict):
        raise MalformedNotificationError("payload_not_object", raw_text)

    return build_notification(payload)


def build_notification(payload: dict[str, Any]) -> Notification:
    """Monta Notification a partir de um dict já parseado (sem validar schema)."""
    raw_type = payload.get("type")
    canonical = canonical_category(raw_type)
    return Notification(
        id=_optional_str(payload.get("id")),
        type=raw_type if isinstance(raw_type, str) else None,
        canonical_type=canonical,
        category=NotificationCategory.from_type(canonical),
        specversion=_optional_str(payload.get("specversion")),
        source=_optional_str(payload.get("source")),
        time=_optional_int(payload.get("time")),
        delivery_attempt=_delivery_attempt(payload.get("webhook_delivery_attempt")),
        data=_build_data(payload.get("data")),
    )


def _as_text(document: str | bytes) -> str:
    if isinstance(document, str):
        return document
    try:
        return document.decode("utf-8")
    except UnicodeDecodeError as exc:
        text = document.decode("utf-8", errors="replace")
        raise MalformedNotificationError("invalid_utf8", text) from exc


def _build_data(data: object) -> NotificationData:
    if not isinstance(data, dict):
        return NotificationData()
    return NotificationData(
        application_id=_optional_str(data.get("application_id")),
        grant_id=_optional_str(data.get("grant_id")),
        object=data.get("object"),
    )


def _optional_str(value: object) -> str | None:
    if value is None or isinstance(value, (dict, list)):
        return None
    return str(value)


def _optional_int(value: object) -> int | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return int(value)


def _delivery_attempt(value: object) -> int:
    attempt = _optional_int(value)
    if attempt is None or attempt < 1:
        return 1
    return attempt
