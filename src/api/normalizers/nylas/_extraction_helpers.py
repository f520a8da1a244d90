"""Helpers de extração tolerante de campos do objeto Nylas.

O objeto de `data.object` não tem schema garantido. Cada helper devolve
um placeholder quando o campo falta ou tem tipo inesperado; nenhum levanta.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime
from typing import Any

UNKNOWN = "unknown"
UNNAMED = "unnamed"
BODY_PREVIEW_LIMIT = 100


def as_mapping(value: object) -> dict[str, Any]:
    """Retorna o valor se for dict, senão dict vazio."""
    return value if isinstance(value, dict) else {}


def get_text(obj: dict[str, Any], key: str, default: str | None = None) -> str | None:
    """Retorna campo textual não vazio ou default."""
    value = obj.get(key)
    if value is None or value == "" or isinstance(value, (dict, list)):
        return default
    return str(value)


def first_participant(obj: dict[str, Any], key: str) -> tuple[str, str]:
    """Extrai (email, nome) do primeiro participante de uma lista (ex: from)."""
    participants = obj.get(key)
    if not isinstance(participants, list) or not participants:
        return UNKNOWN, UNNAMED
    first = as_mapping(participants[0])
    return get_text(first, "email", UNKNOWN) or UNKNOWN, get_text(first, "name", UNNAMED) or UNNAMED


def participant_emails(obj: dict[str, Any], key: str) -> str:
    """Junta os emails de uma lista de participantes (ex: to, cc)."""
    participants = obj.get(key)
    if not isinstance(participants, list):
        return UNKNOWN
    emails = [
        email
        for email in (get_text(as_mapping(p), "email") for p in participants)
        if email
    ]
    return ", ".join(emails) or UNKNOWN


def string_list(obj: dict[str, Any], key: str) -> list[str]:
    """Retorna lista de strings (ex: folders); ignora itens não textuais."""
    values = obj.get(key)
    if not isinstance(values, list):
        return []
    return [str(v) for v in values if isinstance(v, (str, int)) and not isinstance(v, bool)]


def count_items(obj: dict[str, Any], key: str) -> int:
    """Quantidade de itens de uma lista (0 se ausente)."""
    values = obj.get(key)
    return len(values) if isinstance(values, list) else 0


def epoch_to_iso(value: object) -> str | None:
    """Converte epoch em segundos para ISO-8601 UTC com milissegundos.

    Ex.: 1700000000 -> "2023-11-14T22:13:20.000Z". Valores inválidos
    ou fora do intervalo representável retornam None.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    try:
        instant = datetime.fromtimestamp(value, tz=UTC)
    except (OverflowError, OSError, ValueError):
        return None
    return instant.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def body_preview(obj: dict[str, Any], limit: int = BODY_PREVIEW_LIMIT) -> str | None:
    """Primeiros `limit` caracteres do corpo (None se ausente)."""
    body = obj.get("body")
    if not isinstance(body, str) or not body:
        return None
    if len(body) <= limit:
        return body
    return f"{body[:limit]}..."
