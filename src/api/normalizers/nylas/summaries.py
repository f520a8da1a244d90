"""Resumos por categoria do objeto alterado.

Cada summarizer devolve grupos (evento, campos) para o sink de
observabilidade. Campos ausentes degradam para placeholders.
"""

from __future__ import annotations

from typing import Any

from ._extraction_helpers import (
    UNKNOWN,
    as_mapping,
    body_preview,
    count_items,
    epoch_to_iso,
    first_participant,
    get_text,
    participant_emails,
    string_list,
)

SummaryGroup = tuple[str, dict[str, Any]]


def summarize_message_created(obj: object) -> list[SummaryGroup]:
    """Remetente, destinatários, assunto e data de uma mensagem nova."""
    message = as_mapping(obj)
    sender_email, sender_name = first_participant(message, "from")
    groups: list[SummaryGroup] = [
        (
            "message_created",
            {
                "message_id": get_text(message, "id", UNKNOWN),
                "from_email": sender_email,
                "from_name": sender_name,
                "to": participant_emails(message, "to"),
                "subject": get_text(message, "subject", "No subject"),
                "date": epoch_to_iso(message.get("date")) or UNKNOWN,
            },
        )
    ]
    groups.extend(_body_preview_group(message))
    return groups


def summarize_message_updated(obj: object) -> list[SummaryGroup]:
    """Thread, pastas e estado lido/não lido de uma mensagem alterada."""
    message = as_mapping(obj)
    folders = string_list(message, "folders")
    fields: dict[str, Any] = {
        "message_id": get_text(message, "id", UNKNOWN),
        "thread_id": get_text(message, "thread_id", UNKNOWN),
        "folders": ", ".join(folders) or "none",
        "unread_status": "Unread" if message.get("unread") else "Read",
    }
    subject = get_text(message, "subject")
    if subject is not None:
        fields["subject"] = subject
    if isinstance(message.get("from"), list) and message["from"]:
        fields["from_email"], fields["from_name"] = first_participant(message, "from")

    groups: list[SummaryGroup] = [("message_updated", fields)]
    groups.extend(_body_preview_group(message))
    return groups


def summarize_event_created(obj: object) -> list[SummaryGroup]:
    """Título, calendário, janela de horário e participantes de um evento."""
    event = as_mapping(obj)
    fields: dict[str, Any] = {
        "event_id": get_text(event, "id", UNKNOWN),
        "title": get_text(event, "title", "Untitled event"),
        "calendar_id": get_text(event, "calendar_id", UNKNOWN),
        "participants": count_items(event, "participants"),
    }
    when = event.get("when")
    if isinstance(when, dict):
        fields["start"] = epoch_to_iso(when.get("start_time")) or UNKNOWN
        fields["end"] = epoch_to_iso(when.get("end_time")) or UNKNOWN
    return [("event_created", fields)]


def _body_preview_group(message: dict[str, Any]) -> list[SummaryGroup]:
    preview = body_preview(message)
    if preview is None:
        return []
    return [
        (
            "message_body_preview",
            {"message_id": get_text(message, "id", UNKNOWN), "preview": preview},
        )
    ]
