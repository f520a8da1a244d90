"""Codec do envelope de push do Google Cloud Pub/Sub.

Formato recebido em /pubsub/nylas:
    {
        "message": {
            "data": "<base64>",
            "messageId": "...",
            "publishTime": "...",
            "attributes": {"k": "v"}
        },
        "subscription": "projects/<p>/subscriptions/<s>"
    }

O codec só desembrulha: `data` vira texto UTF-8. Não exige que o texto
seja JSON; o parse fica com o classificador.
"""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from utils.errors import DecodeError


class PubSubMessage(BaseModel):
    """Mensagem Pub/Sub dentro do envelope de push."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    data: str | None = Field(default=None, description="Payload em base64 (alfabeto padrão).")
    message_id: str = Field(default="", alias="messageId")
    publish_time: str | None = Field(default=None, alias="publishTime")
    attributes: dict[str, str] | None = None

    @field_validator("message_id", mode="before")
    @classmethod
    def _coerce_message_id(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("publish_time", mode="before")
    @classmethod
    def _coerce_publish_time(cls, value: Any) -> str | None:
        return None if value is None else str(value)

    @field_validator("attributes", mode="before")
    @classmethod
    def _coerce_attributes(cls, value: Any) -> dict[str, str] | None:
        # Metadados não invalidam a entrega; só `data` decide o 400.
        if not isinstance(value, dict):
            return None
        return {str(k): str(v) for k, v in value.items() if v is not None}


class NotificationEnvelope(BaseModel):
    """Envelope de push: mensagem + assinatura de origem."""

    model_config = ConfigDict(extra="ignore")

    message: PubSubMessage | None = None
    subscription: str = ""

    @field_validator("subscription", mode="before")
    @classmethod
    def _coerce_subscription(cls, value: Any) -> str:
        return "" if value is None else str(value)


def parse_envelope(raw_body: bytes | str | None) -> NotificationEnvelope:
    """Parseia o corpo do push em NotificationEnvelope.

    Raises:
        DecodeError: Corpo ausente, JSON inválido ou estrutura incompatível.
    """
    if not raw_body:
        raise DecodeError("empty_body")
    try:
        document = json.loads(raw_body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError("invalid_envelope_json") from exc
    if not isinstance(document, dict):
        raise DecodeError("envelope_not_object")
    try:
        return NotificationEnvelope.model_validate(document)
    except ValidationError as exc:
        raise DecodeError("invalid_envelope_shape") from exc


def decode_envelope_data(envelope: NotificationEnvelope) -> str:
    """Decodifica `message.data` (base64 padrão) para texto UTF-8.

    Bytes UTF-8 inválidos viram U+FFFD; o texto segue para o classificador,
    que trata o documento como malformado se não for JSON.

    Raises:
        DecodeError: `message.data` ausente/vazio ou base64 inválido.
    """
    message = envelope.message
    if message is None or not message.data:
        raise DecodeError("missing_message_data")
    try:
        decoded = base64.b64decode(message.data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError("invalid_base64") from exc
    return decoded.decode("utf-8", errors="replace")


def encode_envelope_data(text: str) -> str:
    """Operação inversa de decode_envelope_data (UTF-8 + base64 padrão)."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def unwrap_envelope(envelope: NotificationEnvelope) -> tuple[PubSubMessage, str]:
    """Retorna a mensagem validada e o texto decodificado.

    Raises:
        DecodeError: Mesmas condições de decode_envelope_data.
    """
    decoded = decode_envelope_data(envelope)
    message = envelope.message
    if message is None:
        raise DecodeError("missing_message")
    return message, decoded
