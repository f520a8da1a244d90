"""Endpoint de push do Google Cloud Pub/Sub para notificações Nylas.

Endpoint:
- POST /pubsub/nylas: envelope de push com `message.data` em base64

Respostas:
- 204: entrega confirmada (inclusive quando o JSON interno é malformado)
- 400: envelope inválido (sem `message.data` ou base64 inválido)
- 500: falha inesperada (Pub/Sub reentrega)

Sem verificação de assinatura: o transporte Pub/Sub é a fronteira de
confiança deste caminho.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse

from api.connectors.nylas.envelope import parse_envelope, unwrap_envelope
from api.routes.nylas.body import capture_raw_body
from app.bootstrap import get_notification_use_case
from app.observability import get_correlation_id, reset_correlation_id, set_correlation_id
from app.protocols.models import DeliveryContext
from config.settings import get_nylas_settings
from utils.errors import DecodeError, PayloadTooLargeError

logger = logging.getLogger(__name__)

router = APIRouter()

PROCESSING_FAILED = "Failed to process Pub/Sub message"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post("", response_model=None)
async def receive_pubsub_push(request: Request) -> Response:
    """Recebe push do Pub/Sub, desembrulha e despacha a notificação."""
    token = set_correlation_id(request.headers.get("x-correlation-id"))

    try:
        settings = get_nylas_settings()

        try:
            raw_body = await capture_raw_body(request, settings.max_body_bytes)
            envelope = parse_envelope(raw_body)
            message, decoded = unwrap_envelope(envelope)
        except PayloadTooLargeError as exc:
            logger.warning(
                "pubsub_payload_too_large",
                extra={"channel": "nylas", "error": str(exc)},
            )
            return _error(status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, "Payload too large")
        except DecodeError as exc:
            logger.error(
                "pubsub_envelope_invalid",
                extra={"channel": "nylas", "error": str(exc)},
            )
            return _error(status.HTTP_400_BAD_REQUEST, "Invalid message format")

        message_token = set_correlation_id(
            request.headers.get("x-correlation-id"),
            message.message_id,
            get_correlation_id(),
        )
        try:
            logger.info(
                "pubsub_message_received",
                extra={
                    "channel": "nylas",
                    "message_id": message.message_id,
                    "publish_time": message.publish_time,
                    "subscription": envelope.subscription,
                    "attributes": message.attributes or {},
                    "payload_size": len(decoded),
                },
            )
            delivery = DeliveryContext(
                path="pubsub",
                delivery_id=message.message_id,
                publish_time=message.publish_time,
                subscription=envelope.subscription,
                attributes=dict(message.attributes or {}),
            )
            try:
                result = get_notification_use_case().execute(decoded, delivery)
            except Exception:
                logger.exception(
                    "pubsub_processing_failed",
                    extra={"channel": "nylas", "message_id": message.message_id},
                )
                return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, PROCESSING_FAILED)

            logger.info(
                "pubsub_message_acknowledged",
                extra={
                    "channel": "nylas",
                    "message_id": message.message_id,
                    "malformed": result.malformed,
                },
            )
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        finally:
            reset_correlation_id(message_token)

    finally:
        reset_correlation_id(token)
