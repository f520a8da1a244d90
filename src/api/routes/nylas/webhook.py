"""Endpoints de webhook da Nylas.

Endpoints:
- GET /webhook/nylas: handshake de challenge
- POST /webhook/nylas: recebimento de notificações

Fluxo:
1. GET: Nylas envia ?challenge=<token>, respondemos o token em texto puro
2. POST: corpo bruto capturado, assinatura HMAC validada, notificação
   classificada e despachada

Segurança:
- Validação HMAC (X-Nylas-Signature) quando há secret e header
- Sem secret ou sem header: verificação pulada com warning (dev)
- JSON malformado é aceito (200) e logado: reenviar não corrige o payload
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse

from api.connectors.nylas.webhook.receive import (
    InvalidSignatureError,
    authenticate_webhook_request,
)
from api.connectors.nylas.webhook.verify import answer_challenge
from api.routes.nylas.body import capture_raw_body
from app.bootstrap import get_notification_use_case
from app.infra.secrets import resolve_webhook_secret
from app.observability import (
    get_correlation_id,
    record_signature_check,
    reset_correlation_id,
    set_correlation_id,
)
from app.protocols.models import DeliveryContext
from config.settings import get_base_settings, get_nylas_settings
from utils.errors import PayloadTooLargeError, RawBodyUnavailableError, SecretUnavailableError

logger = logging.getLogger(__name__)

router = APIRouter()

PROCESSING_FAILED = "Failed to process webhook"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.get("")
async def verify_webhook(request: Request) -> Response:
    """Handshake — devolve o challenge exatamente como recebido.

    Query params esperados:
    - challenge: token a ecoar (ausente = probe, responde vazio)

    Returns:
        200 text/plain com os bytes do token.
    """
    reply = answer_challenge(request.query_params.get("challenge"))

    logger.info(
        "webhook_challenge_answered" if reply.token_present else "webhook_challenge_missing",
        extra={
            "channel": "nylas",
            "state": reply.state.value,
            "challenge_length": len(reply.body),
        },
    )

    # Nylas compara byte a byte: sem charset extra, aspas ou newline
    return Response(
        content=reply.body,
        status_code=status.HTTP_200_OK,
        headers={"content-type": reply.media_type},
    )


@router.post("", response_model=None)
async def receive_webhook(request: Request) -> Response | dict[str, Any]:
    """Recebimento de notificações da Nylas.

    Returns:
        {"success": true} ou JSONResponse de erro (400/401/413/500).
    """
    token = set_correlation_id(request.headers.get("x-correlation-id"))

    try:
        settings = get_nylas_settings()

        try:
            raw_body = await capture_raw_body(request, settings.max_body_bytes)
        except PayloadTooLargeError as exc:
            logger.warning(
                "webhook_payload_too_large",
                extra={"channel": "nylas", "error": str(exc)},
            )
            return _error(status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, "Payload too large")

        try:
            secret = await resolve_webhook_secret(settings, get_base_settings().gcp_project)
        except SecretUnavailableError:
            return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, PROCESSING_FAILED)

        try:
            signature_result = authenticate_webhook_request(
                raw_body,
                request.headers,
                secret,
                settings.signature_header,
            )
        except RawBodyUnavailableError:
            record_signature_check("unavailable", get_correlation_id())
            logger.error(
                "webhook_raw_body_unavailable",
                extra={"channel": "nylas", "correlation_id": get_correlation_id()},
            )
            return _error(status.HTTP_400_BAD_REQUEST, "Raw body not available")
        except InvalidSignatureError as exc:
            record_signature_check("invalid", get_correlation_id())
            logger.warning(
                "webhook_signature_invalid",
                extra={
                    "channel": "nylas",
                    "correlation_id": get_correlation_id(),
                    "error": str(exc),
                },
            )
            return _error(status.HTTP_401_UNAUTHORIZED, "Invalid signature")

        record_signature_check(
            "skipped" if signature_result.skipped else "valid",
            get_correlation_id(),
        )
        logger.info(
            "webhook_received",
            extra={
                "channel": "nylas",
                "correlation_id": get_correlation_id(),
                "signature_valid": signature_result.valid,
                "signature_skipped": signature_result.skipped,
                "payload_size": len(raw_body or b""),
            },
        )

        delivery = DeliveryContext(path="webhook", delivery_id=get_correlation_id())
        try:
            get_notification_use_case().execute(raw_body or b"", delivery)
        except Exception:
            logger.exception(
                "webhook_processing_failed",
                extra={"channel": "nylas", "correlation_id": get_correlation_id()},
            )
            return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, PROCESSING_FAILED)

        return {"success": True}

    finally:
        reset_correlation_id(token)
