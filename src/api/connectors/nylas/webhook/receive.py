"""Autenticação inicial do POST do webhook (sem PII)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from config.settings import NYLAS_SIGNATURE_HEADER

from ..signature import SignatureResult, verify_nylas_signature

if TYPE_CHECKING:
    from collections.abc import Mapping


class WebhookRequestError(ValueError):
    """Erro base para falhas de webhook."""


class InvalidSignatureError(WebhookRequestError):
    """Assinatura calculada diverge da recebida."""


def authenticate_webhook_request(
    raw_body: bytes | None,
    headers: Mapping[str, str],
    secret: str | None,
    header_name: str = NYLAS_SIGNATURE_HEADER,
) -> SignatureResult:
    """Valida a assinatura do webhook antes de qualquer parse.

    Args:
        raw_body: Corpo bruto do request, capturado antes de parse
        headers: Headers recebidos
        secret: Secret do webhook (None = verificação pulada)
        header_name: Header que carrega a assinatura

    Raises:
        InvalidSignatureError: Se assinatura for inválida
        RawBodyUnavailableError: Se o corpo bruto não pôde ser recuperado

    Returns:
        SignatureResult (valid ou skipped)
    """
    signature_result = verify_nylas_signature(raw_body, headers, secret, header_name)
    if not signature_result.valid:
        raise InvalidSignatureError(signature_result.error or "invalid_signature")
    return signature_result
