"""Verificação HMAC-SHA256 do header X-Nylas-Signature.

A assinatura é calculada sobre os bytes EXATOS do corpo recebido.
Re-serializar um JSON já parseado não reproduz a sequência original
(espaços, ordem de chaves, escapes) e gera falso negativo.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from config.logging import log_check_skipped
from config.settings import NYLAS_SIGNATURE_HEADER
from utils.errors import RawBodyUnavailableError

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SignatureResult:
    """Resultado da verificação de assinatura.

    Attributes:
        valid: True se a assinatura confere ou se a verificação foi pulada
        skipped: True se faltou secret ou header (modo permissivo)
        error: Motivo da falha/bypass (sem PII)
    """

    valid: bool
    skipped: bool = False
    error: str | None = None


def compute_signature(raw_body: bytes, secret: str) -> str:
    """Retorna o HMAC-SHA256 hex (minúsculo) de raw_body com a chave secret."""
    return hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).hexdigest()


def get_header(headers: Mapping[str, str], name: str) -> str | None:
    """Busca header ignorando caixa do nome (valor preservado)."""
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return None


def verify_nylas_signature(
    raw_body: bytes | None,
    headers: Mapping[str, str],
    secret: str | None,
    header_name: str = NYLAS_SIGNATURE_HEADER,
) -> SignatureResult:
    """Verifica a assinatura do webhook.

    Sem secret configurado ou sem header de assinatura, a verificação é
    pulada (valid=True, skipped=True) e um warning é emitido.

    Args:
        raw_body: Corpo bruto do request (None se não capturável)
        headers: Headers recebidos
        secret: Secret do webhook
        header_name: Nome do header de assinatura

    Raises:
        RawBodyUnavailableError: Secret e assinatura presentes mas sem corpo bruto.

    Returns:
        SignatureResult. Divergência nunca levanta exceção.
    """
    signature = get_header(headers, header_name)

    if not secret or not signature:
        reason = "missing_secret" if not secret else "missing_signature_header"
        log_check_skipped(
            logger,
            "signature_verifier",
            reason,
            secret_available=bool(secret),
            signature_present=bool(signature),
        )
        return SignatureResult(valid=True, skipped=True, error=reason)

    if raw_body is None:
        raise RawBodyUnavailableError("raw_body_unavailable")

    computed = compute_signature(raw_body, secret)
    # Comparação exata e sensível a caixa sobre a codificação hex
    if not hmac.compare_digest(computed.encode("ascii"), signature.encode("utf-8")):
        logger.debug(
            "signature_mismatch",
            extra={"payload_size": len(raw_body), "signature_length": len(signature)},
        )
        return SignatureResult(valid=False, error="signature_mismatch")

    return SignatureResult(valid=True)
