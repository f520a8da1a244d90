"""Captura do corpo bruto do request.

O corpo precisa ser lido byte a byte ANTES de qualquer parse: a
assinatura HMAC é calculada sobre a sequência original.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from utils.errors import PayloadTooLargeError

if TYPE_CHECKING:
    from starlette.requests import Request

logger = logging.getLogger(__name__)


async def capture_raw_body(request: Request, max_bytes: int) -> bytes | None:
    """Lê o corpo bruto respeitando o limite de tamanho.

    Returns:
        Bytes do corpo, ou None se o stream já foi consumido sem cache
        (ex: middleware que leu o corpo antes da rota).

    Raises:
        PayloadTooLargeError: Content-Length declarado ou corpo lido acima do limite.
    """
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > max_bytes:
        raise PayloadTooLargeError(f"declared={declared}")

    chunks: list[bytes] = []
    received = 0
    try:
        async for chunk in request.stream():
            received += len(chunk)
            # Sem Content-Length (chunked) o limite vale durante a leitura.
            if received > max_bytes:
                raise PayloadTooLargeError(f"received>{max_bytes}")
            chunks.append(chunk)
    except RuntimeError as exc:
        logger.warning(
            "raw_body_unavailable",
            extra={"path": request.url.path, "error": str(exc)},
        )
        return None
    return b"".join(chunks)
