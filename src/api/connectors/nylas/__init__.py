"""Conector Nylas - adapter de borda para notificações da Nylas v3.

Responsabilidades:
- Webhook (challenge, assinatura HMAC)
- Envelope de push do Pub/Sub (base64 -> texto)
"""

from .envelope import (
    NotificationEnvelope,
    PubSubMessage,
    decode_envelope_data,
    encode_envelope_data,
    parse_envelope,
    unwrap_envelope,
)
from .signature import SignatureResult, compute_signature, verify_nylas_signature

__all__ = [
    "NotificationEnvelope",
    "PubSubMessage",
    "SignatureResult",
    "compute_signature",
    "decode_envelope_data",
    "encode_envelope_data",
    "parse_envelope",
    "unwrap_envelope",
    "verify_nylas_signature",
]
