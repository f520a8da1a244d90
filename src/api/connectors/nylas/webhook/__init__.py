"""Webhook Nylas: challenge, assinatura e autenticação do POST."""

from ..signature import SignatureResult, verify_nylas_signature
from .receive import (
    InvalidSignatureError,
    WebhookRequestError,
    authenticate_webhook_request,
)
from .verify import ChallengeReply, ChallengeState, answer_challenge

__all__ = [
    "ChallengeReply",
    "ChallengeState",
    "InvalidSignatureError",
    "SignatureResult",
    "WebhookRequestError",
    "answer_challenge",
    "authenticate_webhook_request",
    "verify_nylas_signature",
]
